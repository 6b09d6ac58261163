"""
Collection-backed User repository.
"""

from typing import ClassVar, Iterable, Optional

from erp_console.core.exceptions import ConflictException
from erp_console.core.search import sortable_fields
from erp_console.domain.models.user import User
from erp_console.domain.repositories.user_repository import UserRepository
from erp_console.infrastructure.repositories.base_repository import CollectionRepository, SoftDeleteMixin
from erp_console.infrastructure.storage import LocalStorage


class CollectionUserRepository(SoftDeleteMixin, CollectionRepository[User], UserRepository):
    """User repository implementation."""

    storage_key: ClassVar[str] = "users"
    id_prefix: ClassVar[str] = "user"
    entity_name: ClassVar[str] = "user"
    sortable = sortable_fields("name", "email", "role", "created_at")

    def __init__(self, storage: LocalStorage, initial: Iterable[dict] = ()):
        super().__init__(storage, User, initial)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((user for user in self._items if user.email == email), None)

    def _check(self, entity: User) -> None:
        existing = self.get_by_email(entity.email)
        if existing is not None and existing.id != entity.id:
            raise ConflictException("Email already registered", {"email": entity.email})
