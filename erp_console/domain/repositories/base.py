"""
Base Repository Interface.
Defines the standard contract for collection-backed data access.
"""

from typing import Any, List, Optional, Protocol, TypeVar

from erp_console.domain.schemas.search import PaginatedResponse, SearchParams

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations."""

    def get_by_id(self, id: str) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    def list_all(self) -> List[T]:
        """Snapshot of the whole collection."""
        ...

    def create(self, obj_in: Any) -> T:
        """Validate and store a new entity."""
        ...

    def update(self, entity: T) -> T:
        """Re-validate and replace an existing entity."""
        ...

    def search(self, params: SearchParams) -> PaginatedResponse[T]:
        """Filter, sort and paginate the collection."""
        ...


class SoftDeleteRepository(BaseRepository[T], Protocol[T]):
    """Entities that are deactivated instead of removed."""

    def soft_delete(self, id: str) -> bool:
        """Flip ``is_active`` off; False when the id is unknown."""
        ...


class HardDeleteRepository(BaseRepository[T], Protocol[T]):
    """Entities that are removed from the collection."""

    def delete(self, id: str) -> bool:
        """Remove the entity; False when the id is unknown."""
        ...
