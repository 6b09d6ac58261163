"""
User Repository Interface.
"""

from typing import Optional, Protocol

from erp_console.domain.models.user import User
from erp_console.domain.repositories.base import SoftDeleteRepository


class UserRepository(SoftDeleteRepository[User], Protocol):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        ...
