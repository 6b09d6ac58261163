"""User entity."""

from typing import Literal

from pydantic import Field

from erp_console.domain.models.base import Entity

UserRole = Literal["admin", "user"]


class User(Entity):
    name: str
    email: str
    password_hash: str = Field(repr=False)
    role: UserRole = "user"
    is_active: bool = True

    def __repr__(self):
        return f"<User {self.email}>"
