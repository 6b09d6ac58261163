"""Pydantic schemas for User and Auth."""

from datetime import datetime
from typing import Optional

from erp_console.domain.models.base import CamelModel
from erp_console.domain.models.user import UserRole


class RegisterRequest(CamelModel):
    """Self-service sign-up; always creates a regular user."""

    name: str
    email: str
    password: str


class UserCreate(CamelModel):
    name: str
    email: str
    password: str
    role: UserRole = "user"


class UserUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None


class UserRead(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LoginRequest(CamelModel):
    email: str
    password: str


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class SessionState(CamelModel):
    user: Optional[UserRead] = None
    token: Optional[str] = None
    is_authenticated: bool = False
    error: Optional[str] = None
