"""FastAPI dependency: bearer token auth."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from erp_console.application.services.auth_service import decode_access_token
from erp_console.bootstrap import Container
from erp_console.core.exceptions import ForbiddenException, UnauthorizedException
from erp_console.domain.models.user import User
from erp_console.interfaces.deps import get_container

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    container: Container = Depends(get_container),
) -> User:
    """Resolve the user behind the bearer token."""
    if credentials is None:
        raise UnauthorizedException("Missing bearer token")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedException("Invalid or expired token")

    user_id = payload.get("sub")
    if user_id is None:
        raise UnauthorizedException("Invalid token")

    user = container.users.get_by_id(user_id)
    if user is None or not user.is_active:
        raise UnauthorizedException("User not found or inactive")

    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != "admin":
        raise ForbiddenException("Only administrators can access this resource")
    return user
