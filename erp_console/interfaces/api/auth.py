"""Auth API routes: login, logout, register, session and user management."""

from fastapi import APIRouter, Depends, status

from erp_console.application.services.auth_service import AuthService
from erp_console.core.exceptions import EntityNotFoundException, UnauthorizedException
from erp_console.domain.models.user import User
from erp_console.domain.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    SessionState,
    TokenResponse,
    UserCreate,
    UserRead,
    UserUpdate,
)
from erp_console.interfaces.api.deps import get_current_user, require_admin
from erp_console.interfaces.deps import get_auth_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    if not await auth.login(body.email, body.password):
        raise UnauthorizedException("Invalid email or password")
    return TokenResponse(access_token=auth.state.token, user=auth.state.user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(auth: AuthService = Depends(get_auth_service), user: User = Depends(get_current_user)):
    """End the console session.

    The session (``currentUser`` and ``token``) is shared by the whole process,
    as the console is single-tenant, so this logs out every client at once.
    Issued tokens stay valid until they expire.
    """
    auth.logout()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    """Public sign-up; the account is always created with the ``user`` role."""
    data = UserCreate(name=body.name, email=body.email, password=body.password, role="user")
    return UserRead.model_validate(await auth.register(data))


@router.get("/me", response_model=UserRead)
def get_me(user: User = Depends(get_current_user)):
    return UserRead.model_validate(user)


@router.get("/session", response_model=SessionState)
def get_session(auth: AuthService = Depends(get_auth_service)):
    """Session as restored from storage at startup or set by the last login."""
    return auth.state


@router.get("/users", response_model=list[UserRead])
def list_users(auth: AuthService = Depends(get_auth_service), admin: User = Depends(require_admin)):
    return [UserRead.model_validate(user) for user in auth.get_users()]


@router.post("/users", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    auth: AuthService = Depends(get_auth_service),
    admin: User = Depends(require_admin),
):
    """Create an account with any role, administrators included."""
    return UserRead.model_validate(await auth.register(body))


@router.get("/users/{user_id}", response_model=UserRead)
def get_user(user_id: str, auth: AuthService = Depends(get_auth_service), admin: User = Depends(require_admin)):
    user = auth.get_user_by_id(user_id)
    if user is None:
        raise EntityNotFoundException("User not found", {"id": user_id})
    return UserRead.model_validate(user)


@router.put("/users/{user_id}", response_model=UserRead)
def update_user(
    user_id: str,
    body: UserUpdate,
    auth: AuthService = Depends(get_auth_service),
    admin: User = Depends(require_admin),
):
    return UserRead.model_validate(auth.update_user(user_id, body))


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, auth: AuthService = Depends(get_auth_service), admin: User = Depends(require_admin)):
    """Deactivate a user; the logged-in user cannot be removed."""
    if not auth.delete_user(user_id, requester_id=admin.id):
        raise EntityNotFoundException("User not found", {"id": user_id})
