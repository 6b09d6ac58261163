"""Auth service: password hashing, JWT tokens and the persisted login session."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from erp_console.config import get_settings
from erp_console.core.exceptions import BusinessRuleViolationException, ConflictException, EntityNotFoundException
from erp_console.domain.models.user import User
from erp_console.domain.repositories.user_repository import UserRepository
from erp_console.domain.schemas.auth import SessionState, UserCreate, UserRead, UserUpdate
from erp_console.infrastructure.storage import LocalStorage

logger = structlog.get_logger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

CURRENT_USER_KEY = "currentUser"
TOKEN_KEY = "token"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


class AuthService:
    """Login session of the console, persisted as the ``currentUser`` and ``token`` records."""

    def __init__(self, users: UserRepository, storage: LocalStorage):
        self.users = users
        self.storage = storage
        self.state = SessionState()

    @property
    def current_user(self) -> Optional[UserRead]:
        return self.state.user

    async def login(self, email: str, password: str) -> bool:
        await asyncio.sleep(get_settings().LOGIN_DELAY_SECONDS)

        user = self.users.get_by_email(email)
        if user is None or not user.is_active or not verify_password(password, user.password_hash):
            logger.warning("login_failed", email=email)
            self.state = SessionState(error="Invalid email or password")
            return False

        token = create_access_token({"sub": user.id, "email": user.email, "role": user.role})
        profile = UserRead.model_validate(user)
        self.storage.set_item(CURRENT_USER_KEY, profile.model_dump_json(by_alias=True))
        self.storage.set_item(TOKEN_KEY, token)
        self.state = SessionState(user=profile, token=token, is_authenticated=True)

        logger.info("login_succeeded", user_id=user.id)
        return True

    def logout(self) -> None:
        user_id = self.state.user.id if self.state.user else None
        self._clear()
        logger.info("logged_out", user_id=user_id)

    def _clear(self) -> None:
        self.storage.remove_item(CURRENT_USER_KEY)
        self.storage.remove_item(TOKEN_KEY)
        self.state = SessionState()

    async def register(self, data: UserCreate) -> User:
        await asyncio.sleep(get_settings().LOGIN_DELAY_SECONDS)

        if self.users.get_by_email(data.email) is not None:
            logger.warning("register_refused", email=data.email, reason="email_exists")
            raise ConflictException("Email already registered", {"email": data.email})

        return self.users.create({
            "name": data.name,
            "email": data.email,
            "password_hash": hash_password(data.password),
            "role": data.role,
        })

    def restore_session(self) -> SessionState:
        """Rebuild the session from storage; anything unreadable logs out quietly."""
        raw_user = self.storage.get_item(CURRENT_USER_KEY)
        token = self.storage.get_item(TOKEN_KEY)

        if raw_user is None and token is None:
            self.state = SessionState()
            return self.state

        try:
            profile = UserRead.model_validate_json(raw_user or "")
        except ValidationError:
            profile = None

        if profile is None or not token or decode_access_token(token) is None:
            logger.warning("session_restore_failed")
            self._clear()
            return self.state

        self.state = SessionState(user=profile, token=token, is_authenticated=True)
        logger.info("session_restored", user_id=profile.id)
        return self.state

    def decode_token(self, token: str) -> Optional[dict]:
        return decode_access_token(token)

    def get_users(self) -> list[User]:
        return self.users.list_all()

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get_by_id(user_id)

    def update_user(self, user_id: str, data: UserUpdate) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundException("User not found", {"id": user_id})

        changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"password"})
        if data.password:
            changes["password_hash"] = hash_password(data.password)
        updated = self.users.update(user.model_copy(update=changes))

        if self.current_user and self.current_user.id == updated.id:
            profile = UserRead.model_validate(updated)
            self.storage.set_item(CURRENT_USER_KEY, profile.model_dump_json(by_alias=True))
            self.state = self.state.model_copy(update={"user": profile})
        return updated

    def delete_user(self, user_id: str, requester_id: Optional[str] = None) -> bool:
        """Deactivate a user; nobody may remove the account they are acting as.

        ``requester_id`` is the authenticated caller; without one the console
        session user is the caller.
        """
        if requester_id is None and self.current_user:
            requester_id = self.current_user.id
        if requester_id == user_id:
            logger.warning("user_delete_refused", id=user_id, reason="current_user")
            raise BusinessRuleViolationException(
                "You cannot delete the logged-in user", {"id": user_id}
            )
        return self.users.soft_delete(user_id)
