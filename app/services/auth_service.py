"""
Session authentication: registration, login, logout, principal lookup.
Uses UserRepository for credentials and SessionStore for server-side sessions.
"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from app.core.errors import DuplicateUserError, InvalidCredentialsError, ValidationError
from app.core.security import (
    PASSWORD_MAX_BYTES,
    dummy_verify,
    hash_password,
    new_session_id,
    password_too_long,
    sign_value,
    unsign_value,
    verify_password,
)
from app.core.settings import Settings
from app.models import UserInfo
from app.repositories.protocols import SessionStore, UserRepository
from app.repositories.session_store import SessionRecord, utcnow

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6


@dataclass(frozen=True)
class SessionConfig:
    """Explicit session configuration handed to AuthService at startup."""

    secret: str
    store_backend: str = "memory"
    expire_minutes: int = 10080
    cookie_name: str = "chat.sid"
    cookie_secure: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionConfig":
        return cls(
            secret=settings.session_secret,
            store_backend=settings.session_store,
            expire_minutes=settings.session_expire_minutes,
            cookie_name=settings.session_cookie_name,
            cookie_secure=settings.session_cookie_secure,
        )

    @property
    def max_age_seconds(self) -> int:
        return self.expire_minutes * 60


def _to_user_info(row: dict) -> UserInfo:
    return UserInfo(id=row["id"], username=row["username"])


class AuthService:
    """Validates credentials and manages the session lifecycle."""

    def __init__(self, user_repo: UserRepository, session_store: SessionStore, config: SessionConfig) -> None:
        self._users = user_repo
        self._sessions = session_store
        self.config = config

    def register(self, username: str, password: str) -> UserInfo:
        """Create a user. Raises DuplicateUserError if the username is taken."""
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Username and password are required")
        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        if password_too_long(password):
            raise ValidationError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        if self._users.get_by_username(username):
            raise DuplicateUserError()
        # The store's unique key still catches a concurrent insert of the same name
        user_id = self._users.create(username, hash_password(password))
        logger.info("Registered user id=%s", user_id)
        return UserInfo(id=user_id, username=username)

    def authenticate(self, username: str, password: str) -> UserInfo:
        """Check credentials without creating a session."""
        username = (username or "").strip()
        user = self._users.get_by_username(username) if username else None
        if user is None:
            dummy_verify(password or "")
            raise InvalidCredentialsError()
        if not verify_password(password or "", user["password_hash"]):
            raise InvalidCredentialsError()
        return _to_user_info(user)

    def login(self, username: str, password: str) -> SessionRecord:
        """Verify credentials and open a new session bound to the user."""
        try:
            user = self.authenticate(username, password)
        except InvalidCredentialsError:
            logger.info("Failed login attempt")
            raise
        now = utcnow()
        record = SessionRecord(
            id=new_session_id(),
            user_id=user.id,
            created_at=now,
            expires_at=now + timedelta(minutes=self.config.expire_minutes),
        )
        self._sessions.save(record)
        logger.info("User id=%s logged in", user.id)
        return record

    def logout(self, session_id: Optional[str]) -> None:
        """Invalidate the session. Idempotent."""
        if not session_id:
            return
        self._sessions.delete(session_id)

    def current_principal(self, session_id: Optional[str]) -> Optional[UserInfo]:
        """User owning the session, or None when the session is missing, expired or orphaned."""
        if not session_id:
            return None
        record = self._sessions.get(session_id)
        if record is None:
            return None
        user = self._users.get_by_id(record.user_id)
        if user is None:
            return None
        return _to_user_info(user)

    def sign_session_id(self, session_id: str) -> str:
        return sign_value(session_id, self.config.secret)

    def unsign_session_id(self, cookie_value: Optional[str]) -> Optional[str]:
        return unsign_value(cookie_value or "", self.config.secret)
