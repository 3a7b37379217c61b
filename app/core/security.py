"""
Password hashing and session-cookie signing.
"""
import secrets
from typing import Optional

from jose import JOSEError, jws
from passlib.context import CryptContext

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")

SIGNING_ALGORITHM = "HS256"

# bcrypt ignores everything past this many bytes of the encoded password
PASSWORD_MAX_BYTES = 72

# Verified against when the username is unknown so both login failure paths do the same work
_DUMMY_HASH = pwd_ctx.hash("not-a-real-password")


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > PASSWORD_MAX_BYTES


def hash_password(password: str) -> str:
    if password_too_long(password):
        raise ValueError(f"Password exceeds {PASSWORD_MAX_BYTES} bytes")
    return pwd_ctx.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    if password_too_long(plain):
        # Never matches a stored hash; still pay for one bcrypt round
        dummy_verify("")
        return False
    try:
        return pwd_ctx.verify(plain, hashed)
    except (ValueError, TypeError):
        # Malformed or unknown hash format
        return False


def dummy_verify(plain: str) -> None:
    if password_too_long(plain):
        plain = ""
    pwd_ctx.verify(plain, _DUMMY_HASH)


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def sign_value(value: str, secret: str) -> str:
    """Return a JWS compact token carrying value."""
    return jws.sign(value.encode("utf-8"), secret, algorithm=SIGNING_ALGORITHM)


def unsign_value(token: str, secret: str) -> Optional[str]:
    """Return the signed value, or None if the token is malformed or the signature is wrong."""
    if not token:
        return None
    try:
        payload = jws.verify(token, secret, algorithms=[SIGNING_ALGORITHM])
    except JOSEError:
        return None
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError:
        return None
