"""
Auth: session cookie transport and get_current_user dependency.
"""
from typing import Annotated, Optional

from fastapi import Depends, Request, Response

from app.core.errors import UnauthenticatedError
from app.deps import get_auth_service
from app.models import UserInfo
from app.repositories.session_store import SessionRecord
from app.services.auth_service import AuthService


def set_session_cookie(response: Response, auth: AuthService, record: SessionRecord) -> None:
    response.set_cookie(
        key=auth.config.cookie_name,
        value=auth.sign_session_id(record.id),
        max_age=auth.config.max_age_seconds,
        httponly=True,
        secure=auth.config.cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, auth: AuthService) -> None:
    response.delete_cookie(
        key=auth.config.cookie_name,
        path="/",
        secure=auth.config.cookie_secure,
        httponly=True,
        samesite="lax",
    )


def get_session_id(
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> Optional[str]:
    """Session id from the signed cookie, or None when absent or tampered with."""
    return auth.unsign_session_id(request.cookies.get(auth.config.cookie_name))


def get_optional_user(
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    session_id: Annotated[Optional[str], Depends(get_session_id)],
) -> Optional[UserInfo]:
    user = auth.current_principal(session_id)
    if user is not None:
        request.state.user_id = user.id
    return user


def get_current_user(
    user: Annotated[Optional[UserInfo], Depends(get_optional_user)],
) -> UserInfo:
    """Require an authenticated session."""
    if user is None:
        raise UnauthenticatedError()
    return user
