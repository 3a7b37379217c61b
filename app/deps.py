"""FastAPI dependency injection: settings, repositories, services."""
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from app.core.settings import Settings, get_settings
from app.repositories import FileThreadRepository, MySQLUserRepository, create_session_store
from app.repositories.protocols import SessionStore, ThreadRepository, UserRepository
from app.services.assistant_service import GroqAssistant
from app.services.auth_service import AuthService, SessionConfig
from app.services.chat_service import ChatService
from app.services.protocols import AssistantProvider


def get_settings_dep() -> Settings:
    return get_settings()


def get_session_config(
    settings: Annotated[Settings, Depends(get_settings_dep)],
) -> SessionConfig:
    return SessionConfig.from_settings(settings)


def get_user_repository() -> UserRepository:
    return MySQLUserRepository()


def get_session_store(
    request: Request,
    session_config: Annotated[SessionConfig, Depends(get_session_config)],
) -> SessionStore:
    """Shared session store from app.state (set in lifespan, created on first use otherwise)."""
    store = getattr(request.app.state, "session_store", None)
    if store is None:
        store = create_session_store(session_config.store_backend)
        request.app.state.session_store = store
    return store


def get_auth_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    session_store: Annotated[SessionStore, Depends(get_session_store)],
    session_config: Annotated[SessionConfig, Depends(get_session_config)],
) -> AuthService:
    return AuthService(user_repo, session_store, session_config)


def get_thread_repository() -> ThreadRepository:
    return FileThreadRepository()


@lru_cache
def get_assistant() -> AssistantProvider:
    return GroqAssistant()


def get_chat_service(
    thread_repo: Annotated[ThreadRepository, Depends(get_thread_repository)],
    assistant: Annotated[AssistantProvider, Depends(get_assistant)],
) -> ChatService:
    return ChatService(thread_repo, assistant)
