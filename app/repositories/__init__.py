"""Repository layer: data access abstractions and implementations."""

from app.repositories.protocols import SessionStore, ThreadRepository, UserRepository
from app.repositories.session_store import (
    InMemorySessionStore,
    MySQLSessionStore,
    SessionRecord,
    create_session_store,
)
from app.repositories.thread_repository import FileThreadRepository
from app.repositories.user_repository import MySQLUserRepository

__all__ = [
    "UserRepository",
    "SessionStore",
    "ThreadRepository",
    "SessionRecord",
    "InMemorySessionStore",
    "MySQLSessionStore",
    "create_session_store",
    "MySQLUserRepository",
    "FileThreadRepository",
]
