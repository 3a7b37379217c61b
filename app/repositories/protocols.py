"""Repository protocols (interfaces) for testability and clear boundaries."""
from typing import List, Optional, Protocol, Tuple

from app.repositories.session_store import SessionRecord


class UserRepository(Protocol):
    """Credential store: get by id/username, create."""

    def get_by_id(self, user_id: int) -> Optional[dict]:
        """Return user row (id, username, password_hash, ...) or None."""
        ...

    def get_by_username(self, username: str) -> Optional[dict]:
        """Return user row including password_hash, or None. Exact (case-sensitive) match."""
        ...

    def create(self, username: str, password_hash: str) -> int:
        """Insert user; return new id. Raises DuplicateUserError if the username exists."""
        ...


class SessionStore(Protocol):
    """Server-side sessions keyed by opaque id."""

    def save(self, record: SessionRecord) -> None:
        ...

    def get(self, session_id: str) -> Optional[SessionRecord]:
        """Return the session, or None when unknown or expired."""
        ...

    def delete(self, session_id: str) -> None:
        """Remove the session. Deleting an unknown session is not an error."""
        ...

    def purge_expired(self) -> int:
        """Drop expired sessions; return how many were removed."""
        ...


class ThreadRepository(Protocol):
    """Per-user chat threads: create, append, history, list."""

    def exists(self, user_id: int, thread_id: int) -> bool:
        ...

    def create_thread(self, user_id: int, messages: List[dict]) -> int:
        """Persist a new thread holding the given messages; return its id (>= 1)."""
        ...

    def get_messages(self, user_id: int, thread_id: int) -> List[dict]:
        """Messages in creation order; empty list for unknown threads."""
        ...

    def append_messages(self, user_id: int, thread_id: int, messages: List[dict]) -> None:
        """Append messages to an existing thread and persist."""
        ...

    def list_threads(
        self, user_id: int, limit: int = 50, offset: int = 0
    ) -> Tuple[List[dict], int]:
        """List threads for user (most recently updated first). Returns (items, total_count)."""
        ...
