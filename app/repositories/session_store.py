"""Session store backends: process-local memory and MySQL."""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

from app import db

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionRecord:
    """Server-side session: opaque id bound to a user id until expires_at (UTC)."""

    id: str
    user_id: int
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at


class InMemorySessionStore:
    """Sessions held in a dict. Lost on restart; shared by all requests in the process."""

    def __init__(self) -> None:
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def save(self, record: SessionRecord) -> None:
        with self._lock:
            self._sessions[record.id] = record

    def get(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            record = self._sessions.get(session_id)
            if record is None:
                return None
            if record.is_expired():
                del self._sessions[session_id]
                return None
            return record

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        now = utcnow()
        with self._lock:
            expired = [sid for sid, r in self._sessions.items() if r.is_expired(now)]
            for sid in expired:
                del self._sessions[sid]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


def _to_naive_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _to_aware_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


class MySQLSessionStore:
    """Sessions in the MySQL sessions table. Delegates to app.db."""

    def save(self, record: SessionRecord) -> None:
        db.insert_session(
            record.id,
            record.user_id,
            _to_naive_utc(record.created_at),
            _to_naive_utc(record.expires_at),
        )

    def get(self, session_id: str) -> Optional[SessionRecord]:
        row = db.get_session(session_id)
        if not row:
            return None
        return SessionRecord(
            id=row["id"],
            user_id=row["user_id"],
            created_at=_to_aware_utc(row["created_at"]),
            expires_at=_to_aware_utc(row["expires_at"]),
        )

    def delete(self, session_id: str) -> None:
        db.delete_session(session_id)

    def purge_expired(self) -> int:
        removed = db.delete_expired_sessions()
        if removed:
            logger.info("Purged %s expired sessions", removed)
        return removed


def create_session_store(backend: str):
    """Build the session store named by settings.session_store."""
    if backend == "mysql":
        return MySQLSessionStore()
    if backend == "memory":
        return InMemorySessionStore()
    raise ValueError(f"Unknown session store backend: {backend!r}")
