"""File-based implementation of ThreadRepository: database/chats_data/{user_id}/{thread_id}.json"""
import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from app.core.settings import get_settings

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 60

# Serialises thread id allocation and read-modify-write across instances
_write_lock = threading.Lock()


def make_title(content: str) -> str:
    content = " ".join((content or "").split())
    return content[:TITLE_MAX_LENGTH] + ("..." if len(content) > TITLE_MAX_LENGTH else "")


class FileThreadRepository:
    """Per-user threads stored as JSON files under chats_data/{user_id}/."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base = base_dir or get_settings().chats_data_dir

    def _user_dir(self, user_id: int) -> Path:
        return self._base / str(user_id)

    def _thread_file(self, user_id: int, thread_id: int) -> Path:
        return self._user_dir(user_id) / f"{thread_id}.json"

    def _thread_ids(self, user_id: int) -> List[int]:
        dir_path = self._user_dir(user_id)
        if not dir_path.exists():
            return []
        return [int(p.stem) for p in dir_path.glob("*.json") if p.stem.isdigit()]

    def _read(self, path: Path) -> Optional[dict]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Unreadable thread file %s: %s", path, e)
            return None

    def _write(self, path: Path, data: dict) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def exists(self, user_id: int, thread_id: int) -> bool:
        return thread_id > 0 and self._thread_file(user_id, thread_id).exists()

    def create_thread(self, user_id: int, messages: List[dict]) -> int:
        now = datetime.now(timezone.utc).isoformat()
        first_user = next((m for m in messages if m.get("role") == "user"), None)
        with _write_lock:
            thread_id = max(self._thread_ids(user_id), default=0) + 1
            self._write(
                self._thread_file(user_id, thread_id),
                {
                    "id": thread_id,
                    "title": make_title(first_user["content"]) if first_user else "",
                    "created_at": now,
                    "updated_at": now,
                    "messages": list(messages),
                },
            )
        return thread_id

    def get_messages(self, user_id: int, thread_id: int) -> List[dict]:
        data = self._read(self._thread_file(user_id, thread_id))
        if not data:
            return []
        return data.get("messages", [])

    def append_messages(self, user_id: int, thread_id: int, messages: List[dict]) -> None:
        path = self._thread_file(user_id, thread_id)
        with _write_lock:
            data = self._read(path)
            if data is None:
                raise KeyError(f"thread {thread_id} does not exist for user {user_id}")
            data.setdefault("messages", []).extend(messages)
            data["updated_at"] = datetime.now(timezone.utc).isoformat()
            self._write(path, data)

    def list_threads(
        self, user_id: int, limit: int = 50, offset: int = 0
    ) -> Tuple[List[dict], int]:
        threads = []
        for thread_id in self._thread_ids(user_id):
            data = self._read(self._thread_file(user_id, thread_id))
            if data is None:
                continue
            threads.append(
                {
                    "id": thread_id,
                    "title": data.get("title", ""),
                    "message_count": len(data.get("messages", [])),
                    "updated_at": data.get("updated_at"),
                }
            )
        threads.sort(key=lambda t: (t["updated_at"] or "", t["id"]), reverse=True)
        return threads[offset : offset + limit], len(threads)
