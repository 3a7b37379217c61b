"""
Thread and message management.
Uses ThreadRepository for persistence and an AssistantProvider for replies.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from app.core.errors import AssistantUnavailableError, ThreadNotFoundError, ValidationError
from app.repositories.protocols import ThreadRepository
from app.services.protocols import AssistantProvider

logger = logging.getLogger(__name__)


def _message(role: str, content: str) -> dict:
    return {"role": role, "content": content, "created_at": datetime.now(timezone.utc).isoformat()}


class ChatService:
    """Creates threads, appends messages, and asks the assistant for replies."""

    def __init__(self, thread_repo: ThreadRepository, assistant: AssistantProvider) -> None:
        self._thread_repo = thread_repo
        self._assistant = assistant

    def list_threads(
        self, user_id: int, limit: int = 50, offset: int = 0
    ) -> Tuple[List[dict], int]:
        return self._thread_repo.list_threads(user_id, limit=limit, offset=offset)

    def get_messages(self, user_id: int, thread_id: int) -> List[dict]:
        if not self._thread_repo.exists(user_id, thread_id):
            raise ThreadNotFoundError()
        return self._thread_repo.get_messages(user_id, thread_id)

    def submit(self, user_id: int, thread_id: Optional[int], content: str) -> dict:
        """
        Submit a user message. thread_id None or 0 starts a new thread.
        The reply is generated before anything is written, so a failed
        generation leaves the thread untouched and the message can be resent.
        Returns {"thread_id": int, "messages": [...]} with the full thread.
        """
        if not content or not content.strip():
            raise ValidationError("Message content is required")
        if thread_id:
            history = self.get_messages(user_id, thread_id)
        else:
            history = []

        reply = self._generate(history, content)
        new_messages = [_message("user", content), _message("assistant", reply)]

        if thread_id:
            self._thread_repo.append_messages(user_id, thread_id, new_messages)
        else:
            thread_id = self._thread_repo.create_thread(user_id, new_messages)
            logger.info("Created thread %s for user id=%s", thread_id, user_id)
        return {"thread_id": thread_id, "messages": history + new_messages}

    def _generate(self, history: List[dict], content: str) -> str:
        try:
            return self._assistant.reply(history, content)
        except Exception as e:
            logger.exception("Assistant reply failed: %s", e)
            raise AssistantUnavailableError() from e
