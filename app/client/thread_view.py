"""
Thread view: tracks the open thread and renders its messages.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional

from app.client.api_client import ChatApiClient

EMPTY_STATE = "Select a chat or start a new one"


@dataclass
class RenderedMessage:
    role: str
    text: str
    # "markdown" for assistant replies (rendered by the front end), "plain" for user input
    format: str
    align: str


def render_message(message: dict) -> RenderedMessage:
    if message.get("role") == "user":
        return RenderedMessage(role="user", text=message.get("content", ""), format="plain", align="right")
    return RenderedMessage(role="assistant", text=message.get("content", ""), format="markdown", align="left")


class ThreadView:
    """
    thread_id None means nothing is open; 0 means a new, not yet created thread.
    The first submission on a new thread adopts the id the server assigns.
    """

    def __init__(
        self,
        client: ChatApiClient,
        thread_id: Optional[int] = None,
        on_thread_created: Optional[Callable[[int], None]] = None,
    ) -> None:
        self._client = client
        self.thread_id = thread_id
        self.messages: List[dict] = []
        self._on_thread_created = on_thread_created

    @property
    def is_new(self) -> bool:
        return self.thread_id == 0

    def open(self, thread_id: Optional[int]) -> None:
        self.thread_id = thread_id
        self.messages = []
        if thread_id:
            self.messages = self._client.get_messages(thread_id)

    def start_new(self) -> None:
        self.open(0)

    def submit(self, content: str) -> dict:
        """Create the thread or append to it, depending on thread_id."""
        created = not self.thread_id
        result = self._client.submit(self.thread_id or None, content)
        self.thread_id = result["thread_id"]
        self.messages = result["messages"]
        if created and self._on_thread_created:
            self._on_thread_created(self.thread_id)
        return result

    def render(self) -> List[RenderedMessage]:
        return [render_message(m) for m in self.messages]

    def render_text(self, assistant_name: str = "Assistant") -> str:
        """Plain-text transcript for terminal front ends."""
        if self.thread_id is None:
            return EMPTY_STATE
        lines = []
        for m in self.render():
            speaker = "You" if m.role == "user" else assistant_name
            lines.append(f"{speaker}: {m.text}")
        return "\n\n".join(lines)
