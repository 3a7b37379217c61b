"""Service protocols (interfaces) for external collaborators. Enables mocking and swapping implementations."""
from typing import List, Protocol


class AssistantProvider(Protocol):
    """Reply generation: given thread history and a new user message, return assistant text."""

    def reply(self, history: List[dict], message: str) -> str:
        """Return assistant reply text. Raises on API/validation errors."""
        ...
