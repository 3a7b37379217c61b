"""
Assistant reply generation using Groq (LangChain).
Supports multiple API keys rotation for rate limits.
"""
import itertools
from datetime import datetime
from typing import List, Optional

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from langchain_groq import ChatGroq

import config


class GroqAssistant:
    """Groq chat model with multi-key rotation. Turns thread history + new message into a reply."""

    def __init__(self, api_keys: Optional[List[str]] = None, model: Optional[str] = None) -> None:
        keys = list(api_keys if api_keys is not None else config.GROQ_API_KEYS)
        self._key_cycle = itertools.cycle(keys) if keys else None
        self._model = model or config.GROQ_MODEL

    def _next_api_key(self) -> Optional[str]:
        if self._key_cycle is None:
            return None
        return next(self._key_cycle)

    def get_llm(self, api_key: Optional[str] = None) -> ChatGroq:
        """Get ChatGroq instance; uses next key in rotation if api_key not given."""
        key = api_key or self._next_api_key()
        if not key:
            raise ValueError("No GROQ_API_KEYS or GROQ_API_KEY set in .env")
        return ChatGroq(
            model=self._model,
            api_key=key,
            temperature=0.7,
            max_tokens=4096,
        )

    @staticmethod
    def get_system_prompt() -> str:
        now = datetime.now().strftime("%A, %d %B %Y, %H:%M")
        return (
            f"You are {config.ASSISTANT_NAME}, a helpful AI assistant.\n"
            f"Current date and time: {now}.\n"
            "Be concise, accurate, and friendly. Format answers in Markdown; "
            "put code in fenced code blocks with a language tag."
        )

    def build_messages(self, history: List[dict], message: str) -> list:
        """history: list of {"role": "user"|"assistant", "content": "..."}"""
        messages = [SystemMessage(content=self.get_system_prompt())]
        for h in history:
            if h.get("role") == "user":
                messages.append(HumanMessage(content=h.get("content", "")))
            elif h.get("role") == "assistant":
                messages.append(AIMessage(content=h.get("content", "")))
        messages.append(HumanMessage(content=message))
        return messages

    def reply(self, history: List[dict], message: str) -> str:
        """Return assistant reply text. Raises on missing keys or API errors."""
        llm = self.get_llm()
        response = llm.invoke(self.build_messages(history, message))
        return response.content if hasattr(response, "content") else str(response)
