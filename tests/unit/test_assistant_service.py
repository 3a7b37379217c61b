"""Unit tests for GroqAssistant message building and key rotation."""
from unittest.mock import MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from app.services.assistant_service import GroqAssistant


def test_build_messages_maps_roles():
    assistant = GroqAssistant(api_keys=["k1"])
    history = [{"role": "user", "content": "Hi"}, {"role": "assistant", "content": "Hello"}, {"role": "system", "content": "x"}]
    messages = assistant.build_messages(history, "How are you?")
    assert isinstance(messages[0], SystemMessage)
    assert [type(m) for m in messages[1:]] == [HumanMessage, AIMessage, HumanMessage]
    assert messages[-1].content == "How are you?"


def test_no_keys_raises():
    with pytest.raises(ValueError):
        GroqAssistant(api_keys=[]).get_llm()


def test_keys_rotate():
    assistant = GroqAssistant(api_keys=["k1", "k2"])
    assert [assistant._next_api_key() for _ in range(3)] == ["k1", "k2", "k1"]


def test_reply_returns_content():
    with patch("app.services.assistant_service.ChatGroq") as chat_groq:
        chat_groq.return_value.invoke.return_value = MagicMock(content="Sure!")
        assistant = GroqAssistant(api_keys=["k1"], model="test-model")
        assert assistant.reply([], "Help") == "Sure!"
    _, kwargs = chat_groq.call_args
    assert kwargs["api_key"] == "k1"
    assert kwargs["model"] == "test-model"
