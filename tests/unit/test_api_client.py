"""Unit tests for ChatApiClient with a mocked requests session."""
from unittest.mock import MagicMock

import pytest
import requests

from app.client.api_client import ChatApiClient, ChatApiError


def _response(status: int, json_body=None, text: str = "", content_type: str = "application/json"):
    r = MagicMock(spec=requests.Response)
    r.status_code = status
    r.ok = status < 400
    r.headers = {"content-type": content_type}
    r.json.return_value = json_body
    r.text = text
    r.content = text.encode() if text else (b"{}" if json_body is not None else b"")
    return r


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


def test_submit_new_thread_omits_thread_id(http):
    http.request.return_value = _response(200, {"thread_id": 1, "messages": []})
    client = ChatApiClient("http://api.local/", session=http)
    assert client.submit(None, "hi")["thread_id"] == 1
    http.request.assert_called_once_with("POST", "http://api.local/api/chat", timeout=60.0, json={"content": "hi"})


def test_submit_existing_thread(http):
    http.request.return_value = _response(200, {"thread_id": 4, "messages": []})
    ChatApiClient(session=http).submit(4, "again")
    _, kwargs = http.request.call_args
    assert kwargs["json"] == {"content": "again", "thread_id": 4}


def test_plain_text_error_raises_with_message(http):
    http.request.return_value = _response(400, text="Username already exists", content_type="text/plain")
    with pytest.raises(ChatApiError) as exc_info:
        ChatApiClient(session=http).register("dup", "password123")
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Username already exists"


def test_current_user_none_when_unauthenticated(http):
    http.request.return_value = _response(401, text="Not logged in", content_type="text/plain")
    assert ChatApiClient(session=http).current_user() is None


def test_current_user_other_errors_propagate(http):
    http.request.return_value = _response(503, text="Database unavailable", content_type="text/plain")
    with pytest.raises(ChatApiError):
        ChatApiClient(session=http).current_user()


def test_validation_error_list_is_joined_into_message(http):
    body = {"detail": [{"loc": ["body", "content"], "msg": "Field required"}, {"loc": ["body"], "msg": "Bad value"}]}
    http.request.return_value = _response(422, body)
    with pytest.raises(ChatApiError) as exc_info:
        ChatApiClient(session=http).submit(None, "")
    assert exc_info.value.message == "Field required; Bad value"
