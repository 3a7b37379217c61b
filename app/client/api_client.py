"""
HTTP client for the chat API. A requests.Session keeps the session cookie between calls.
"""
from typing import List, Optional

import requests

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class ChatApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def _error_message(response: requests.Response) -> str:
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            data = response.json()
            detail = data.get("message") or data.get("detail")
            if isinstance(detail, list):
                # FastAPI request validation errors
                detail = "; ".join(str(d.get("msg", d)) if isinstance(d, dict) else str(d) for d in detail)
            return detail or response.text
        except ValueError:
            pass
    return response.text or str(response.status_code)


class ChatApiClient:
    """Thin wrapper over the /api endpoints."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 60.0, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> dict:
        r = self.http.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        if not r.ok:
            raise ChatApiError(r.status_code, _error_message(r))
        return r.json() if r.content else {}

    # ----- Auth -----

    def register(self, username: str, password: str) -> dict:
        return self._request("POST", "/api/register", json={"username": username, "password": password})

    def login(self, username: str, password: str) -> dict:
        return self._request("POST", "/api/login", json={"username": username, "password": password})

    def logout(self) -> None:
        self._request("POST", "/api/logout")

    def current_user(self) -> Optional[dict]:
        """The logged-in user, or None when the session is missing or expired."""
        try:
            return self._request("GET", "/api/user")
        except ChatApiError as e:
            if e.status_code == 401:
                return None
            raise

    # ----- Chat -----

    def submit(self, thread_id: Optional[int], content: str) -> dict:
        """Returns {"thread_id", "messages"}. thread_id None or 0 creates a thread."""
        payload = {"content": content}
        if thread_id:
            payload["thread_id"] = thread_id
        return self._request("POST", "/api/chat", json=payload)

    def list_threads(self, limit: int = 50, offset: int = 0) -> dict:
        return self._request("GET", "/api/threads", params={"limit": limit, "offset": offset})

    def get_messages(self, thread_id: int) -> List[dict]:
        return self._request("GET", f"/api/threads/{thread_id}/messages")["messages"]
