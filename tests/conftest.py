"""
Pytest fixtures: in-memory repositories, fake assistant and an app client with overridden dependencies.
"""
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on path and .env is loaded
import config  # noqa: F401

from app.core.errors import DuplicateUserError
from app.deps import (
    get_assistant,
    get_session_config,
    get_session_store,
    get_thread_repository,
    get_user_repository,
)
from app.main import app, limiter
from app.repositories.protocols import UserRepository
from app.repositories.session_store import InMemorySessionStore
from app.repositories.thread_repository import FileThreadRepository
from app.services.auth_service import AuthService, SessionConfig


class InMemoryUserRepository(UserRepository):
    """In-memory credential store for tests. Usernames are case-sensitive."""

    def __init__(self) -> None:
        self._users: dict = {}  # id -> dict
        self._next_id = 1

    def get_by_id(self, user_id: int) -> Optional[dict]:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> Optional[dict]:
        for u in self._users.values():
            if u["username"] == username:
                return u
        return None

    def create(self, username: str, password_hash: str) -> int:
        if self.get_by_username(username) is not None:
            raise DuplicateUserError()
        uid = self._next_id
        self._next_id += 1
        self._users[uid] = {"id": uid, "username": username, "password_hash": password_hash}
        return uid

    def delete(self, user_id: int) -> None:
        self._users.pop(user_id, None)


class FakeAssistant:
    """Records calls and answers with a canned reply (or raises when fail is set)."""

    def __init__(self, reply: str = "Hello from the assistant") -> None:
        self.reply_text = reply
        self.fail = False
        self.calls: List[tuple] = []

    def reply(self, history: List[dict], message: str) -> str:
        self.calls.append((list(history), message))
        if self.fail:
            raise RuntimeError("generation failed")
        return self.reply_text


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def session_config():
    return SessionConfig(secret="test-secret", expire_minutes=60)


@pytest.fixture
def auth_service(user_repo, session_store, session_config):
    return AuthService(user_repo, session_store, session_config)


@pytest.fixture
def thread_repo(tmp_path):
    return FileThreadRepository(base_dir=tmp_path)


@pytest.fixture
def assistant():
    return FakeAssistant()


@pytest.fixture
def override_deps(user_repo, session_store, session_config, thread_repo, assistant):
    """Point the app at in-memory stores and the fake assistant for the duration of a test."""
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_session_store] = lambda: session_store
    app.dependency_overrides[get_session_config] = lambda: session_config
    app.dependency_overrides[get_thread_repository] = lambda: thread_repo
    app.dependency_overrides[get_assistant] = lambda: assistant
    limiter.reset()
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(override_deps):
    """TestClient without lifespan (no MySQL needed); keeps cookies between requests."""
    return TestClient(override_deps)


@pytest.fixture
def register_and_login():
    """Register a user and log in with the given client (cookie kept on the client)."""

    def _do(c, username: str, password: str) -> None:
        r = c.post("/api/register", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        r = c.post("/api/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text

    return _do
