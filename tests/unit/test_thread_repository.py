"""Unit tests for FileThreadRepository."""
import pytest

from app.repositories.thread_repository import FileThreadRepository, make_title


def test_list_threads_empty(thread_repo):
    items, total = thread_repo.list_threads(999, limit=10, offset=0)
    assert items == []
    assert total == 0


def test_create_and_append(thread_repo):
    thread_id = thread_repo.create_thread(1, [{"role": "user", "content": "Hello"}])
    assert thread_id == 1
    assert thread_repo.exists(1, thread_id)
    thread_repo.append_messages(1, thread_id, [{"role": "assistant", "content": "Hi"}])
    history = thread_repo.get_messages(1, thread_id)
    assert [(m["role"], m["content"]) for m in history] == [("user", "Hello"), ("assistant", "Hi")]
    items, total = thread_repo.list_threads(1)
    assert total == 1
    assert items[0]["id"] == thread_id
    assert items[0]["title"] == "Hello"
    assert items[0]["message_count"] == 2


def test_thread_ids_are_per_user_and_increasing(thread_repo):
    assert thread_repo.create_thread(1, []) == 1
    assert thread_repo.create_thread(1, []) == 2
    assert thread_repo.create_thread(2, []) == 1
    assert not thread_repo.exists(2, 2)
    assert not thread_repo.exists(1, 0)


def test_append_to_missing_thread_raises(thread_repo):
    with pytest.raises(KeyError):
        thread_repo.append_messages(1, 3, [{"role": "user", "content": "x"}])


def test_get_messages_unknown_thread_is_empty(thread_repo):
    assert thread_repo.get_messages(1, 77) == []


def test_pagination(tmp_path):
    repo = FileThreadRepository(base_dir=tmp_path)
    for i in range(5):
        repo.create_thread(1, [{"role": "user", "content": f"thread {i}"}])
    items, total = repo.list_threads(1, limit=2, offset=1)
    assert total == 5
    assert len(items) == 2


def test_make_title_truncates():
    assert make_title("short") == "short"
    long = "x" * 80
    assert make_title(long) == "x" * 60 + "..."
    assert make_title("multi\nline   text") == "multi line text"
