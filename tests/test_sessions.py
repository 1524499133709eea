"""Tests for the RAG session registry."""

import threading

import pytest

from ebookai.errors import SessionExistsError, SessionNotFoundError
from ebookai.sessions import RagSessionManager


@pytest.fixture
def manager() -> RagSessionManager:
    return RagSessionManager()


def test_create_and_get(manager: RagSessionManager) -> None:
    session = manager.create("book-1", "asst_1", "thread_1")

    assert manager.get("book-1") is session
    assert session.assistant_id == "asst_1"
    assert session.thread_id == "thread_1"
    assert session.files_count == 0
    assert not session.has_knowledge
    assert "book-1" in manager
    assert len(manager) == 1


def test_create_twice_fails(manager: RagSessionManager) -> None:
    manager.create("book-1", "asst_1", "thread_1")
    with pytest.raises(SessionExistsError) as exc_info:
        manager.create("book-1", "asst_2", "thread_2")
    assert exc_info.value.book_id == "book-1"
    assert manager.get("book-1").assistant_id == "asst_1"


def test_missing_session(manager: RagSessionManager) -> None:
    assert manager.find("nope") is None
    assert manager.files("nope") == []
    with pytest.raises(SessionNotFoundError):
        manager.get("nope")
    with pytest.raises(SessionNotFoundError):
        manager.attach_file("nope", "file_1", "paper.pdf")
    with pytest.raises(SessionNotFoundError):
        manager.delete("nope")


def test_attach_file(manager: RagSessionManager) -> None:
    original = manager.create("book-1", "asst_1", "thread_1")

    updated = manager.attach_file("book-1", "file_1", "paper.pdf")
    manager.attach_file("book-1", "file_2", "notes.txt", "text/plain")

    assert original.files == ()
    assert updated.files_count == 1
    assert updated.has_knowledge
    assert [f.file_name for f in manager.files("book-1")] == ["paper.pdf", "notes.txt"]
    assert manager.files("book-1")[1].file_type == "text/plain"
    assert manager.get("book-1").created_at == original.created_at


def test_info(manager: RagSessionManager) -> None:
    assert manager.info("book-1") == {"assistant_id": None, "thread_id": None, "files_count": 0}
    manager.create("book-1", "asst_1", "thread_1")
    manager.attach_file("book-1", "file_1", "paper.pdf")
    assert manager.info("book-1") == {"assistant_id": "asst_1", "thread_id": "thread_1", "files_count": 1}


def test_delete_returns_session(manager: RagSessionManager) -> None:
    manager.create("book-1", "asst_1", "thread_1")
    manager.attach_file("book-1", "file_1", "paper.pdf")

    removed = manager.delete("book-1")

    assert removed.assistant_id == "asst_1"
    assert removed.files_count == 1
    assert "book-1" not in manager
    assert len(manager) == 0


def test_managers_are_isolated() -> None:
    first = RagSessionManager()
    second = RagSessionManager()
    first.create("book-1", "asst_1", "thread_1")
    assert "book-1" not in second


def test_list_book_ids(manager: RagSessionManager) -> None:
    manager.create("b", "asst_b", "thread_b")
    manager.create("a", "asst_a", "thread_a")
    assert manager.list_book_ids() == ["a", "b"]


def test_concurrent_attach(manager: RagSessionManager) -> None:
    manager.create("book-1", "asst_1", "thread_1")

    def attach(index: int) -> None:
        manager.attach_file("book-1", f"file_{index}", f"doc{index}.pdf")

    threads = [threading.Thread(target=attach, args=(i,)) for i in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert manager.get("book-1").files_count == 20
