"""Per-book RAG session registry.

Each book that uses retrieval-augmented generation owns one session
(assistant, conversation thread and uploaded research files). Sessions are
kept in an explicit keyed store owned by a manager instance rather than in
module-level state, so separate tenants never share entries.
"""

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from .errors import SessionExistsError, SessionNotFoundError
from .logging import LogEvent, log_info


@dataclass(frozen=True)
class SessionFile:
    """A research file attached to a session."""

    file_id: str
    file_name: str
    file_type: str = "application/pdf"


@dataclass(frozen=True)
class RagSession:
    """Vendor identifiers backing one book's knowledge base."""

    book_id: str
    assistant_id: str
    thread_id: str
    files: Tuple[SessionFile, ...] = ()
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def files_count(self) -> int:
        return len(self.files)

    @property
    def has_knowledge(self) -> bool:
        """Whether retrieval has anything to search."""
        return bool(self.files)


class RagSessionManager:
    """Thread-safe store of :class:`RagSession` keyed by book id."""

    def __init__(self) -> None:
        self._sessions: Dict[str, RagSession] = {}
        self._lock = threading.RLock()

    def create(self, book_id: str, assistant_id: str, thread_id: str) -> RagSession:
        """Register a new session.

        Raises:
            SessionExistsError: If ``book_id`` already has a session
        """
        with self._lock:
            if book_id in self._sessions:
                raise SessionExistsError(f"RAG session already exists for book '{book_id}'", book_id=book_id)
            session = RagSession(book_id=book_id, assistant_id=assistant_id, thread_id=thread_id)
            self._sessions[book_id] = session
        log_info(LogEvent.RAG_SESSION, "Created RAG session", book_id=book_id)
        return session

    def find(self, book_id: str) -> Optional[RagSession]:
        with self._lock:
            return self._sessions.get(book_id)

    def get(self, book_id: str) -> RagSession:
        """Return the session for ``book_id``.

        Raises:
            SessionNotFoundError: If no session is registered
        """
        session = self.find(book_id)
        if session is None:
            raise SessionNotFoundError(f"No RAG session for book '{book_id}'", book_id=book_id)
        return session

    def attach_file(self, book_id: str, file_id: str, file_name: str, file_type: str = "application/pdf") -> RagSession:
        """Record an uploaded file on a session and return the updated session."""
        with self._lock:
            session = self.get(book_id)
            updated = replace(session, files=session.files + (SessionFile(file_id, file_name, file_type),))
            self._sessions[book_id] = updated
        log_info(LogEvent.RAG_SESSION, "Attached file to RAG session", book_id=book_id, file_id=file_id)
        return updated

    def files(self, book_id: str) -> List[SessionFile]:
        """Files attached to a book's session; empty when there is none."""
        session = self.find(book_id)
        return list(session.files) if session else []

    def delete(self, book_id: str) -> RagSession:
        """Remove and return a session so the caller can release vendor resources.

        Raises:
            SessionNotFoundError: If no session is registered
        """
        with self._lock:
            session = self._sessions.pop(book_id, None)
        if session is None:
            raise SessionNotFoundError(f"No RAG session for book '{book_id}'", book_id=book_id)
        log_info(LogEvent.RAG_SESSION, "Deleted RAG session", book_id=book_id, files=session.files_count)
        return session

    def info(self, book_id: str) -> Dict[str, Any]:
        session = self.find(book_id)
        return {
            "assistant_id": session.assistant_id if session else None,
            "thread_id": session.thread_id if session else None,
            "files_count": session.files_count if session else 0,
        }

    def list_book_ids(self) -> List[str]:
        with self._lock:
            return sorted(self._sessions)

    def __contains__(self, book_id: object) -> bool:
        with self._lock:
            return book_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
