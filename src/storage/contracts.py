"""Protocol describing the persistence collaborator used by the runtime."""

from __future__ import annotations

from typing import Optional, Protocol

from timer import Session, SessionDraft, TimerConfiguration


class SessionStore(Protocol):
    """Narrow CRUD interface over stored timer settings and sessions.

    Implementations raise `StorageReadError` / `StorageWriteError` on failure.
    """

    def read_settings(self) -> Optional[TimerConfiguration]:
        ...

    def write_settings(self, configuration: TimerConfiguration) -> bool:
        ...

    def write_session(self, draft: SessionDraft) -> Session:
        ...

    def read_all_sessions(self) -> list[Session]:
        """Return every stored session, newest date first."""
        ...

    def read_sessions_by_date(self, date: str) -> list[Session]:
        ...

    def read_sessions_in_range(self, start_date: str, end_date: str) -> list[Session]:
        ...

    def delete_session(self, session_id: str) -> bool:
        ...
