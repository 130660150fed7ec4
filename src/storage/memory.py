"""Process-local session store for offline runs and tests."""

from __future__ import annotations

import datetime as dt
import logging
import threading
import uuid
from typing import Callable, Optional

from timer import Session, SessionDraft, TimerConfiguration


class InMemorySessionStore:
    """Session store keeping settings and sessions in process memory."""

    def __init__(
        self,
        *,
        configuration: Optional[TimerConfiguration] = None,
        sessions: tuple[Session, ...] = (),
        now_fn: Optional[Callable[[], dt.datetime]] = None,
        id_fn: Optional[Callable[[], str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._settings = configuration
        self._sessions: dict[str, Session] = {session.id: session for session in sessions}
        self._now = now_fn or (lambda: dt.datetime.now(dt.timezone.utc))
        self._new_id = id_fn or (lambda: uuid.uuid4().hex)
        self._logger = logger or logging.getLogger("storage.memory")
        self._lock = threading.Lock()

    def read_settings(self) -> Optional[TimerConfiguration]:
        with self._lock:
            return self._settings

    def write_settings(self, configuration: TimerConfiguration) -> bool:
        with self._lock:
            self._settings = configuration
        return True

    def write_session(self, draft: SessionDraft) -> Session:
        session = Session.from_draft(draft, session_id=self._new_id(), timestamp=self._now())
        with self._lock:
            self._sessions[session.id] = session
        self._logger.debug("Stored session %s in memory", session.id)
        return session

    def read_all_sessions(self) -> list[Session]:
        with self._lock:
            sessions = list(self._sessions.values())
        return sorted(sessions, key=lambda session: session.date, reverse=True)

    def read_sessions_by_date(self, date: str) -> list[Session]:
        with self._lock:
            sessions = [s for s in self._sessions.values() if s.date == date]
        return sorted(sessions, key=_timestamp_key)

    def read_sessions_in_range(self, start_date: str, end_date: str) -> list[Session]:
        with self._lock:
            sessions = [
                s for s in self._sessions.values() if start_date <= s.date <= end_date
            ]
        return sorted(sessions, key=lambda session: session.date)

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None


def _timestamp_key(session: Session) -> float:
    if session.timestamp is None:
        return 0.0
    return session.timestamp.timestamp()
