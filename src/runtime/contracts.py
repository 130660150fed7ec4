"""Protocols describing the collaborators the runtime loop drives."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from timer import Session, SessionDraft, TimerConfiguration


class UIServerLike(Protocol):
    """Event sink implemented by `server.UIServer`."""
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class CuePlayerLike(Protocol):
    """Audio cue player; raises `PlaybackError` when a cue cannot start."""
    def play(self, cue: str) -> None:
        ...


class SessionStoreLike(Protocol):
    """Subset of the session store used by the runtime."""
    def read_settings(self) -> Optional[TimerConfiguration]:
        ...

    def write_settings(self, configuration: TimerConfiguration) -> bool:
        ...

    def write_session(self, draft: SessionDraft) -> Session:
        ...

    def read_all_sessions(self) -> list[Session]:
        ...
