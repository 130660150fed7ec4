"""Session records emitted by the timer and persisted by session stores."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .constants import PRESET_LOCK_IN


@dataclass(frozen=True)
class SessionDraft:
    """Completed countdown waiting for the store to assign id and timestamp."""
    date: str
    type: str
    duration: int
    overtime: int = 0
    completed: bool = True
    is_partial_completion: bool = False

    def to_document(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "type": self.type,
            "duration": self.duration,
            "overtime": self.overtime,
            "completed": self.completed,
            "isPartialCompletion": self.is_partial_completion,
        }


@dataclass(frozen=True)
class Session:
    """Immutable persisted session record."""
    id: str
    date: str
    type: str
    duration: int
    completed: bool
    overtime: int = 0
    is_partial_completion: bool = False
    timestamp: Optional[dt.datetime] = None

    @property
    def counts_toward_reporting(self) -> bool:
        return self.type == PRESET_LOCK_IN and self.completed

    @property
    def credited_seconds(self) -> int:
        return self.duration + self.overtime

    @property
    def day(self) -> dt.date:
        return dt.date.fromisoformat(self.date)

    @classmethod
    def from_draft(
        cls,
        draft: SessionDraft,
        *,
        session_id: str,
        timestamp: dt.datetime,
    ) -> "Session":
        return cls(
            id=session_id,
            date=draft.date,
            type=draft.type,
            duration=draft.duration,
            completed=draft.completed,
            overtime=draft.overtime,
            is_partial_completion=draft.is_partial_completion,
            timestamp=timestamp,
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "type": self.type,
            "duration": self.duration,
            "completed": self.completed,
            "overtime": self.overtime,
            "isPartialCompletion": self.is_partial_completion,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_document(cls, document: Mapping[str, Any], *, document_id: str = "") -> "Session":
        """Parse a stored session; `overtime` and `isPartialCompletion` are optional."""
        session_id = str(document.get("id") or document_id)
        date = document.get("date")
        if not isinstance(date, str):
            raise ValueError(f"Session {session_id!r} has no date")
        dt.date.fromisoformat(date)

        session_type = document.get("type")
        if not isinstance(session_type, str):
            raise ValueError(f"Session {session_id!r} has no type")

        return cls(
            id=session_id,
            date=date,
            type=session_type,
            duration=_as_seconds(document.get("duration"), "duration", session_id),
            completed=bool(document.get("completed", False)),
            overtime=_as_seconds(document.get("overtime") or 0, "overtime", session_id),
            is_partial_completion=bool(document.get("isPartialCompletion", False)),
            timestamp=_as_timestamp(document.get("timestamp")),
        )


def _as_seconds(value: Any, field: str, session_id: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Session {session_id!r} field {field} must be a number")
    return int(value)


def _as_timestamp(value: Any) -> Optional[dt.datetime]:
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, str):
        try:
            return dt.datetime.fromisoformat(value)
        except ValueError:
            return None
    return None
