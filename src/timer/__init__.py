from .configuration import TimerConfiguration
from .machine import (
    PersistSession,
    PlayCue,
    TimerAction,
    TimerEffect,
    TimerPhase,
    TimerState,
    Transition,
    completion_draft,
    reconfigure,
    transition,
)
from .records import Session, SessionDraft
from .service import FocusTimer, TimerActionResult, TimerSnapshot

__all__ = [
    "FocusTimer",
    "PersistSession",
    "PlayCue",
    "Session",
    "SessionDraft",
    "TimerAction",
    "TimerActionResult",
    "TimerConfiguration",
    "TimerEffect",
    "TimerPhase",
    "TimerSnapshot",
    "TimerState",
    "Transition",
    "completion_draft",
    "reconfigure",
    "transition",
]
