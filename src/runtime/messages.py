"""Status and rejection text shown next to the countdown."""

from __future__ import annotations

from reporting import format_countdown
from timer import TimerSnapshot
from timer.constants import (
    ACTION_COMPLETE,
    ACTION_PAUSE,
    ACTION_SELECT,
    ACTION_START,
    PHASE_OVERTIME,
    PHASE_PAUSED,
    PHASE_RUNNING,
    REASON_ALREADY_RUNNING,
    REASON_NOT_ACTIVE,
    REASON_NOT_RUNNING,
    REASON_UNKNOWN_PRESET,
)


def timer_status_message(snapshot: TimerSnapshot) -> str:
    """Build status text for the current timer snapshot."""
    display = format_countdown(snapshot.remaining_seconds)
    if snapshot.phase == PHASE_RUNNING:
        return f"{snapshot.preset} running ({display} left)"
    if snapshot.phase == PHASE_OVERTIME:
        return f"{snapshot.preset} in overtime ({display})"
    if snapshot.phase == PHASE_PAUSED:
        if snapshot.in_overtime:
            return f"{snapshot.preset} paused in overtime ({display})"
        return f"{snapshot.preset} paused ({display} left)"
    return f"Ready: {snapshot.preset} {display}"


def timer_rejection_text(action: str, reason: str) -> str:
    """Return text for timer actions refused in the current state."""
    if reason == REASON_ALREADY_RUNNING and action == ACTION_START:
        return "The timer is already running."
    if reason == REASON_NOT_RUNNING and action == ACTION_PAUSE:
        return "The timer is not running."
    if reason == REASON_NOT_ACTIVE and action == ACTION_COMPLETE:
        return "There is no active session to complete."
    if reason == REASON_UNKNOWN_PRESET and action == ACTION_SELECT:
        return "Unknown timer preset."
    return "That timer action is not possible right now."
