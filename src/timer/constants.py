"""Preset, phase, action, and reason constants used by the focus timer."""

from __future__ import annotations

PRESET_LOCK_IN = "Lock In"
PRESET_SMALL_BREAK = "Small Break"
PRESET_LONG_BREAK = "Long Break"

PRESETS: tuple[str, ...] = (PRESET_LOCK_IN, PRESET_SMALL_BREAK, PRESET_LONG_BREAK)

DEFAULT_DURATIONS_SECONDS: dict[str, int] = {
    PRESET_LOCK_IN: 90 * 60,
    PRESET_SMALL_BREAK: 20 * 60,
    PRESET_LONG_BREAK: 45 * 60,
}

PHASE_IDLE = "idle"
PHASE_RUNNING = "running"
PHASE_PAUSED = "paused"
PHASE_OVERTIME = "overtime"

TICKING_PHASES: frozenset[str] = frozenset({PHASE_RUNNING, PHASE_OVERTIME})
ACTIVE_PHASES: frozenset[str] = frozenset({PHASE_RUNNING, PHASE_PAUSED, PHASE_OVERTIME})

ACTION_SELECT = "select"
ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_TOGGLE = "toggle"
ACTION_TICK = "tick"
ACTION_COMPLETE = "complete"
ACTION_RESET = "reset"

ACTION_SYNC = "sync"
ACTION_CONFIGURE = "configure"

CUE_LOCK_IN = "lock_in"
CUE_TIMER_COMPLETE = "timer_complete"

REASON_SELECTED = "selected"
REASON_STARTED = "started"
REASON_RESUMED = "resumed"
REASON_PAUSED = "paused"
REASON_TICK = "tick"
REASON_OVERTIME = "overtime"
REASON_FINISHED = "finished"
REASON_COMPLETED = "completed"
REASON_RESET = "reset"
REASON_CONFIGURED = "configured"
REASON_ALREADY_RUNNING = "already_running"
REASON_NOT_RUNNING = "not_running"
REASON_NOT_ACTIVE = "not_active"
REASON_UNKNOWN_PRESET = "unknown_preset"
REASON_UNSUPPORTED_ACTION = "unsupported_action"
REASON_STARTUP = "startup"
