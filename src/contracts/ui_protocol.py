"""Web UI websocket event, command, and state constants."""

from __future__ import annotations

# Websocket event types (server -> browser)
EVENT_HELLO = "hello"
EVENT_TIMER = "timer"
EVENT_SETTINGS = "settings"
EVENT_HISTORY = "history"
EVENT_STATS = "stats"
EVENT_CALENDAR = "calendar"
EVENT_SYNC = "sync"
EVENT_ERROR = "error"

# Websocket command types (browser -> server)
COMMAND_SELECT = "select"
COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_TOGGLE = "toggle"
COMMAND_COMPLETE = "complete"
COMMAND_RESET = "reset"
COMMAND_SAVE_SETTINGS = "save_settings"
COMMAND_STATS = "stats"
COMMAND_CALENDAR = "calendar"

TIMER_COMMANDS: frozenset[str] = frozenset(
    {
        COMMAND_SELECT,
        COMMAND_START,
        COMMAND_PAUSE,
        COMMAND_TOGGLE,
        COMMAND_COMPLETE,
        COMMAND_RESET,
    }
)

COMMAND_TYPES: frozenset[str] = TIMER_COMMANDS | frozenset(
    {
        COMMAND_SAVE_SETTINGS,
        COMMAND_STATS,
        COMMAND_CALENDAR,
    }
)

# Sync indicator states
SYNC_IDLE = "idle"
SYNC_SYNCING = "syncing"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_TIMER,
        EVENT_SETTINGS,
        EVENT_HISTORY,
        EVENT_STATS,
        EVENT_CALENDAR,
        EVENT_SYNC,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_SETTINGS,
    EVENT_HISTORY,
    EVENT_TIMER,
    EVENT_STATS,
    EVENT_CALENDAR,
    EVENT_SYNC,
)
