"""Serialization of UI events and replay cache for late-joining clients."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from contracts.ui_protocol import COMMAND_TYPES, STICKY_EVENT_ORDER, STICKY_EVENT_TYPES


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize an event payload with type and timestamp for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        }
    )


def parse_command(message: str | bytes) -> Optional[dict[str, Any]]:
    """Decode a browser command; returns None for malformed or unknown commands."""
    try:
        decoded = json.loads(message)
    except (TypeError, ValueError):
        return None
    if not isinstance(decoded, dict):
        return None
    if decoded.get("type") not in COMMAND_TYPES:
        return None
    return decoded


class StickyEventStore:
    """Thread-safe cache of the latest sticky events, replayed to new clients."""
    def __init__(self):
        self._events: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type not in STICKY_EVENT_TYPES:
            return
        with self._lock:
            self._events[event_type] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            return [self._events[key] for key in STICKY_EVENT_ORDER if key in self._events]
