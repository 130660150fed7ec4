from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, Optional

from contracts.ui_protocol import (
    EVENT_CALENDAR,
    EVENT_ERROR,
    EVENT_HISTORY,
    EVENT_SETTINGS,
    EVENT_STATS,
    EVENT_SYNC,
    EVENT_TIMER,
    SYNC_IDLE,
    SYNC_SYNCING,
)
from reporting import (
    CalendarCell,
    PeriodStats,
    SessionHistory,
    format_countdown,
    format_hours_minutes,
)
from reporting.constants import PERIOD_LABELS
from timer import Session, TimerConfiguration, TimerSnapshot
from timer.constants import PRESETS

from .contracts import UIServerLike
from .messages import timer_status_message


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_timer_update(
        self,
        snapshot: TimerSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
        message: Optional[str] = None,
    ) -> None:
        payload: dict[str, Any] = {
            "action": action,
            "preset": snapshot.preset,
            "phase": snapshot.phase,
            "duration_seconds": snapshot.duration_seconds,
            "original_duration": snapshot.original_duration,
            "remaining_seconds": snapshot.remaining_seconds,
            "overtime_seconds": snapshot.overtime_seconds,
            "in_overtime": snapshot.in_overtime,
            "display": format_countdown(snapshot.remaining_seconds),
            "status": timer_status_message(snapshot),
        }
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        if message:
            payload["message"] = message
        self.publish(EVENT_TIMER, **payload)

    def publish_settings(
        self,
        configuration: TimerConfiguration,
        *,
        overtime_enabled: bool,
    ) -> None:
        self.publish(
            EVENT_SETTINGS,
            durations=configuration.to_document(),
            minutes={
                preset: configuration.duration_for(preset) // 60 for preset in PRESETS
            },
            overtime_enabled=overtime_enabled,
        )

    def publish_history(self, history: SessionHistory, *, today: dt.date) -> None:
        today_key = today.isoformat()
        today_sessions = [
            session for session in history.sessions if session.date == today_key
        ]
        today_seconds = history.daily_totals().get(today_key, 0)
        self.publish(
            EVENT_HISTORY,
            session_number=history.session_number(),
            session_count=len(history),
            today=today_key,
            today_seconds=today_seconds,
            today_display=format_hours_minutes(today_seconds),
            today_sessions=[session_payload(session) for session in today_sessions],
        )

    def publish_stats(self, stats: PeriodStats) -> None:
        payload = stats.to_payload()
        payload["label"] = PERIOD_LABELS.get(stats.period, stats.period)
        payload["total_display"] = format_hours_minutes(stats.total_time_in_period)
        payload["average_display"] = format_hours_minutes(stats.average_per_active_day)
        self.publish(EVENT_STATS, **payload)

    def publish_calendar(
        self,
        year: int,
        month: int,
        cells: Iterable[CalendarCell],
    ) -> None:
        self.publish(
            EVENT_CALENDAR,
            year=year,
            month=month,
            cells=[cell.to_payload() for cell in cells],
        )

    def publish_sync(self, syncing: bool) -> None:
        self.publish(EVENT_SYNC, state=SYNC_SYNCING if syncing else SYNC_IDLE)

    def publish_error(self, message: str) -> None:
        self.publish(EVENT_ERROR, message=message)


def session_payload(session: Session) -> dict[str, Any]:
    document = session.to_document()
    timestamp = document.get("timestamp")
    document["timestamp"] = timestamp.isoformat() if timestamp is not None else None
    return document
