"""Dispatcher that applies browser commands to the timer and reports."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Callable, Mapping, Optional

from contracts.ui_protocol import (
    COMMAND_CALENDAR,
    COMMAND_SAVE_SETTINGS,
    COMMAND_SELECT,
    COMMAND_STATS,
    TIMER_COMMANDS,
)
from reporting import PERIOD_DAYS, PERIOD_LAST_WEEK, SessionHistory
from timer import FocusTimer, TimerConfiguration
from timer.constants import PRESETS

from .effects import EffectRunner
from .messages import timer_rejection_text
from .persistence import PersistenceWorker
from .ticks import CountdownTicker
from .ui import RuntimeUIPublisher


class CommandError(ValueError):
    """Raised when a browser command carries invalid arguments."""


class RuntimeCommandDispatcher:
    """Routes UI commands to timer, settings, and reporting handlers.

    Runs on the runtime loop thread only; it is the sole writer of the
    timer state besides the countdown ticks.
    """

    def __init__(
        self,
        *,
        logger: logging.Logger,
        timer: FocusTimer,
        ticker: CountdownTicker,
        history: SessionHistory,
        effects: EffectRunner,
        persistence: PersistenceWorker,
        ui: RuntimeUIPublisher,
        today_fn: Optional[Callable[[], dt.date]] = None,
    ):
        self._logger = logger
        self._timer = timer
        self._ticker = ticker
        self._history = history
        self._effects = effects
        self._persistence = persistence
        self._ui = ui
        self._today_fn = today_fn or dt.date.today
        today = self._today_fn()
        self._stats_period = PERIOD_LAST_WEEK
        self._calendar_month = (today.year, today.month)

    @property
    def stats_period(self) -> str:
        return self._stats_period

    @property
    def calendar_month(self) -> tuple[int, int]:
        return self._calendar_month

    def handle_command(self, command: Mapping[str, Any]) -> None:
        command_type = command.get("type")
        try:
            if command_type in TIMER_COMMANDS:
                self._handle_timer_command(command_type, command)
            elif command_type == COMMAND_SAVE_SETTINGS:
                self._handle_save_settings(command)
            elif command_type == COMMAND_STATS:
                self._handle_stats(command)
            elif command_type == COMMAND_CALENDAR:
                self._handle_calendar(command)
            else:
                self._logger.warning("Ignoring unknown command type: %r", command_type)
        except CommandError as error:
            self._logger.warning("Rejected %s command: %s", command_type, error)
            self._ui.publish_error(str(error))

    def publish_reports(self) -> None:
        """Republish history, the selected stats period, and the calendar month."""
        today = self._today_fn()
        self._ui.publish_history(self._history, today=today)
        self._ui.publish_stats(self._history.period_stats(self._stats_period, today=today))
        year, month = self._calendar_month
        self._ui.publish_calendar(year, month, self._history.month_calendar(year, month))

    def _handle_timer_command(self, action: str, command: Mapping[str, Any]) -> None:
        preset = command.get("preset") if action == COMMAND_SELECT else None
        if preset is not None and not isinstance(preset, str):
            raise CommandError("preset must be a string")

        was_running = self._timer.snapshot().is_running
        result = self._timer.apply(action, preset=preset)

        if result.accepted:
            if result.snapshot.is_running and not was_running:
                self._ticker.start()
            elif not result.snapshot.is_running:
                self._ticker.cancel()
            self._effects.run(result.effects)
            message = None
        else:
            message = timer_rejection_text(action, result.reason)
            self._logger.info("Timer %s rejected: %s", action, result.reason)

        self._ui.publish_timer_update(
            result.snapshot,
            action=action,
            accepted=result.accepted,
            reason=result.reason,
            message=message,
        )

    def _handle_save_settings(self, command: Mapping[str, Any]) -> None:
        configuration = parse_settings_minutes(
            command.get("minutes"),
            current=self._timer.configuration,
        )
        self._logger.info("Saving timer settings: %s", configuration.to_document())
        self._persistence.submit_settings(configuration)

    def _handle_stats(self, command: Mapping[str, Any]) -> None:
        period = command.get("period", self._stats_period)
        if period not in PERIOD_DAYS:
            raise CommandError(f"unknown stats period: {period!r}")
        self._stats_period = period
        self._ui.publish_stats(
            self._history.period_stats(period, today=self._today_fn())
        )

    def _handle_calendar(self, command: Mapping[str, Any]) -> None:
        default_year, default_month = self._calendar_month
        year = _as_int(command.get("year", default_year), "year")
        month = _as_int(command.get("month", default_month), "month")
        if not 1 <= month <= 12:
            raise CommandError(f"month must be in [1, 12], got: {month}")
        if not dt.MINYEAR < year < dt.MAXYEAR:
            raise CommandError(f"year out of range: {year}")
        self._calendar_month = (year, month)
        self._ui.publish_calendar(year, month, self._history.month_calendar(year, month))


def parse_settings_minutes(
    raw: Any,
    *,
    current: TimerConfiguration,
) -> TimerConfiguration:
    """Convert the settings form (integer minutes per preset) to durations.

    Presets missing from the form keep their current duration; negative
    values are refused.
    """
    if not isinstance(raw, Mapping):
        raise CommandError("minutes must be an object keyed by preset")

    unknown = sorted(set(raw) - set(PRESETS))
    if unknown:
        raise CommandError(f"unknown presets: {', '.join(map(str, unknown))}")

    configuration = current
    for preset in PRESETS:
        if preset not in raw:
            continue
        minutes = _as_int(raw[preset], preset)
        if minutes < 0:
            raise CommandError(f"{preset} minutes must be >= 0, got: {minutes}")
        configuration = configuration.with_duration(preset, minutes * 60)
    return configuration


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise CommandError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise CommandError(f"{field} must be an integer") from error
    raise CommandError(f"{field} must be an integer")
