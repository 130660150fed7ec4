"""Focus timer controller owning the single in-memory `TimerState`."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .configuration import TimerConfiguration
from .constants import (
    ACTION_CONFIGURE,
    ACTIVE_PHASES,
    PHASE_IDLE,
    PRESET_LOCK_IN,
    REASON_COMPLETED,
    REASON_FINISHED,
    REASON_OVERTIME,
    REASON_PAUSED,
    REASON_RESET,
    REASON_RESUMED,
    REASON_SELECTED,
    REASON_STARTED,
)
from .machine import (
    TimerEffect,
    TimerPhase,
    TimerState,
    Transition,
    reconfigure,
    transition,
)


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable timer view exposed to the runtime and UI publishers."""
    preset: str
    phase: TimerPhase
    remaining_seconds: int
    duration_seconds: int
    original_duration: int
    overtime_seconds: int
    in_overtime: bool

    @property
    def is_active(self) -> bool:
        return self.phase in ACTIVE_PHASES

    @property
    def is_running(self) -> bool:
        return self.phase in ("running", "overtime")

    @property
    def elapsed_seconds(self) -> int:
        return self.original_duration - self.remaining_seconds


@dataclass(frozen=True)
class TimerActionResult:
    """Result envelope returned after applying a timer action."""
    action: str
    accepted: bool
    reason: str
    snapshot: TimerSnapshot
    effects: tuple[TimerEffect, ...] = ()


class FocusTimer:
    """Applies timer actions to the owned state and logs lifecycle changes.

    Not thread-safe: a single runtime loop owns the instance.
    """

    def __init__(
        self,
        *,
        configuration: Optional[TimerConfiguration] = None,
        preset: str = PRESET_LOCK_IN,
        overtime_enabled: bool = True,
        today_fn: Optional[Callable[[], dt.date]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._configuration = configuration or TimerConfiguration()
        self._overtime_enabled = overtime_enabled
        self._today_fn = today_fn or dt.date.today
        self._logger = logger or logging.getLogger("timer")
        self._state = TimerState.idle(preset, self._configuration)

    @property
    def configuration(self) -> TimerConfiguration:
        return self._configuration

    @property
    def state(self) -> TimerState:
        return self._state

    def snapshot(self) -> TimerSnapshot:
        state = self._state
        return TimerSnapshot(
            preset=state.preset,
            phase=state.phase,
            remaining_seconds=state.remaining_seconds,
            duration_seconds=self._configuration.duration_for(state.preset),
            original_duration=state.original_duration,
            overtime_seconds=state.overtime_seconds,
            in_overtime=state.in_overtime,
        )

    def apply(self, action: str, *, preset: Optional[str] = None) -> TimerActionResult:
        outcome = transition(
            self._state,
            action,
            configuration=self._configuration,
            today=self._today_fn(),
            preset=preset,
            overtime_enabled=self._overtime_enabled,
        )
        return self._commit(action, outcome)

    def tick(self) -> TimerActionResult:
        return self.apply("tick")

    def update_configuration(self, configuration: TimerConfiguration) -> TimerActionResult:
        if self._state.phase != PHASE_IDLE:
            self._logger.warning(
                "Timer durations changed while %s is %s; new duration applies "
                "from the next fresh start",
                self._state.preset,
                self._state.phase,
            )
        self._configuration = configuration
        return self._commit(ACTION_CONFIGURE, reconfigure(self._state, configuration))

    def _commit(self, action: str, outcome: Transition) -> TimerActionResult:
        self._state = outcome.state
        if outcome.accepted:
            self._log_transition(outcome)
        return TimerActionResult(
            action=action,
            accepted=outcome.accepted,
            reason=outcome.reason,
            snapshot=self.snapshot(),
            effects=outcome.effects,
        )

    def _log_transition(self, outcome: Transition) -> None:
        state = outcome.state
        if outcome.reason == REASON_STARTED:
            self._logger.info(
                "Timer started: preset=%s duration=%ss",
                state.preset,
                state.original_duration,
            )
        elif outcome.reason == REASON_RESUMED:
            self._logger.info(
                "Timer resumed: preset=%s remaining=%ss",
                state.preset,
                state.remaining_seconds,
            )
        elif outcome.reason == REASON_PAUSED:
            self._logger.info(
                "Timer paused: preset=%s remaining=%ss",
                state.preset,
                state.remaining_seconds,
            )
        elif outcome.reason == REASON_OVERTIME:
            self._logger.info("Timer entered overtime: preset=%s", state.preset)
        elif outcome.reason in (REASON_FINISHED, REASON_COMPLETED):
            self._logger.info(
                "Timer %s: preset=%s records=%d",
                outcome.reason,
                state.preset,
                len(outcome.effects),
            )
        elif outcome.reason in (REASON_SELECTED, REASON_RESET):
            self._logger.debug(
                "Timer %s: preset=%s remaining=%ss",
                outcome.reason,
                state.preset,
                state.remaining_seconds,
            )
