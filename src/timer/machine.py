"""Pure countdown/overtime transitions for the focus timer.

Every transition is a function of the current `TimerState`, the action, and
the inputs the action needs (configuration, calendar day). Side effects are
returned as values so the caller decides when to play cues or persist
sessions.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from typing import Literal, Optional, Union

from .configuration import TimerConfiguration
from .constants import (
    ACTION_COMPLETE,
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SELECT,
    ACTION_START,
    ACTION_TICK,
    ACTION_TOGGLE,
    ACTIVE_PHASES,
    CUE_LOCK_IN,
    CUE_TIMER_COMPLETE,
    PHASE_IDLE,
    PHASE_OVERTIME,
    PHASE_PAUSED,
    PHASE_RUNNING,
    PRESET_LOCK_IN,
    PRESETS,
    REASON_ALREADY_RUNNING,
    REASON_COMPLETED,
    REASON_CONFIGURED,
    REASON_FINISHED,
    REASON_NOT_ACTIVE,
    REASON_NOT_RUNNING,
    REASON_OVERTIME,
    REASON_PAUSED,
    REASON_RESET,
    REASON_RESUMED,
    REASON_SELECTED,
    REASON_STARTED,
    REASON_TICK,
    REASON_UNKNOWN_PRESET,
    REASON_UNSUPPORTED_ACTION,
    TICKING_PHASES,
)
from .records import SessionDraft

TimerPhase = Literal["idle", "running", "paused", "overtime"]
TimerAction = Literal["select", "start", "pause", "toggle", "tick", "complete", "reset"]


@dataclass(frozen=True)
class TimerState:
    """Transient countdown state for the active preset."""
    preset: str
    phase: TimerPhase
    remaining_seconds: int
    original_duration: int
    in_overtime: bool = False

    @property
    def is_running(self) -> bool:
        return self.phase in TICKING_PHASES

    @property
    def is_active(self) -> bool:
        return self.phase in ACTIVE_PHASES

    @property
    def overtime_seconds(self) -> int:
        if not self.in_overtime:
            return 0
        return max(0, -self.remaining_seconds)

    @classmethod
    def idle(cls, preset: str, configuration: TimerConfiguration) -> "TimerState":
        duration = configuration.duration_for(preset)
        return cls(
            preset=preset,
            phase=PHASE_IDLE,
            remaining_seconds=duration,
            original_duration=duration,
        )


@dataclass(frozen=True)
class PlayCue:
    cue: str


@dataclass(frozen=True)
class PersistSession:
    draft: SessionDraft


TimerEffect = Union[PlayCue, PersistSession]


@dataclass(frozen=True)
class Transition:
    """Next state plus the side effects the caller must carry out."""
    state: TimerState
    accepted: bool
    reason: str
    effects: tuple[TimerEffect, ...] = ()


def transition(
    state: TimerState,
    action: str,
    *,
    configuration: TimerConfiguration,
    today: dt.date,
    preset: Optional[str] = None,
    overtime_enabled: bool = True,
) -> Transition:
    if action == ACTION_SELECT:
        return _select(state, preset, configuration)
    if action == ACTION_TOGGLE:
        action = ACTION_PAUSE if state.is_running else ACTION_START
    if action == ACTION_START:
        return _start(state, configuration)
    if action == ACTION_PAUSE:
        return _pause(state)
    if action == ACTION_TICK:
        return _tick(state, configuration, today, overtime_enabled)
    if action == ACTION_COMPLETE:
        return _complete(state, configuration, today)
    if action == ACTION_RESET:
        return Transition(
            TimerState.idle(state.preset, configuration),
            True,
            REASON_RESET,
        )
    return Transition(state, False, REASON_UNSUPPORTED_ACTION)


def reconfigure(state: TimerState, configuration: TimerConfiguration) -> Transition:
    """Apply new durations; only an idle countdown picks them up immediately."""
    if state.phase == PHASE_IDLE:
        return Transition(
            TimerState.idle(state.preset, configuration),
            True,
            REASON_CONFIGURED,
        )
    return Transition(state, True, REASON_CONFIGURED)


def completion_draft(state: TimerState, today: dt.date) -> SessionDraft:
    """Credit a manually completed Lock In countdown."""
    original = state.original_duration
    if state.in_overtime:
        return SessionDraft(
            date=today.isoformat(),
            type=state.preset,
            duration=original,
            overtime=state.overtime_seconds,
        )
    if state.remaining_seconds < original:
        return SessionDraft(
            date=today.isoformat(),
            type=state.preset,
            duration=original - state.remaining_seconds,
            overtime=0,
            is_partial_completion=True,
        )
    return SessionDraft(
        date=today.isoformat(),
        type=state.preset,
        duration=original,
        overtime=0,
    )


def _select(
    state: TimerState,
    preset: Optional[str],
    configuration: TimerConfiguration,
) -> Transition:
    if preset not in PRESETS:
        return Transition(state, False, REASON_UNKNOWN_PRESET)
    return Transition(TimerState.idle(preset, configuration), True, REASON_SELECTED)


def _start(state: TimerState, configuration: TimerConfiguration) -> Transition:
    if state.is_running:
        return Transition(state, False, REASON_ALREADY_RUNNING)

    if state.phase == PHASE_PAUSED:
        phase: TimerPhase = PHASE_OVERTIME if state.in_overtime else PHASE_RUNNING
        return Transition(replace(state, phase=phase), True, REASON_RESUMED)

    duration = configuration.duration_for(state.preset)
    started = TimerState(
        preset=state.preset,
        phase=PHASE_RUNNING,
        remaining_seconds=duration,
        original_duration=duration,
    )
    effects: tuple[TimerEffect, ...] = ()
    if state.preset == PRESET_LOCK_IN:
        effects = (PlayCue(CUE_LOCK_IN),)
    return Transition(started, True, REASON_STARTED, effects)


def _pause(state: TimerState) -> Transition:
    if not state.is_running:
        return Transition(state, False, REASON_NOT_RUNNING)
    return Transition(replace(state, phase=PHASE_PAUSED), True, REASON_PAUSED)


def _tick(
    state: TimerState,
    configuration: TimerConfiguration,
    today: dt.date,
    overtime_enabled: bool,
) -> Transition:
    if not state.is_running:
        return Transition(state, False, REASON_NOT_RUNNING)

    remaining = state.remaining_seconds - 1
    if state.preset == PRESET_LOCK_IN and overtime_enabled:
        if remaining < 0 and not state.in_overtime:
            return Transition(
                replace(
                    state,
                    phase=PHASE_OVERTIME,
                    remaining_seconds=remaining,
                    in_overtime=True,
                ),
                True,
                REASON_OVERTIME,
                (PlayCue(CUE_TIMER_COMPLETE),),
            )
        return Transition(replace(state, remaining_seconds=remaining), True, REASON_TICK)

    if remaining > 0:
        return Transition(replace(state, remaining_seconds=remaining), True, REASON_TICK)

    effects: list[TimerEffect] = [PlayCue(CUE_TIMER_COMPLETE)]
    if state.preset == PRESET_LOCK_IN:
        effects.append(
            PersistSession(
                SessionDraft(
                    date=today.isoformat(),
                    type=state.preset,
                    duration=state.original_duration,
                    overtime=0,
                )
            )
        )
    return Transition(
        TimerState.idle(state.preset, configuration),
        True,
        REASON_FINISHED,
        tuple(effects),
    )


def _complete(
    state: TimerState,
    configuration: TimerConfiguration,
    today: dt.date,
) -> Transition:
    if state.phase == PHASE_IDLE:
        return Transition(state, False, REASON_NOT_ACTIVE)

    effects: tuple[TimerEffect, ...] = ()
    if state.preset == PRESET_LOCK_IN:
        effects = (PersistSession(completion_draft(state, today)),)
    return Transition(
        TimerState.idle(state.preset, configuration),
        True,
        REASON_COMPLETED,
        effects,
    )
