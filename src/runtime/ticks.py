"""One-second countdown interval and tick result handling."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from timer import FocusTimer, TimerActionResult
from timer.constants import ACTION_TICK

from .effects import EffectRunner
from .ui import RuntimeUIPublisher

DEFAULT_TICK_INTERVAL_SECONDS = 1.0


class CountdownTicker:
    """Monotonic interval source; at most one interval is active at a time.

    `start()` always begins a fresh interval, so a pause followed by a start
    never inherits a partial second from the previous run.
    """

    def __init__(
        self,
        *,
        interval_seconds: float = DEFAULT_TICK_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")
        self._interval_seconds = float(interval_seconds)
        self._clock = clock
        self._next_due: Optional[float] = None

    @property
    def is_active(self) -> bool:
        return self._next_due is not None

    def start(self) -> None:
        self._next_due = self._clock() + self._interval_seconds

    def cancel(self) -> None:
        self._next_due = None

    def due_ticks(self, now: Optional[float] = None) -> int:
        """Return how many intervals elapsed since the last call."""
        if self._next_due is None:
            return 0
        current = self._clock() if now is None else now
        count = 0
        while current >= self._next_due:
            count += 1
            self._next_due += self._interval_seconds
        return count

    def seconds_until_due(self, now: Optional[float] = None) -> Optional[float]:
        if self._next_due is None:
            return None
        current = self._clock() if now is None else now
        return max(0.0, self._next_due - current)


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for applying countdown ticks."""
    timer: FocusTimer
    ticker: CountdownTicker
    effects: EffectRunner
    ui: RuntimeUIPublisher
    logger: logging.Logger


class TickProcessor:
    """Feeds due intervals into the timer and publishes the results."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def process_due(self, now: Optional[float] = None) -> int:
        deps = self._dependencies
        due = deps.ticker.due_ticks(now)
        applied = 0
        for _ in range(due):
            result = deps.timer.tick()
            if not result.accepted:
                deps.ticker.cancel()
                break
            applied += 1
            self._handle_result(result)
            if not result.snapshot.is_running:
                deps.ticker.cancel()
                break

        if due > 1:
            deps.logger.debug("Caught up %d countdown ticks", due)
        return applied

    def _handle_result(self, result: TimerActionResult) -> None:
        deps = self._dependencies
        deps.effects.run(result.effects)
        deps.ui.publish_timer_update(
            result.snapshot,
            action=ACTION_TICK,
            accepted=result.accepted,
            reason=result.reason,
        )
