"""In-memory session history feeding calendar and period statistics."""

from __future__ import annotations

import datetime as dt
import logging
from collections import defaultdict
from typing import Callable, Iterable, Optional

from timer import Session

from .calendar_view import CalendarCell, month_grid
from .stats import PeriodStats, compute_period_stats


class SessionHistory:
    """Full session list, fetched once and grown only by appends.

    Only completed Lock In sessions contribute to reporting; other records
    are kept but ignored by every aggregation.
    """

    def __init__(
        self,
        sessions: Iterable[Session] = (),
        *,
        today_fn: Optional[Callable[[], dt.date]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._sessions: list[Session] = list(sessions)
        self._today_fn = today_fn or dt.date.today
        self._logger = logger or logging.getLogger("reporting")

    def __len__(self) -> int:
        return len(self._sessions)

    @property
    def sessions(self) -> tuple[Session, ...]:
        return tuple(self._sessions)

    def append(self, session: Session) -> None:
        self._sessions.append(session)
        self._logger.debug(
            "Session appended: id=%s date=%s type=%s duration=%ss overtime=%ss",
            session.id,
            session.date,
            session.type,
            session.duration,
            session.overtime,
        )

    def reporting_sessions(self) -> list[Session]:
        return [session for session in self._sessions if session.counts_toward_reporting]

    def daily_totals(self) -> dict[str, int]:
        totals: dict[str, int] = defaultdict(int)
        for session in self.reporting_sessions():
            totals[session.date] += session.credited_seconds
        return dict(totals)

    def overtime_dates(self) -> set[str]:
        return {
            session.date
            for session in self.reporting_sessions()
            if session.overtime > 0
        }

    def period_stats(self, period: str, *, today: Optional[dt.date] = None) -> PeriodStats:
        return compute_period_stats(
            period,
            daily_totals=self.daily_totals(),
            sessions=self.reporting_sessions(),
            today=today or self._today_fn(),
        )

    def month_calendar(self, year: int, month: int) -> list[CalendarCell]:
        return month_grid(
            year,
            month,
            daily_totals=self.daily_totals(),
            overtime_dates=self.overtime_dates(),
        )

    def session_number(self) -> int:
        """Ordinal of the next Lock In session, shown as `#N`."""
        return len(self.reporting_sessions()) + 1
