"""Trailing-window focus statistics computed from daily totals."""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from timer import Session

from .constants import PERIOD_DAYS, WEEKDAY_NAMES


@dataclass(frozen=True)
class PeriodStats:
    """Aggregated Lock In activity for one trailing period."""
    period: str
    period_start: str
    period_end: str
    total_time_in_period: int
    total_overtime_in_period: int
    overtime_percentage: int
    days_with_activity: int
    average_per_active_day: int
    day_averages: dict[str, int]
    day_overtime_totals: dict[str, int]
    highest_day: Optional[str]
    highest_avg: int
    lowest_day: str
    lowest_avg: int
    day_with_most_overtime: Optional[str]
    max_overtime: int

    def to_payload(self) -> dict[str, object]:
        return {
            "period": self.period,
            "period_start": self.period_start,
            "period_end": self.period_end,
            "total_time_in_period": self.total_time_in_period,
            "total_overtime_in_period": self.total_overtime_in_period,
            "overtime_percentage": self.overtime_percentage,
            "days_with_activity": self.days_with_activity,
            "average_per_active_day": self.average_per_active_day,
            "day_averages": dict(self.day_averages),
            "day_overtime_totals": dict(self.day_overtime_totals),
            "highest_day": self.highest_day,
            "highest_avg": self.highest_avg,
            "lowest_day": self.lowest_day,
            "lowest_avg": self.lowest_avg,
            "day_with_most_overtime": self.day_with_most_overtime,
            "max_overtime": self.max_overtime,
        }


def weekday_name(day: dt.date) -> str:
    # date.weekday() is Monday=0; WEEKDAY_NAMES starts on Sunday.
    return WEEKDAY_NAMES[(day.weekday() + 1) % 7]


def period_window(period: str, today: dt.date) -> tuple[dt.date, dt.date]:
    """Return the inclusive `[today - (N - 1), today]` window for a period."""
    try:
        days = PERIOD_DAYS[period]
    except KeyError:
        allowed = ", ".join(sorted(PERIOD_DAYS))
        raise ValueError(f"period must be one of: {allowed}") from None
    return today - dt.timedelta(days=days - 1), today


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_period_stats(
    period: str,
    *,
    daily_totals: Mapping[str, int],
    sessions: Iterable[Session],
    today: dt.date,
) -> PeriodStats:
    start, end = period_window(period, today)

    day_totals = {name: 0 for name in WEEKDAY_NAMES}
    day_counts = {name: 0 for name in WEEKDAY_NAMES}
    day_overtime_totals = {name: 0 for name in WEEKDAY_NAMES}

    total_time = 0
    days_with_activity = 0
    for date_text, seconds in daily_totals.items():
        day = dt.date.fromisoformat(date_text)
        if not start <= day <= end or seconds <= 0:
            continue
        name = weekday_name(day)
        day_totals[name] += seconds
        day_counts[name] += 1
        total_time += seconds
        days_with_activity += 1

    total_overtime = 0
    for session in sessions:
        day = session.day
        if not start <= day <= end:
            continue
        day_overtime_totals[weekday_name(day)] += session.overtime
        total_overtime += session.overtime

    day_averages = {
        name: round_half_up(day_totals[name] / day_counts[name]) if day_counts[name] else 0
        for name in WEEKDAY_NAMES
    }

    highest_day: Optional[str] = None
    highest_avg = 0
    lowest_day = ""
    lowest_avg: Optional[int] = None
    for name in WEEKDAY_NAMES:
        average = day_averages[name]
        if average > highest_avg:
            highest_avg = average
            highest_day = name
        if average > 0 and (lowest_avg is None or average < lowest_avg):
            lowest_avg = average
            lowest_day = name

    if lowest_avg is None:
        lowest_avg = 0
        lowest_day = next(name for name in WEEKDAY_NAMES if day_averages[name] == 0)

    day_with_most_overtime: Optional[str] = None
    max_overtime = 0
    for name in WEEKDAY_NAMES:
        if day_overtime_totals[name] > max_overtime:
            max_overtime = day_overtime_totals[name]
            day_with_most_overtime = name

    return PeriodStats(
        period=period,
        period_start=start.isoformat(),
        period_end=end.isoformat(),
        total_time_in_period=total_time,
        total_overtime_in_period=total_overtime,
        overtime_percentage=(
            round_half_up(total_overtime / total_time * 100) if total_time > 0 else 0
        ),
        days_with_activity=days_with_activity,
        average_per_active_day=(
            round_half_up(total_time / days_with_activity) if days_with_activity else 0
        ),
        day_averages=day_averages,
        day_overtime_totals=day_overtime_totals,
        highest_day=highest_day,
        highest_avg=highest_avg,
        lowest_day=lowest_day,
        lowest_avg=lowest_avg,
        day_with_most_overtime=day_with_most_overtime,
        max_overtime=max_overtime,
    )
