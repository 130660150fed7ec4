"""Month grid for the focus report calendar."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import AbstractSet, Mapping

from .constants import CALENDAR_CELLS


@dataclass(frozen=True)
class CalendarCell:
    date: str
    day: int
    in_month: bool
    seconds_worked: int
    has_overtime: bool

    def to_payload(self) -> dict[str, object]:
        return {
            "date": self.date,
            "day": self.day,
            "in_month": self.in_month,
            "seconds_worked": self.seconds_worked,
            "has_overtime": self.has_overtime,
        }


def month_grid(
    year: int,
    month: int,
    *,
    daily_totals: Mapping[str, int],
    overtime_dates: AbstractSet[str],
) -> list[CalendarCell]:
    """Return a Sunday-first five-week grid beginning with the month's first week."""
    first = dt.date(year, month, 1)
    offset = (first.weekday() + 1) % 7
    grid_start = first - dt.timedelta(days=offset)

    cells: list[CalendarCell] = []
    for index in range(CALENDAR_CELLS):
        day = grid_start + dt.timedelta(days=index)
        key = day.isoformat()
        in_month = day.month == month
        cells.append(
            CalendarCell(
                date=key,
                day=day.day,
                in_month=in_month,
                seconds_worked=daily_totals.get(key, 0) if in_month else 0,
                has_overtime=in_month and key in overtime_dates,
            )
        )
    return cells
