"""Statistics periods and weekday ordering used by reporting."""

from __future__ import annotations

PERIOD_LAST_WEEK = "last_week"
PERIOD_LAST_TWO_WEEKS = "last_two_weeks"
PERIOD_LAST_MONTH = "last_month"

PERIOD_DAYS: dict[str, int] = {
    PERIOD_LAST_WEEK: 7,
    PERIOD_LAST_TWO_WEEKS: 14,
    PERIOD_LAST_MONTH: 30,
}

PERIOD_LABELS: dict[str, str] = {
    PERIOD_LAST_WEEK: "Last Week",
    PERIOD_LAST_TWO_WEEKS: "Last Two Weeks",
    PERIOD_LAST_MONTH: "Last Month",
}

# Sunday-first, matching the calendar grid and the bar chart order.
WEEKDAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

CALENDAR_CELLS = 35
