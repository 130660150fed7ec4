"""Reporting over historical Lock In sessions."""

from .calendar_view import CalendarCell, month_grid
from .constants import (
    PERIOD_DAYS,
    PERIOD_LAST_MONTH,
    PERIOD_LAST_TWO_WEEKS,
    PERIOD_LAST_WEEK,
    WEEKDAY_NAMES,
)
from .formatting import format_countdown, format_hours_minutes
from .history import SessionHistory
from .stats import PeriodStats, compute_period_stats, period_window

__all__ = [
    "CalendarCell",
    "PERIOD_DAYS",
    "PERIOD_LAST_MONTH",
    "PERIOD_LAST_TWO_WEEKS",
    "PERIOD_LAST_WEEK",
    "PeriodStats",
    "SessionHistory",
    "WEEKDAY_NAMES",
    "compute_period_stats",
    "format_countdown",
    "format_hours_minutes",
    "month_grid",
    "period_window",
]
