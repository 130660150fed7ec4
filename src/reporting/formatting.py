"""Display formatting for countdowns and accumulated focus time."""

from __future__ import annotations


def format_countdown(seconds: int) -> str:
    """Format remaining seconds as `MM:SS`, with a leading minus in overtime."""
    sign = "-" if seconds < 0 else ""
    minutes, remainder = divmod(abs(int(seconds)), 60)
    return f"{sign}{minutes:02d}:{remainder:02d}"


def format_hours_minutes(seconds: int) -> str:
    """Format a duration as `Xh Ym`, or `Ym` below one hour."""
    hours, rest = divmod(max(0, int(seconds)), 3600)
    minutes = rest // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
