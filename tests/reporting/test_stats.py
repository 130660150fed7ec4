import datetime as dt
import unittest

from reporting import compute_period_stats, period_window
from reporting.stats import round_half_up, weekday_name
from timer import Session


def _session(date: str, duration: int, overtime: int = 0) -> Session:
    return Session(
        id=f"{date}-{duration}",
        date=date,
        type="Lock In",
        duration=duration,
        completed=True,
        overtime=overtime,
    )


def _stats(period: str, sessions: list[Session], today: dt.date):
    totals: dict[str, int] = {}
    for session in sessions:
        totals[session.date] = totals.get(session.date, 0) + session.credited_seconds
    return compute_period_stats(period, daily_totals=totals, sessions=sessions, today=today)


class PeriodStatsTests(unittest.TestCase):
    def test_empty_window_reports_zero_with_a_lowest_day(self) -> None:
        stats = _stats("last_week", [], dt.date(2024, 1, 10))

        self.assertEqual(0, stats.total_time_in_period)
        self.assertEqual(0, stats.days_with_activity)
        self.assertEqual(0, stats.average_per_active_day)
        self.assertEqual(0, stats.overtime_percentage)
        self.assertEqual("Sunday", stats.lowest_day)
        self.assertEqual(0, stats.lowest_avg)
        self.assertIsNone(stats.highest_day)
        self.assertIsNone(stats.day_with_most_overtime)

    def test_last_week_aggregates_inside_window_only(self) -> None:
        sessions = [
            _session("2023-12-31", 9999),
            _session("2024-01-01", 1500),
            _session("2024-01-01", 600, overtime=60),
            _session("2024-01-03", 3600),
        ]

        stats = _stats("last_week", sessions, dt.date(2024, 1, 7))

        self.assertEqual(5760, stats.total_time_in_period)
        self.assertEqual(2, stats.days_with_activity)
        self.assertEqual(2880, stats.average_per_active_day)
        self.assertEqual("Wednesday", stats.highest_day)
        self.assertEqual(3600, stats.highest_avg)
        self.assertEqual("Monday", stats.lowest_day)
        self.assertEqual(2160, stats.lowest_avg)
        self.assertEqual(60, stats.total_overtime_in_period)
        self.assertEqual(1, stats.overtime_percentage)
        self.assertEqual("Monday", stats.day_with_most_overtime)
        self.assertEqual(60, stats.max_overtime)

    def test_ties_resolve_to_first_day_in_sunday_first_order(self) -> None:
        sessions = [
            _session("2024-01-03", 1800),
            _session("2024-01-01", 1800),
        ]

        stats = _stats("last_week", sessions, dt.date(2024, 1, 7))

        self.assertEqual("Monday", stats.highest_day)
        self.assertEqual("Monday", stats.lowest_day)

    def test_day_averages_round_half_up(self) -> None:
        sessions = [
            _session("2024-01-01", 1001),
            _session("2024-01-08", 1000),
        ]

        stats = _stats("last_two_weeks", sessions, dt.date(2024, 1, 14))

        self.assertEqual(1001, stats.day_averages["Monday"])
        self.assertEqual(2, stats.days_with_activity)

    def test_payload_is_json_friendly(self) -> None:
        payload = _stats("last_month", [_session("2024-01-05", 60)], dt.date(2024, 1, 30)).to_payload()

        self.assertEqual("last_month", payload["period"])
        self.assertEqual("2024-01-01", payload["period_start"])
        self.assertEqual(60, payload["day_averages"]["Friday"])

    def test_period_window_is_inclusive_of_today(self) -> None:
        self.assertEqual(
            (dt.date(2024, 1, 1), dt.date(2024, 1, 30)),
            period_window("last_month", dt.date(2024, 1, 30)),
        )

    def test_unknown_period_raises_value_error(self) -> None:
        with self.assertRaises(ValueError):
            period_window("last_year", dt.date(2024, 1, 1))

    def test_helpers(self) -> None:
        self.assertEqual("Sunday", weekday_name(dt.date(2024, 1, 7)))
        self.assertEqual(3, round_half_up(2.5))
        self.assertEqual(2, round_half_up(2.49))


if __name__ == "__main__":
    unittest.main()
