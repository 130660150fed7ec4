import unittest

from reporting import format_countdown, format_hours_minutes, month_grid


class MonthGridTests(unittest.TestCase):
    def test_grid_starts_on_sunday_before_the_first(self) -> None:
        cells = month_grid(2024, 1, daily_totals={}, overtime_dates=set())

        self.assertEqual(35, len(cells))
        self.assertEqual("2023-12-31", cells[0].date)
        self.assertFalse(cells[0].in_month)
        self.assertEqual("2024-02-03", cells[-1].date)

    def test_month_starting_on_sunday_has_no_leading_days(self) -> None:
        cells = month_grid(2023, 10, daily_totals={}, overtime_dates=set())

        self.assertEqual("2023-10-01", cells[0].date)
        self.assertTrue(cells[0].in_month)

    def test_days_outside_month_carry_no_totals(self) -> None:
        cells = month_grid(
            2024,
            1,
            daily_totals={"2023-12-31": 600, "2024-01-02": 1200},
            overtime_dates={"2023-12-31"},
        )

        self.assertEqual(0, cells[0].seconds_worked)
        self.assertFalse(cells[0].has_overtime)
        self.assertEqual(1200, cells[2].seconds_worked)
        self.assertEqual(
            {
                "date": "2024-01-02",
                "day": 2,
                "in_month": True,
                "seconds_worked": 1200,
                "has_overtime": False,
            },
            cells[2].to_payload(),
        )


class FormattingTests(unittest.TestCase):
    def test_format_countdown(self) -> None:
        self.assertEqual("90:00", format_countdown(5400))
        self.assertEqual("00:00", format_countdown(0))
        self.assertEqual("-01:05", format_countdown(-65))

    def test_format_hours_minutes(self) -> None:
        self.assertEqual("1h 1m", format_hours_minutes(3660))
        self.assertEqual("45m", format_hours_minutes(2700))
        self.assertEqual("0m", format_hours_minutes(59))


if __name__ == "__main__":
    unittest.main()
