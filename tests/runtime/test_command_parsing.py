import unittest

from runtime.commands import CommandError, parse_settings_minutes
from runtime.messages import timer_rejection_text, timer_status_message
from timer import TimerConfiguration, TimerSnapshot
from timer.constants import PRESET_LOCK_IN, PRESET_LONG_BREAK, PRESET_SMALL_BREAK


def _snapshot(phase: str, remaining: int, *, in_overtime: bool = False) -> TimerSnapshot:
    return TimerSnapshot(
        preset=PRESET_LOCK_IN,
        phase=phase,
        remaining_seconds=remaining,
        duration_seconds=600,
        original_duration=600,
        overtime_seconds=max(0, -remaining) if in_overtime else 0,
        in_overtime=in_overtime,
    )


class ParseSettingsMinutesTests(unittest.TestCase):
    def test_converts_minutes_and_keeps_missing_presets(self) -> None:
        configuration = parse_settings_minutes(
            {PRESET_LOCK_IN: 60, PRESET_SMALL_BREAK: "15"},
            current=TimerConfiguration(),
        )

        self.assertEqual(3600, configuration.duration_for(PRESET_LOCK_IN))
        self.assertEqual(900, configuration.duration_for(PRESET_SMALL_BREAK))
        self.assertEqual(45 * 60, configuration.duration_for(PRESET_LONG_BREAK))

    def test_zero_minutes_is_allowed(self) -> None:
        configuration = parse_settings_minutes(
            {PRESET_SMALL_BREAK: 0},
            current=TimerConfiguration(),
        )
        self.assertEqual(0, configuration.duration_for(PRESET_SMALL_BREAK))

    def test_rejects_invalid_forms(self) -> None:
        cases = [
            None,
            [60],
            {PRESET_LOCK_IN: -1},
            {PRESET_LOCK_IN: "soon"},
            {PRESET_LOCK_IN: True},
            {"Nap": 10},
        ]
        for raw in cases:
            with self.subTest(raw=raw):
                with self.assertRaises(CommandError):
                    parse_settings_minutes(raw, current=TimerConfiguration())


class TimerMessageTests(unittest.TestCase):
    def test_status_message_per_phase(self) -> None:
        self.assertEqual("Ready: Lock In 10:00", timer_status_message(_snapshot("idle", 600)))
        self.assertEqual(
            "Lock In running (09:59 left)",
            timer_status_message(_snapshot("running", 599)),
        )
        self.assertEqual(
            "Lock In in overtime (-00:05)",
            timer_status_message(_snapshot("overtime", -5, in_overtime=True)),
        )
        self.assertEqual(
            "Lock In paused in overtime (-00:05)",
            timer_status_message(_snapshot("paused", -5, in_overtime=True)),
        )

    def test_rejection_text_falls_back_to_generic_message(self) -> None:
        self.assertEqual(
            "There is no active session to complete.",
            timer_rejection_text("complete", "not_active"),
        )
        self.assertEqual(
            "That timer action is not possible right now.",
            timer_rejection_text("tick", "not_running"),
        )


if __name__ == "__main__":
    unittest.main()
