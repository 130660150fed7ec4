import datetime as dt
import unittest

from timer import PersistSession, PlayCue, TimerConfiguration, TimerState, reconfigure, transition
from timer.constants import (
    CUE_LOCK_IN,
    CUE_TIMER_COMPLETE,
    PRESET_LOCK_IN,
    PRESET_LONG_BREAK,
    PRESET_SMALL_BREAK,
)

TODAY = dt.date(2024, 1, 1)


def _configuration(lock_in: int = 5, small_break: int = 3, long_break: int = 4) -> TimerConfiguration:
    return TimerConfiguration(
        durations={
            PRESET_LOCK_IN: lock_in,
            PRESET_SMALL_BREAK: small_break,
            PRESET_LONG_BREAK: long_break,
        }
    )


class TimerMachineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.configuration = _configuration()

    def _apply(self, state: TimerState, action: str, **kwargs):
        kwargs.setdefault("configuration", self.configuration)
        kwargs.setdefault("today", TODAY)
        return transition(state, action, **kwargs)

    def _run(self, state: TimerState, actions: list[str]):
        effects = []
        for action in actions:
            outcome = self._apply(state, action)
            state = outcome.state
            effects.extend(outcome.effects)
        return state, effects

    def _idle(self, preset: str = PRESET_LOCK_IN) -> TimerState:
        return TimerState.idle(preset, self.configuration)

    def test_fresh_lock_in_start_captures_duration_and_plays_cue(self) -> None:
        outcome = self._apply(self._idle(), "start")

        self.assertTrue(outcome.accepted)
        self.assertEqual("started", outcome.reason)
        self.assertEqual("running", outcome.state.phase)
        self.assertEqual(5, outcome.state.original_duration)
        self.assertEqual(5, outcome.state.remaining_seconds)
        self.assertEqual((PlayCue(CUE_LOCK_IN),), outcome.effects)

    def test_break_start_plays_no_cue(self) -> None:
        outcome = self._apply(self._idle(PRESET_SMALL_BREAK), "start")

        self.assertTrue(outcome.accepted)
        self.assertEqual((), outcome.effects)

    def test_each_tick_decrements_by_exactly_one(self) -> None:
        state = self._apply(self._idle(), "start").state
        for expected in (4, 3, 2, 1, 0, -1, -2):
            state = self._apply(state, "tick").state
            self.assertEqual(expected, state.remaining_seconds)

    def test_tick_rejected_when_not_running(self) -> None:
        idle = self._idle()
        outcome = self._apply(idle, "tick")

        self.assertFalse(outcome.accepted)
        self.assertEqual("not_running", outcome.reason)
        self.assertIs(idle, outcome.state)

    def test_pause_and_resume_keeps_original_duration_without_cue(self) -> None:
        state, _ = self._run(self._idle(), ["start", "tick", "tick"])
        paused = self._apply(state, "pause")
        resumed = self._apply(paused.state, "start")

        self.assertEqual("paused", paused.state.phase)
        self.assertEqual(3, paused.state.remaining_seconds)
        self.assertTrue(resumed.accepted)
        self.assertEqual("resumed", resumed.reason)
        self.assertEqual("running", resumed.state.phase)
        self.assertEqual(5, resumed.state.original_duration)
        self.assertEqual(3, resumed.state.remaining_seconds)
        self.assertEqual((), resumed.effects)

    def test_immediate_pause_and_resume_is_not_a_fresh_start(self) -> None:
        state, effects = self._run(self._idle(), ["start", "pause", "start"])

        self.assertEqual([PlayCue(CUE_LOCK_IN)], effects)
        self.assertEqual("running", state.phase)
        self.assertEqual(5, state.original_duration)

    def test_start_rejected_while_running(self) -> None:
        state = self._apply(self._idle(), "start").state
        outcome = self._apply(state, "start")

        self.assertFalse(outcome.accepted)
        self.assertEqual("already_running", outcome.reason)
        self.assertEqual((), outcome.effects)

    def test_pause_rejected_when_not_running(self) -> None:
        outcome = self._apply(self._idle(), "pause")

        self.assertFalse(outcome.accepted)
        self.assertEqual("not_running", outcome.reason)

    def test_toggle_starts_then_pauses(self) -> None:
        started = self._apply(self._idle(), "toggle")
        paused = self._apply(started.state, "toggle")

        self.assertEqual("started", started.reason)
        self.assertEqual("paused", paused.reason)
        self.assertEqual("paused", paused.state.phase)

    def test_lock_in_enters_overtime_below_zero_with_complete_cue(self) -> None:
        state, effects = self._run(self._idle(), ["start"] + ["tick"] * 5)
        self.assertEqual(0, state.remaining_seconds)
        self.assertEqual("running", state.phase)

        outcome = self._apply(state, "tick")

        self.assertEqual("overtime", outcome.reason)
        self.assertEqual("overtime", outcome.state.phase)
        self.assertTrue(outcome.state.in_overtime)
        self.assertEqual(-1, outcome.state.remaining_seconds)
        self.assertEqual(1, outcome.state.overtime_seconds)
        self.assertEqual((PlayCue(CUE_TIMER_COMPLETE),), outcome.effects)

        later = self._apply(outcome.state, "tick")
        self.assertEqual("tick", later.reason)
        self.assertEqual((), later.effects)

    def test_complete_without_ticking_records_full_duration(self) -> None:
        state = self._apply(self._idle(), "start").state
        outcome = self._apply(state, "complete")

        self.assertEqual("completed", outcome.reason)
        self.assertEqual("idle", outcome.state.phase)
        (effect,) = outcome.effects
        self.assertIsInstance(effect, PersistSession)
        self.assertEqual(5, effect.draft.duration)
        self.assertEqual(0, effect.draft.overtime)
        self.assertFalse(effect.draft.is_partial_completion)
        self.assertTrue(effect.draft.completed)
        self.assertEqual("2024-01-01", effect.draft.date)
        self.assertEqual(PRESET_LOCK_IN, effect.draft.type)

    def test_complete_after_300_seconds_is_partial(self) -> None:
        self.configuration = _configuration(lock_in=1500)
        state, _ = self._run(self._idle(), ["start"] + ["tick"] * 300)

        (effect,) = self._apply(state, "complete").effects

        self.assertEqual(300, effect.draft.duration)
        self.assertEqual(0, effect.draft.overtime)
        self.assertTrue(effect.draft.is_partial_completion)

    def test_complete_after_120_overtime_seconds(self) -> None:
        state, _ = self._run(self._idle(), ["start"] + ["tick"] * 125)
        self.assertEqual(120, state.overtime_seconds)

        (effect,) = self._apply(state, "complete").effects

        self.assertEqual(5, effect.draft.duration)
        self.assertEqual(120, effect.draft.overtime)
        self.assertFalse(effect.draft.is_partial_completion)

    def test_pause_in_overtime_keeps_overtime_on_resume_and_complete(self) -> None:
        state, _ = self._run(self._idle(), ["start"] + ["tick"] * 8)
        paused = self._apply(state, "pause").state
        self.assertEqual("paused", paused.phase)
        self.assertTrue(paused.in_overtime)

        (effect,) = self._apply(paused, "complete").effects
        self.assertEqual(3, effect.draft.overtime)

        resumed = self._apply(paused, "start").state
        self.assertEqual("overtime", resumed.phase)

    def test_complete_rejected_when_idle(self) -> None:
        outcome = self._apply(self._idle(), "complete")

        self.assertFalse(outcome.accepted)
        self.assertEqual("not_active", outcome.reason)
        self.assertEqual((), outcome.effects)

    def test_break_finishes_at_zero_without_record(self) -> None:
        state = self._apply(self._idle(PRESET_SMALL_BREAK), "start").state
        state, effects = self._run(state, ["tick"] * 3)

        self.assertEqual("idle", state.phase)
        self.assertEqual(3, state.remaining_seconds)
        self.assertEqual([PlayCue(CUE_TIMER_COMPLETE)], effects)

    def test_lock_in_without_overtime_finishes_with_full_record(self) -> None:
        state = self._apply(self._idle(), "start").state
        effects = []
        for _ in range(5):
            outcome = self._apply(state, "tick", overtime_enabled=False)
            state = outcome.state
            effects.extend(outcome.effects)

        self.assertEqual("idle", state.phase)
        self.assertEqual(PlayCue(CUE_TIMER_COMPLETE), effects[0])
        self.assertIsInstance(effects[1], PersistSession)
        self.assertEqual(5, effects[1].draft.duration)
        self.assertEqual(0, effects[1].draft.overtime)

    def test_complete_on_break_resets_without_record(self) -> None:
        state = self._apply(self._idle(PRESET_LONG_BREAK), "start").state
        outcome = self._apply(state, "complete")

        self.assertTrue(outcome.accepted)
        self.assertEqual("idle", outcome.state.phase)
        self.assertEqual((), outcome.effects)

    def test_select_while_running_discards_countdown_without_record(self) -> None:
        state, _ = self._run(self._idle(), ["start", "tick", "tick"])
        outcome = self._apply(state, "select", preset=PRESET_LONG_BREAK)

        self.assertTrue(outcome.accepted)
        self.assertEqual((), outcome.effects)
        self.assertEqual(PRESET_LONG_BREAK, outcome.state.preset)
        self.assertEqual("idle", outcome.state.phase)
        self.assertEqual(4, outcome.state.remaining_seconds)
        self.assertFalse(outcome.state.in_overtime)

    def test_select_unknown_preset_is_rejected(self) -> None:
        idle = self._idle()
        outcome = self._apply(idle, "select", preset="Nap")

        self.assertFalse(outcome.accepted)
        self.assertEqual("unknown_preset", outcome.reason)
        self.assertIs(idle, outcome.state)

    def test_reset_from_overtime_returns_to_configured_duration(self) -> None:
        state, _ = self._run(self._idle(), ["start"] + ["tick"] * 7)
        outcome = self._apply(state, "reset")

        self.assertEqual("idle", outcome.state.phase)
        self.assertEqual(5, outcome.state.remaining_seconds)
        self.assertFalse(outcome.state.in_overtime)
        self.assertEqual((), outcome.effects)

    def test_unknown_action_is_rejected(self) -> None:
        outcome = self._apply(self._idle(), "snooze")

        self.assertFalse(outcome.accepted)
        self.assertEqual("unsupported_action", outcome.reason)

    def test_reconfigure_applies_to_idle_state_only(self) -> None:
        updated = _configuration(lock_in=60)

        idle_outcome = reconfigure(self._idle(), updated)
        self.assertEqual(60, idle_outcome.state.remaining_seconds)

        paused, _ = self._run(self._idle(), ["start", "tick", "pause"])
        paused_outcome = reconfigure(paused, updated)
        self.assertEqual(paused, paused_outcome.state)

        resumed = transition(paused, "start", configuration=updated, today=TODAY)
        self.assertEqual("resumed", resumed.reason)
        self.assertEqual(5, resumed.state.original_duration)
        self.assertEqual((), resumed.effects)


if __name__ == "__main__":
    unittest.main()
