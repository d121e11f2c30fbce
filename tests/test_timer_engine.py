"""Tests for the Pomodoro state machine."""

from fractions import Fraction

import pytest

from core.settings import TimerSettings
from core.timer_engine import (
    PHASE_BREAK,
    PHASE_STUDY,
    TimerState,
    format_time,
    parse_minutes,
)


def advance(state: TimerState, n: int) -> None:
    for _ in range(n):
        state.advance()


def started(**kwargs) -> TimerState:
    state = TimerState(**kwargs)
    state.toggle_start_stop()
    return state


class TestDefaults:
    def test_initial_state(self) -> None:
        state = TimerState()
        assert state.phase == PHASE_STUDY
        assert state.study_sec == 1500
        assert state.break_sec == 300
        assert not state.running
        assert state.progress == 0
        assert state.laps == 0
        assert not state.auto_run

    def test_from_settings(self) -> None:
        state = TimerState.from_settings(TimerSettings(study_min=50, break_min=10, auto_run=True))
        assert state.study_sec == 3000
        assert state.break_sec == 600
        assert state.auto_run

    @pytest.mark.parametrize("kwargs", [{"study_sec": 0}, {"break_sec": -1}, {"tick_rate": 0}])
    def test_rejects_non_positive_values(self, kwargs) -> None:
        with pytest.raises(ValueError):
            TimerState(**kwargs)


class TestAdvance:
    def test_noop_when_stopped(self) -> None:
        state = TimerState()
        assert state.advance() is False
        assert state.progress == 0

    def test_progress_follows_tick_count(self) -> None:
        state = started(study_sec=2)
        previous = Fraction(0)
        for n in range(1, 60):
            state.advance()
            assert state.progress == min(Fraction(1), Fraction(n, 25 * 2))
            assert state.progress >= previous
            previous = state.progress

    def test_full_study_interval_clamps(self) -> None:
        state = started(study_sec=1500)
        advance(state, 37500)
        assert state.progress == 1
        assert state.snapshot().progress == 1.0
        assert state.remaining_sec == 0
        assert state.running

        before = state.snapshot()
        assert state.advance() is False
        assert state.snapshot() == before

    def test_clamped_is_idempotent(self) -> None:
        state = started(study_sec=60)
        advance(state, 1500 + 100)
        assert state.progress == 1
        assert state.phase == PHASE_STUDY
        assert state.laps == 0

    def test_auto_run_flips_to_break(self) -> None:
        state = started(study_sec=60, break_sec=60, auto_run=True)
        advance(state, 1500)
        assert state.phase == PHASE_BREAK
        assert state.laps == 1
        assert state.progress == 0
        assert state.running

    def test_auto_run_break_does_not_count_lap(self) -> None:
        state = started(study_sec=60, break_sec=60, auto_run=True)
        advance(state, 3000)
        assert state.phase == PHASE_STUDY
        assert state.laps == 1

    def test_auto_run_cycles_indefinitely(self) -> None:
        state = started(study_sec=60, break_sec=120, auto_run=True)
        cycle = 25 * 60 + 25 * 120
        advance(state, cycle * 4)
        assert state.laps == 4
        assert state.phase == PHASE_STUDY
        assert state.progress == 0

    def test_auto_run_applies_on_next_advance(self) -> None:
        state = started(study_sec=60)
        advance(state, 1500)
        assert state.progress == 1

        state.set_auto_run(True)
        # already complete: advance alone does not move on
        assert state.advance() is False
        state.toggle_start_stop()
        advance(state, 25 * 300)
        assert state.phase == PHASE_STUDY
        assert state.laps == 1


class TestToggleStartStop:
    def test_start_and_stop(self) -> None:
        state = TimerState()
        assert state.toggle_start_stop() is True
        advance(state, 10)
        assert state.toggle_start_stop() is False
        progress = state.progress
        advance(state, 10)
        assert state.progress == progress

    def test_start_commits_minutes(self) -> None:
        state = TimerState()
        state.toggle_start_stop(" 10 ", "3")
        assert state.study_sec == 600
        assert state.break_sec == 180

    def test_invalid_text_keeps_prior_duration(self) -> None:
        state = TimerState()
        state.toggle_start_stop("abc", "")
        assert state.running
        assert state.study_sec == 1500
        assert state.break_sec == 300

    def test_oversized_minutes_keep_prior_duration(self) -> None:
        state = TimerState()
        assert state.toggle_start_stop("9" * 5000, "") is True
        assert state.study_sec == 1500

    def test_stop_does_not_commit(self) -> None:
        state = started()
        state.toggle_start_stop("10", "10")
        assert not state.running
        assert state.study_sec == 1500
        assert state.break_sec == 300

    def test_repeat_from_study(self) -> None:
        state = started(study_sec=60)
        advance(state, 1500)

        assert state.toggle_start_stop() is True
        assert state.phase == PHASE_BREAK
        assert state.laps == 1
        assert state.progress == 0

    def test_repeat_from_break_keeps_laps(self) -> None:
        state = started(study_sec=60, break_sec=60)
        advance(state, 1500)
        state.toggle_start_stop()
        advance(state, 1500)

        state.toggle_start_stop()
        assert state.phase == PHASE_STUDY
        assert state.laps == 1
        assert state.running

    def test_repeat_forces_running_when_stopped(self) -> None:
        state = started(study_sec=60)
        advance(state, 1500)
        state.running = False

        assert state.toggle_start_stop() is True
        assert state.phase == PHASE_BREAK
        assert state.progress == 0

    def test_repeat_commits_minutes(self) -> None:
        state = started(study_sec=60)
        advance(state, 1500)
        state.toggle_start_stop("", "2")
        assert state.break_sec == 120
        assert state.remaining_sec == 120

    def test_duration_change_keeps_fraction(self) -> None:
        state = started(study_sec=60)
        advance(state, 750)
        state.toggle_start_stop()
        state.toggle_start_stop("2")
        assert state.progress == Fraction(1, 2)
        assert state.remaining_sec == 60


class TestReset:
    def test_reset_from_any_state(self) -> None:
        state = started(study_sec=60, break_sec=60, auto_run=True)
        advance(state, 2000)
        assert state.laps == 1

        state.reset()
        assert state.phase == PHASE_STUDY
        assert not state.running
        assert state.progress == 0
        assert state.laps == 0

    def test_reset_keeps_durations_and_auto_run(self) -> None:
        state = started(auto_run=True)
        state.toggle_start_stop()
        state.toggle_start_stop("7")
        state.reset()
        assert state.study_sec == 420
        assert state.auto_run


class TestSnapshot:
    def test_remaining_seconds(self) -> None:
        state = started(study_sec=60)
        advance(state, 26)
        snap = state.snapshot()
        assert snap.phase == PHASE_STUDY
        assert snap.remaining_sec == 59
        assert snap.phase_sec == 60
        assert snap.is_running
        assert not snap.awaiting_repeat

    def test_awaiting_repeat(self) -> None:
        state = started(study_sec=60)
        advance(state, 1500)
        assert state.snapshot().awaiting_repeat


class TestParseMinutes:
    @pytest.mark.parametrize(
        "text, expected",
        [("25", 25), (" 5\t", 5), ("+3", 3), ("007", 7), ("999999999", 999999999)],
    )
    def test_valid(self, text, expected) -> None:
        assert parse_minutes(text) == expected

    @pytest.mark.parametrize("text", [None, "", "  ", "abc", "1.5", "0", "-4", "1_0", "5m", "9" * 5000, "1234567890"])
    def test_invalid(self, text) -> None:
        assert parse_minutes(text) is None


class TestFormatTime:
    def test_format(self) -> None:
        assert format_time(1500) == "25:00"
        assert format_time(59) == "00:59"
        assert format_time(6000) == "100:00"

    def test_negative_clamps(self) -> None:
        assert format_time(-3) == "00:00"
