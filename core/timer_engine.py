# -*- coding: utf-8 -*-

import math
import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional

from core.settings import TimerSettings

PHASE_STUDY = "study"
PHASE_BREAK = "break"

_MINUTES_RE = re.compile(r"[+-]?[0-9]{1,9}")


def parse_minutes(text: Optional[str]) -> Optional[int]:
    """
    Parse a minutes field as typed by the user.
    Returns None for empty, non-numeric, zero, negative or over-long
    (more than nine digits) input.
    """
    if text is None:
        return None
    text = text.strip()
    if not _MINUTES_RE.fullmatch(text):
        return None
    value = int(text)
    if value <= 0:
        return None
    return value


def format_time(seconds: int) -> str:
    m = max(0, seconds) // 60
    s = max(0, seconds) % 60
    return f"{m:02d}:{s:02d}"


@dataclass(frozen=True)
class TimerSnapshot:
    phase: str  # "study" | "break"
    progress: float  # 0.0 .. 1.0
    remaining_sec: int
    phase_sec: int
    laps: int
    is_running: bool
    study_sec: int
    break_sec: int
    auto_run: bool

    @property
    def awaiting_repeat(self) -> bool:
        return self.is_running and self.progress >= 1.0


class TimerState:
    """
    Pomodoro state machine (no Tkinter, no threads).
    The owner calls advance() once per tick.
    """

    def __init__(
        self,
        study_sec: int = 25 * 60,
        break_sec: int = 5 * 60,
        tick_rate: int = 25,
        auto_run: bool = False,
    ):
        if study_sec <= 0 or break_sec <= 0:
            raise ValueError("Durations must be positive.")
        if tick_rate <= 0:
            raise ValueError("Tick rate must be positive.")

        self.study_sec = int(study_sec)
        self.break_sec = int(break_sec)
        self.tick_rate = int(tick_rate)
        self.auto_run = bool(auto_run)

        self.phase = PHASE_STUDY
        self.progress = Fraction(0)
        self.running = False
        self.laps = 0

    @classmethod
    def from_settings(cls, settings: TimerSettings) -> "TimerState":
        return cls(
            study_sec=settings.study_sec,
            break_sec=settings.break_sec,
            tick_rate=settings.tick_rate,
            auto_run=settings.auto_run,
        )

    @property
    def phase_sec(self) -> int:
        if self.phase == PHASE_STUDY:
            return self.study_sec
        return self.break_sec

    @property
    def remaining_sec(self) -> int:
        total = self.phase_sec
        return total - math.floor(self.progress * total)

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self.phase,
            progress=float(self.progress),
            remaining_sec=self.remaining_sec,
            phase_sec=self.phase_sec,
            laps=self.laps,
            is_running=self.running,
            study_sec=self.study_sec,
            break_sec=self.break_sec,
            auto_run=self.auto_run,
        )

    def advance(self) -> bool:
        """
        Apply one tick. Returns True if anything visible changed.
        """
        if not self.running or self.progress >= 1:
            return False

        self.progress += Fraction(1, self.tick_rate * self.phase_sec)

        if self.progress >= 1:
            if self.auto_run:
                self._next_phase()
            else:
                # hold at 100% until the user presses Repeat
                self.progress = Fraction(1)
        return True

    def toggle_start_stop(
        self, pending_study_text: str = "", pending_break_text: str = ""
    ) -> bool:
        """
        Start/Stop button. When the interval is complete this acts as
        Repeat: move to the next phase and keep running.
        Returns the new running flag.
        """
        running = not self.running
        repeat = self.progress >= 1

        if running or repeat:
            self._commit_durations(pending_study_text, pending_break_text)

        if repeat:
            self._next_phase()
            running = True

        self.running = running
        return self.running

    def _commit_durations(self, study_text: str = "", break_text: str = "") -> None:
        minutes = parse_minutes(study_text)
        if minutes is not None:
            self.study_sec = minutes * 60

        minutes = parse_minutes(break_text)
        if minutes is not None:
            self.break_sec = minutes * 60

    def reset(self) -> None:
        self.laps = 0
        self.running = False
        self.phase = PHASE_STUDY
        self.progress = Fraction(0)

    def set_auto_run(self, value: bool) -> None:
        self.auto_run = bool(value)

    def _next_phase(self) -> None:
        if self.phase == PHASE_STUDY:
            self.laps += 1
            self.phase = PHASE_BREAK
        else:
            self.phase = PHASE_STUDY
        self.progress = Fraction(0)
