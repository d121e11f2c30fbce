# -*- coding: utf-8 -*-

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class TimerSettings:
    """Startup defaults for the timer and its window."""

    study_min: int = 25
    break_min: int = 5
    tick_rate: int = 25  # ticks per second
    auto_run: bool = False

    window_title: str = "PomodoroGo"
    window_size: Tuple[int, int] = (600, 310)
    log_level: str = "INFO"

    @property
    def study_sec(self) -> int:
        return self.study_min * 60

    @property
    def break_sec(self) -> int:
        return self.break_min * 60
