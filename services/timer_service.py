# -*- coding: utf-8 -*-

import logging
import threading
from typing import Callable, Iterable, Optional

from core.ticker import Tick
from core.timer_engine import TimerSnapshot, TimerState, format_time, parse_minutes

logger = logging.getLogger(__name__)


class TimerService:
    """
    Single owner of the TimerState.
    - Serialises tick advancement and UI control actions
    - Callbacks for UI (invoked outside the lock)
    """

    def __init__(self, state: Optional[TimerState] = None):
        self.state = state if state is not None else TimerState()
        self._lock = threading.Lock()

        self._on_tick: Optional[Callable[[TimerSnapshot], None]] = None
        self._on_phase_change: Optional[Callable[[TimerSnapshot], None]] = None
        self._on_state_change: Optional[Callable[[TimerSnapshot], None]] = None

    # ----- Callbacks -----
    def set_on_tick(self, fn: Callable[[TimerSnapshot], None]) -> None:
        self._on_tick = fn

    def set_on_phase_change(self, fn: Callable[[TimerSnapshot], None]) -> None:
        self._on_phase_change = fn

    def set_on_state_change(self, fn: Callable[[TimerSnapshot], None]) -> None:
        self._on_state_change = fn

    def _emit(self, fn: Optional[Callable[[TimerSnapshot], None]], snap: TimerSnapshot) -> None:
        if fn:
            fn(snap)

    # ----- Public API -----
    def get_snapshot(self) -> TimerSnapshot:
        with self._lock:
            return self.state.snapshot()

    def toggle_start_stop(self, study_text: str = "", break_text: str = "") -> TimerSnapshot:
        with self._lock:
            phase_before = self.state.phase
            laps_before = self.state.laps
            self.state.toggle_start_stop(study_text, break_text)
            snap = self.state.snapshot()

        # durations are only committed when the toggle leaves the timer running
        if snap.is_running:
            for label, text in (("study", study_text), ("break", break_text)):
                if text and text.strip() and parse_minutes(text) is None:
                    logger.debug("ignoring %s minutes %.20r", label, text)

        phase_changed = snap.phase != phase_before or snap.laps != laps_before
        if phase_changed:
            logger.info("repeat: %s phase (%s), laps=%d", snap.phase, format_time(snap.phase_sec), snap.laps)
        elif snap.is_running:
            logger.info("started %s phase, %s left", snap.phase, format_time(snap.remaining_sec))
        else:
            logger.info("stopped %s phase, %s left", snap.phase, format_time(snap.remaining_sec))

        self._emit(self._on_state_change, snap)
        if phase_changed:
            self._emit(self._on_phase_change, snap)
        return snap

    def reset(self) -> TimerSnapshot:
        with self._lock:
            self.state.reset()
            snap = self.state.snapshot()
        logger.info("reset")
        self._emit(self._on_state_change, snap)
        return snap

    def set_auto_run(self, value: bool) -> None:
        with self._lock:
            if self.state.auto_run == bool(value):
                return
            self.state.set_auto_run(value)
            snap = self.state.snapshot()
        logger.info("auto-run %s", "on" if value else "off")
        self._emit(self._on_state_change, snap)

    def tick(self) -> bool:
        """
        Apply one tick. Returns True if the visible state changed.
        """
        return self.pump((None,)) == 1

    def pump(self, ticks: Iterable[Optional[Tick]]) -> int:
        """
        Apply queued ticks one at a time, in order, then notify once
        for the whole batch. Returns how many of them changed state.
        """
        changed = 0
        phase_changed = False
        for _ in ticks:
            with self._lock:
                phase_before = self.state.phase
                if not self.state.advance():
                    continue
                changed += 1
                snap = self.state.snapshot()

            if snap.phase != phase_before:
                phase_changed = True
                logger.info("%s phase started, laps=%d", snap.phase, snap.laps)
            elif snap.awaiting_repeat:
                logger.info("%s phase complete, waiting for repeat", snap.phase)

        if not changed:
            return 0

        snap = self.get_snapshot()
        self._emit(self._on_tick, snap)
        if phase_changed:
            self._emit(self._on_phase_change, snap)
        return changed
