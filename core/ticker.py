# -*- coding: utf-8 -*-

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tick:
    seq: int


class Ticker:
    """
    Fixed-rate tick source running on its own thread.

    Ticks are queued, never dropped: a slow consumer sees them late
    but still gets one per period. Once stopped it cannot be restarted.
    """

    def __init__(self, rate: int = 25):
        if rate <= 0:
            raise ValueError("Tick rate must be positive.")
        self.rate = rate

        self._queue: "queue.Queue[Tick]" = queue.Queue()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def interval(self) -> float:
        return 1.0 / self.rate

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "Ticker":
        if self._stop.is_set():
            raise RuntimeError("Ticker cannot be restarted once stopped.")
        if self._thread is None:
            self._thread = threading.Thread(
                target=self._run, name="ticker", daemon=True
            )
            self._thread.start()
            logger.debug("ticker started at %d Hz", self.rate)
        return self

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=1.0)
        logger.debug("ticker stopped")

    def drain(self) -> List[Tick]:
        """Return every tick queued so far without blocking."""
        out: List[Tick] = []
        while True:
            try:
                out.append(self._queue.get_nowait())
            except queue.Empty:
                return out

    def ticks(self) -> Iterator[Tick]:
        """Blocking, endless stream of ticks (ends only once stopped)."""
        while True:
            try:
                yield self._queue.get(timeout=self.interval * 4)
            except queue.Empty:
                if self._stop.is_set():
                    return

    def _run(self) -> None:
        started = time.monotonic()
        seq = 0
        while True:
            seq += 1
            # deadlines are anchored to the start time
            delay = started + seq * self.interval - time.monotonic()
            if self._stop.wait(max(0.0, delay)):
                return
            self._queue.put(Tick(seq))
