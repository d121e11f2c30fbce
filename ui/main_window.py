# -*- coding: utf-8 -*-

import logging
import tkinter as tk
from tkinter import ttk

from core.settings import TimerSettings
from core.ticker import Ticker
from services.timer_service import TimerService
from ui.pomodoro_widget import PomodoroWidget

logger = logging.getLogger(__name__)


class MainWindow:
    def __init__(
        self,
        timer_service: TimerService,
        ticker: Ticker,
        settings: TimerSettings = TimerSettings(),
    ):
        self.timer_service = timer_service
        self.ticker = ticker
        self.settings = settings

        self.root = tk.Tk()
        self.root.title(settings.window_title)
        width, height = settings.window_size
        self.root.geometry(f"{width}x{height}")

        self.poll_ms = max(1, int(round(self.ticker.interval * 1000)))
        self._pump_job = None

        self.root.report_callback_exception = self._report_callback_exception

        self._build_ui()
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    def _build_ui(self):
        outer = ttk.Frame(self.root)
        outer.pack(fill="both", expand=True)

        self.pomodoro = PomodoroWidget(outer, timer_service=self.timer_service)
        self.pomodoro.pack(fill="both", expand=True)

    def run(self):
        self.ticker.start()
        self._schedule_pump()
        self.root.mainloop()

    # ---- Tick hand-off (ticker thread -> Tk loop) ----
    def _schedule_pump(self):
        self._pump_job = self.root.after(self.poll_ms, self._pump_ticks)

    def _pump_ticks(self):
        self._pump_job = None
        self.timer_service.pump(self.ticker.drain())
        self._schedule_pump()

    def _report_callback_exception(self, exc_type, exc, tb):
        logger.error("Error in Tk callback", exc_info=(exc_type, exc, tb))

    def _on_close(self):
        if self._pump_job is not None:
            try:
                self.root.after_cancel(self._pump_job)
            except Exception:
                pass
            self._pump_job = None
        self.ticker.stop()
        logger.info("window closed")
        self.root.destroy()
