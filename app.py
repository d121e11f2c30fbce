#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging
import sys

from core.settings import TimerSettings
from core.ticker import Ticker
from core.timer_engine import TimerState
from services.timer_service import TimerService
from ui.main_window import MainWindow

LOGGER = logging.getLogger("pomodorogo")


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root.addHandler(handler)


def log_unhandled_exception(exc_type, exc, tb) -> None:
    LOGGER.error("Unhandled exception", exc_info=(exc_type, exc, tb))


def main():
    settings = TimerSettings()
    setup_logging(settings.log_level)
    sys.excepthook = log_unhandled_exception

    timer_service = TimerService(TimerState.from_settings(settings))
    ticker = Ticker(rate=settings.tick_rate)

    app = MainWindow(timer_service, ticker, settings)
    app.run()


if __name__ == "__main__":
    main()
