# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import ttk

from core.timer_engine import PHASE_BREAK, TimerSnapshot, format_time
from services.timer_service import TimerService

STUDY_COLOR = "#B53F4D"
BREAK_COLOR = "#6495ED"
RESET_COLOR = "#424660"
BAR_HEIGHT = 10


def main_button_text(snap: TimerSnapshot) -> str:
    if snap.is_running and snap.awaiting_repeat:
        return "Repeat"
    if snap.is_running:
        return "Stop!"
    return "Go!"


class PomodoroWidget(ttk.Frame):
    def __init__(self, master, timer_service: TimerService):
        super().__init__(master)

        self.timer_service = timer_service
        self._bar_fraction = 1.0
        self._bar_color = STUDY_COLOR

        self._build_ui()

        # wire callbacks from service -> widget UI
        self.timer_service.set_on_tick(self._render)
        self.timer_service.set_on_phase_change(self._render)
        self.timer_service.set_on_state_change(self._render)

        # initial render
        self._render(self.timer_service.get_snapshot())

    def _build_ui(self):
        self.columnconfigure(0, weight=1)
        self.rowconfigure(2, weight=1)

        # timer bar
        self.bar = tk.Canvas(self, height=BAR_HEIGHT, highlightthickness=0, bd=0)
        self.bar.grid(row=0, column=0, sticky="ew")
        self.bar.bind("<Configure>", lambda e: self._draw_bar())

        # autorun + laps
        top = ttk.Frame(self, padding=(10, 6))
        top.grid(row=1, column=0, sticky="ew")
        top.columnconfigure(0, weight=1)

        self.auto_var = tk.BooleanVar(value=self.timer_service.get_snapshot().auto_run)
        ttk.Checkbutton(
            top, text="AutoRun", variable=self.auto_var, command=self._toggle_auto
        ).grid(row=0, column=0, sticky="w")

        self.laps_var = tk.StringVar(value="Laps: 0")
        ttk.Label(top, textvariable=self.laps_var, font=("Sans", 14, "bold")).grid(
            row=0, column=1, sticky="e"
        )

        # clock
        self.time_var = tk.StringVar(value="25:00")
        ttk.Label(self, textvariable=self.time_var, font=("Sans", 48, "bold")).grid(
            row=2, column=0
        )

        # main + reset buttons
        btns = ttk.Frame(self, padding=(55, 10))
        btns.grid(row=3, column=0, sticky="ew")
        btns.columnconfigure(0, weight=1)

        self.main_btn = tk.Button(btns, text="Go!", command=self._toggle)
        self.main_btn.grid(row=0, column=0, sticky="ew", padx=(0, 10))

        self.reset_btn = tk.Button(
            btns, text="Reset", command=self._reset, bg=RESET_COLOR, fg="white"
        )
        self.reset_btn.grid(row=0, column=1)

        # duration fields
        bottom = ttk.Frame(self, padding=(10, 6))
        bottom.grid(row=4, column=0, sticky="ew")

        self.study_text = tk.StringVar(value="")
        self.break_text = tk.StringVar(value="")
        self.study_hint = tk.StringVar(value="")
        self.break_hint = tk.StringVar(value="")

        ttk.Label(bottom, text="Study time: ").grid(row=0, column=0)
        study_entry = ttk.Entry(bottom, textvariable=self.study_text, width=6)
        study_entry.grid(row=0, column=1)
        ttk.Label(bottom, textvariable=self.study_hint, foreground="#6B7280").grid(
            row=0, column=2, padx=(4, 20)
        )

        ttk.Label(bottom, text="Break time: ").grid(row=0, column=3)
        break_entry = ttk.Entry(bottom, textvariable=self.break_text, width=6)
        break_entry.grid(row=0, column=4)
        ttk.Label(bottom, textvariable=self.break_hint, foreground="#6B7280").grid(
            row=0, column=5, padx=(4, 0)
        )

        for entry in (study_entry, break_entry):
            entry.bind("<Return>", lambda e: self._toggle())

    # ---- Actions ----
    def _toggle(self):
        self.timer_service.toggle_start_stop(self.study_text.get(), self.break_text.get())

    def _reset(self):
        self.timer_service.reset()

    def _toggle_auto(self):
        self.timer_service.set_auto_run(self.auto_var.get())

    # ---- Rendering ----
    def _render(self, snap: TimerSnapshot):
        self.time_var.set(format_time(snap.remaining_sec))
        self.laps_var.set(f"Laps: {snap.laps}")
        self.main_btn.configure(text=main_button_text(snap))
        self.study_hint.set(f"({format_time(snap.study_sec)})")
        self.break_hint.set(f"({format_time(snap.break_sec)})")

        self._bar_fraction = 1.0 - snap.progress
        self._bar_color = BREAK_COLOR if snap.phase == PHASE_BREAK else STUDY_COLOR
        self._draw_bar()

    def _draw_bar(self):
        width = self.bar.winfo_width()
        self.bar.delete("all")
        if width <= 1 or self._bar_fraction <= 0:
            return
        self.bar.create_rectangle(
            0,
            0,
            int(width * self._bar_fraction),
            BAR_HEIGHT,
            fill=self._bar_color,
            width=0,
        )
