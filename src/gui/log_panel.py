"""
log_panel.py
Collapsible log strip along the bottom of the main window.

Collapsed, it is a single row showing the most recent message; expanded,
it also shows the scrollback.  Lines arrive from Utils.app_log.GuiLogHandler
on the Tk thread.  Writing grotloada.log is the file handler's job, not this
widget's.
"""

from __future__ import annotations

from datetime import datetime

import customtkinter as ctk

from gui.theme import (
    BG_DEEP,
    BG_HEADER,
    BG_HOVER,
    BG_PANEL,
    BORDER,
    FONT_MONO,
    FONT_SMALL,
    TEXT_DIM,
    TEXT_MAIN,
)

_ROW_H = 24
_OPEN_H = 140
_MAX_LINES = 500


class LogPanel(ctk.CTkFrame):
    def __init__(self, parent):
        super().__init__(parent, fg_color=BG_DEEP, corner_radius=0, height=_ROW_H,
                         border_width=1, border_color=BORDER)
        self.grid_propagate(False)
        self.grid_columnconfigure(1, weight=1)
        self.grid_rowconfigure(1, weight=1)
        self._open = False
        self._lines = 0

        header = ctk.CTkFrame(self, fg_color=BG_PANEL, corner_radius=0, height=_ROW_H - 2)
        header.grid(row=0, column=0, columnspan=3, sticky="ew", padx=1, pady=(1, 0))
        header.grid_columnconfigure(1, weight=1)
        ctk.CTkLabel(header, text="Log", font=FONT_SMALL, text_color=TEXT_DIM,
                     width=36).grid(row=0, column=0, padx=(8, 4))
        self._latest = ctk.CTkLabel(header, text="", font=FONT_SMALL,
                                    text_color=TEXT_DIM, anchor="w")
        self._latest.grid(row=0, column=1, sticky="ew")
        self._open_btn = ctk.CTkButton(
            header, text="Expand", width=72, height=18, font=FONT_SMALL,
            fg_color=BG_HEADER, hover_color=BG_HOVER, text_color=TEXT_DIM,
            command=self.toggle,
        )
        self._open_btn.grid(row=0, column=2, padx=6, pady=2)

        self._text = ctk.CTkTextbox(self, font=FONT_MONO, fg_color=BG_DEEP,
                                    text_color=TEXT_MAIN, wrap="none",
                                    corner_radius=0, state="disabled")

    @property
    def is_open(self) -> bool:
        return self._open

    def toggle(self) -> None:
        self._open = not self._open
        if self._open:
            self._text.grid(row=1, column=0, columnspan=3, sticky="nsew", padx=1, pady=(0, 1))
        else:
            self._text.grid_remove()
        self.configure(height=_OPEN_H if self._open else _ROW_H)
        self._open_btn.configure(text="Collapse" if self._open else "Expand")
        self._latest.configure(text_color=TEXT_DIM if self._open else TEXT_MAIN)

    def expand(self) -> None:
        if not self._open:
            self.toggle()

    def append(self, message: str) -> None:
        line = f"{datetime.now():%H:%M:%S}  {message}"
        self._latest.configure(text=line)
        self._text.configure(state="normal")
        self._text.insert("end", line + "\n")
        self._lines += 1
        if self._lines > _MAX_LINES:
            # drop the oldest scrollback line
            self._text.delete("1.0", "2.0")
            self._lines -= 1
        self._text.see("end")
        self._text.configure(state="disabled")
