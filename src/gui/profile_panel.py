"""
profile_panel.py
Side panel for saved profiles: name entry, Save / Refresh buttons and one
row per stored profile with Load and Delete.
"""

from __future__ import annotations

import tkinter as tk
from typing import Callable

import customtkinter as ctk

from gui.theme import (
    ACCENT,
    ACCENT_HOV,
    BG_HEADER,
    BG_HOVER,
    BG_PANEL,
    BORDER,
    FONT_BOLD,
    FONT_NORMAL,
    FONT_SMALL,
    GREEN_BTN,
    GREEN_HOV,
    RED_BTN,
    RED_HOV,
    TEXT_DIM,
    TEXT_MAIN,
)


class ProfilePanel(ctk.CTkFrame):
    def __init__(
        self,
        parent,
        on_save: Callable[[str], None],
        on_load: Callable[[str], None],
        on_delete: Callable[[str], None],
        on_refresh: Callable[[], None],
    ):
        super().__init__(parent, fg_color=BG_PANEL, corner_radius=0)
        self._on_save = on_save
        self._on_load = on_load
        self._on_delete = on_delete
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        ctk.CTkLabel(
            self, text="Profiles", font=FONT_BOLD, text_color=TEXT_MAIN, anchor="w"
        ).grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 4))

        bar = ctk.CTkFrame(self, fg_color="transparent")
        bar.grid(row=1, column=0, sticky="ew", padx=12)
        bar.grid_columnconfigure(0, weight=1)
        self._save_btn = ctk.CTkButton(
            bar, text="Save", height=28, font=FONT_NORMAL,
            fg_color=ACCENT, hover_color=ACCENT_HOV, text_color="white",
            command=self._save_clicked, state="disabled",
        )
        self._save_btn.grid(row=0, column=0, sticky="ew", padx=(0, 4))
        ctk.CTkButton(
            bar, text="Refresh", width=80, height=28, font=FONT_NORMAL,
            fg_color=GREEN_BTN, hover_color=GREEN_HOV, text_color="white",
            command=on_refresh,
        ).grid(row=0, column=1)

        self._name_var = tk.StringVar()
        self._name_var.trace_add("write", lambda *_: self._update_save_state())
        entry = ctk.CTkEntry(
            self, textvariable=self._name_var, font=FONT_NORMAL,
            fg_color=BG_HEADER, text_color=TEXT_MAIN, border_color=BORDER,
        )
        entry.grid(row=2, column=0, sticky="ew", padx=12, pady=8)
        entry.bind("<Return>", lambda _e: self._save_clicked())

        self._list_frame = ctk.CTkScrollableFrame(self, fg_color=BG_PANEL, corner_radius=0)
        self._list_frame.grid(row=3, column=0, sticky="nsew", padx=4, pady=(0, 8))
        self._list_frame.grid_columnconfigure(0, weight=1)
        self._rows: list[ctk.CTkFrame] = []

    @property
    def profile_name(self) -> str:
        return self._name_var.get().strip()

    def set_profile_name(self, name: str) -> None:
        self._name_var.set(name)

    def _update_save_state(self) -> None:
        self._save_btn.configure(state="normal" if self.profile_name else "disabled")

    def _save_clicked(self) -> None:
        if self.profile_name:
            self._on_save(self.profile_name)

    def show_profiles(self, names: list[str]) -> None:
        for row in self._rows:
            row.destroy()
        self._rows.clear()
        if not names:
            empty = ctk.CTkLabel(self._list_frame, text="No saved profiles.",
                                 font=FONT_SMALL, text_color=TEXT_DIM)
            empty.grid(row=0, column=0, pady=8)
            self._rows.append(empty)
            return
        for i, name in enumerate(names):
            row = ctk.CTkFrame(self._list_frame, fg_color="transparent")
            row.grid(row=i, column=0, sticky="ew", pady=2)
            row.grid_columnconfigure(0, weight=1)
            ctk.CTkButton(
                row, text=name, height=28, font=FONT_NORMAL, anchor="w",
                fg_color=BG_HEADER, hover_color=BG_HOVER, text_color=TEXT_MAIN,
                command=lambda n=name: self._on_load(n),
            ).grid(row=0, column=0, sticky="ew", padx=(0, 4))
            ctk.CTkButton(
                row, text="Delete", width=64, height=28, font=FONT_SMALL,
                fg_color=RED_BTN, hover_color=RED_HOV, text_color="white",
                command=lambda n=name: self._on_delete(n),
            ).grid(row=0, column=1)
            self._rows.append(row)
