"""
modlist_panel.py
Scrollable list of launcher mods with an on/off switch per row.

Rows show load position, name and category.  Only mods for the configured
game are shown; toggles report the mod's index in the full list so hidden
rows are never shifted.
"""

from __future__ import annotations

from typing import Callable

import customtkinter as ctk

from Utils.mod_data import ModEntry, ModList
from gui.theme import (
    ACCENT,
    BG_PANEL,
    BG_ROW,
    BG_ROW_ALT,
    FONT_NORMAL,
    FONT_SMALL,
    TEXT_DIM,
    TEXT_MAIN,
    TEXT_WARN,
)


class ModListPanel(ctk.CTkScrollableFrame):
    """
    on_toggle(index, active) is called whenever a switch changes.
    """

    def __init__(self, parent, on_toggle: Callable[[int, bool], None]):
        super().__init__(parent, fg_color=BG_PANEL, corner_radius=0)
        self.grid_columnconfigure(0, weight=1)
        self._on_toggle = on_toggle
        self._rows: list[ctk.CTkFrame] = []
        self._placeholder = ctk.CTkLabel(
            self, text="No mod list loaded.", font=FONT_NORMAL, text_color=TEXT_DIM
        )
        self._placeholder.grid(row=0, column=0, pady=24)

    def clear(self) -> None:
        for row in self._rows:
            row.destroy()
        self._rows.clear()

    def show(self, mod_list: ModList, game: str | None,
             missing: set[int] | None = None) -> None:
        """Rebuild the rows from mod_list. missing holds indices with no packfile."""
        self.clear()
        self._placeholder.grid_remove()
        missing = missing or set()
        visible = mod_list.for_game(game)
        if not visible:
            self._placeholder.configure(
                text=f"No mods for {game}." if game else "Mod list is empty."
            )
            self._placeholder.grid()
            return
        for row_no, (index, entry) in enumerate(visible):
            self._rows.append(self._build_row(row_no, index, entry, index in missing))

    def _build_row(self, row_no: int, index: int, entry: ModEntry,
                   is_missing: bool) -> ctk.CTkFrame:
        bg = BG_ROW if row_no % 2 == 0 else BG_ROW_ALT
        row = ctk.CTkFrame(self, fg_color=bg, corner_radius=4)
        row.grid(row=row_no, column=0, sticky="ew", padx=4, pady=1)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text=f"{index + 1:>3}", width=36, font=FONT_SMALL,
            text_color=TEXT_DIM, anchor="e"
        ).grid(row=0, column=0, padx=(6, 8))

        name = entry.name + ("  (missing)" if is_missing else "")
        ctk.CTkLabel(
            row, text=name, font=FONT_NORMAL, anchor="w",
            text_color=TEXT_WARN if is_missing else TEXT_MAIN,
        ).grid(row=0, column=1, sticky="ew")
        if entry.category:
            ctk.CTkLabel(
                row, text=entry.category, font=FONT_SMALL, text_color=TEXT_DIM
            ).grid(row=0, column=2, padx=8)

        switch = ctk.CTkSwitch(row, text="", width=44, progress_color=ACCENT)
        if entry.active:
            switch.select()
        switch.configure(command=lambda i=index, s=switch: self._on_toggle(i, bool(s.get())))
        switch.grid(row=0, column=3, padx=(4, 8), pady=4)
        return row
