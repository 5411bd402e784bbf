"""
Desktop front end.  Run `grotloada-gui`, or from src/: python -m grotloada.app

Layout: top bar (load / save buttons and the resolved mod file path), mod
list on the left, profiles on the right, collapsible log at the bottom.
"""

from __future__ import annotations

import logging
import sys
import tkinter.messagebox
from pathlib import Path

import customtkinter as ctk

if __name__ == "__main__":
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from Utils.app_log import install_file_log, install_gui_log
from Utils.config_paths import ModFileLocator, get_data_dir, get_log_path, load_settings
from Utils.errors import GrotloadaError
from Utils.profiles import ProfileStore
from Utils.session import Loaded, ModSession
from gui.modlist_panel import ModListPanel
from gui.profile_panel import ProfilePanel
from gui.log_panel import LogPanel
from gui.theme import (
    ACCENT,
    ACCENT_HOV,
    BG_DEEP,
    BG_HEADER,
    BG_HOVER,
    FONT_NORMAL,
    FONT_SMALL,
    RED_BTN,
    RED_HOV,
    TEXT_DIM,
    TEXT_MAIN,
)
from grotloada import __version__

log = logging.getLogger(__name__)


class App(ctk.CTk):
    def __init__(self, session: ModSession, game_filter: str | None):
        super().__init__(fg_color=BG_DEEP)
        self.title(f"Grotloada {__version__}")
        self.geometry("1100x720")
        self._session = session
        self._game_filter = game_filter

        self.grid_columnconfigure(0, weight=4)
        self.grid_columnconfigure(1, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_top_bar()
        self._mod_panel = ModListPanel(self, on_toggle=self._on_toggle)
        self._mod_panel.grid(row=1, column=0, sticky="nsew", padx=(8, 4), pady=4)
        self._profile_panel = ProfilePanel(
            self,
            on_save=self._on_save_profile,
            on_load=self._on_load_profile,
            on_delete=self._on_delete_profile,
            on_refresh=self._refresh_profiles,
        )
        self._profile_panel.grid(row=1, column=1, sticky="nsew", padx=(4, 8), pady=4)
        self._profile_panel.grid_remove()

        self._log_panel = LogPanel(self)
        self._log_panel.grid(row=2, column=0, columnspan=2, sticky="ew")
        self._log_handler = install_gui_log(self._log_panel.append, self.after)

        self._refresh_profiles()
        log.info("Grotloada ready. Profiles stored in %s", session.profiles.data_dir)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_top_bar(self):
        bar = ctk.CTkFrame(self, fg_color=BG_HEADER, corner_radius=0)
        bar.grid(row=0, column=0, columnspan=2, sticky="ew")
        bar.grid_columnconfigure(2, weight=1)

        self._load_btn = ctk.CTkButton(
            bar, text="Load mod list", width=140, height=30, font=FONT_NORMAL,
            fg_color=ACCENT, hover_color=ACCENT_HOV, text_color="white",
            command=self._on_load_mod_list,
        )
        self._load_btn.grid(row=0, column=0, padx=(12, 4), pady=8)
        self._save_btn = ctk.CTkButton(
            bar, text="Write mod list", width=140, height=30, font=FONT_NORMAL,
            fg_color=BG_HOVER, hover_color=ACCENT_HOV, text_color=TEXT_MAIN,
            command=self._on_save_mod_list,
        )
        self._path_label = ctk.CTkLabel(
            bar, text="", font=FONT_SMALL, text_color=TEXT_DIM, anchor="w"
        )
        self._path_label.grid(row=0, column=2, sticky="ew", padx=12)

    def _update_top_bar(self):
        state = self._session.state
        if isinstance(state, Loaded):
            self._load_btn.configure(text="Reload mod list")
            self._save_btn.grid(row=0, column=1, padx=4, pady=8)
            if self._session.dirty:
                self._save_btn.configure(fg_color=RED_BTN, hover_color=RED_HOV,
                                         text_color="white")
            else:
                self._save_btn.configure(fg_color=BG_HOVER, hover_color=ACCENT_HOV,
                                         text_color=TEXT_MAIN)
            self._path_label.configure(text=f"Mod file: {state.mod_file_path.resolve()}")
        else:
            self._load_btn.configure(text="Load mod list")
            self._save_btn.grid_remove()
            self._path_label.configure(text="")

    def _refresh_mod_panel(self):
        state = self._session.state
        if isinstance(state, Loaded):
            missing = {i for i, m in enumerate(state.mod_list) if not m.file_exists()}
            self._mod_panel.show(state.mod_list, self._game_filter, missing)
            self._profile_panel.grid()
        else:
            self._mod_panel.clear()
            self._profile_panel.grid_remove()
        self._update_top_bar()

    def _report(self, action: str, e: Exception):
        log.error("%s failed: %s", action, e)
        self._log_panel.expand()
        tkinter.messagebox.showerror(action, str(e), parent=self)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _on_load_mod_list(self):
        try:
            loaded = self._session.load_mod_list()
        except GrotloadaError as e:
            self._report("Load mod list", e)
            return
        log.info("Loaded %d mods from %s", len(loaded.mod_list), loaded.mod_file_path)
        self._profile_panel.set_profile_name("")
        self._refresh_mod_panel()

    def _on_save_mod_list(self):
        try:
            path = self._session.save_mod_list()
        except GrotloadaError as e:
            self._report("Write mod list", e)
            return
        log.info("Mod list written to %s", path)
        self._update_top_bar()

    def _on_toggle(self, index: int, active: bool):
        try:
            self._session.toggle(index, active)
        except (GrotloadaError, IndexError) as e:
            self._report("Toggle mod", e)
            # put the switch back to the model's state
            self._refresh_mod_panel()
            return
        self._update_top_bar()

    def _on_save_profile(self, name: str):
        try:
            profile = self._session.save_profile_as(name)
        except GrotloadaError as e:
            self._report("Save profile", e)
            return
        log.info("Profile %s saved (%d mods)", name, len(profile.active_mods))
        self._profile_panel.show_profiles(self._session.profile_names)

    def _on_load_profile(self, name: str):
        try:
            self._session.apply_profile(name)
        except GrotloadaError as e:
            self._report("Apply profile", e)
            return
        self._profile_panel.set_profile_name(name)
        self._refresh_mod_panel()

    def _on_delete_profile(self, name: str):
        if not tkinter.messagebox.askyesno(
            "Delete profile", f"Delete profile '{name}'?", parent=self
        ):
            return
        try:
            self._session.delete_profile(name)
        except GrotloadaError as e:
            self._report("Delete profile", e)
            return
        log.info("Profile %s deleted", name)
        self._profile_panel.show_profiles(self._session.profile_names)

    def _refresh_profiles(self):
        try:
            names = self._session.reload_profiles()
        except GrotloadaError as e:
            self._report("List profiles", e)
            return
        self._profile_panel.show_profiles(names)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    data_dir = get_data_dir()
    try:
        install_file_log(get_log_path())
    except OSError as e:
        log.warning("Not writing a log file: %s", e)
    settings = load_settings(data_dir)
    session = ModSession(
        locator=ModFileLocator.from_settings(settings),
        profiles=ProfileStore(data_dir),
        backup_dir=data_dir,
    )
    ctk.set_appearance_mode("dark")
    app = App(session, settings.game_filter)
    app.mainloop()


if __name__ == "__main__":
    main()
