"""
session.py
State behind the interactive front end.

A session starts with no mod list (NotLoaded).  Loading the launcher file
moves it to Loaded, which carries the list and the path it came from.
Everything that touches the list has to go through a Loaded state, so the
"nothing loaded yet" case is handled explicitly instead of via None checks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from Utils.config_paths import ModFileLocator
from Utils.errors import NoModListError
from Utils.mod_data import ModList, ModProfile
from Utils.mod_file import load_mod_file, save_mod_file
from Utils.mod_file_backup import create_backup
from Utils.profiles import ProfileStore

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotLoaded:
    pass


@dataclass
class Loaded:
    mod_list: ModList
    mod_file_path: Path


ModListState = Union[NotLoaded, Loaded]


@dataclass
class ModSession:
    locator: ModFileLocator
    profiles: ProfileStore
    # Where backups go; None disables backups.
    backup_dir: Path | None = None
    state: ModListState = field(default_factory=NotLoaded)
    profile_names: list[str] = field(default_factory=list)
    profile_name: str = ""
    dirty: bool = False

    def _loaded(self, operation: str) -> Loaded:
        if isinstance(self.state, Loaded):
            return self.state
        raise NoModListError(operation)

    @property
    def is_loaded(self) -> bool:
        return isinstance(self.state, Loaded)

    def load_mod_list(self) -> Loaded:
        """(Re)read the launcher file, dropping any unsaved changes."""
        path = self.locator.resolve()
        self.state = Loaded(mod_list=load_mod_file(path), mod_file_path=path)
        self.profile_name = ""
        self.dirty = False
        return self.state

    def save_mod_list(self) -> Path:
        loaded = self._loaded("save the mod list")
        if self.backup_dir is not None:
            create_backup(loaded.mod_file_path, self.backup_dir)
        save_mod_file(loaded.mod_file_path, loaded.mod_list)
        self.dirty = False
        return loaded.mod_file_path

    def toggle(self, index: int, active: bool) -> None:
        self._loaded("toggle a mod").mod_list.set_mod_active_state(index, active)
        self.dirty = True

    def apply_profile(self, name: str) -> ModList:
        loaded = self._loaded("apply a profile")
        profile = self.profiles.load(name)
        loaded.mod_list.apply_profile(profile)
        self.profile_name = name
        self.dirty = True
        log.info("Applied profile %r", name)
        return loaded.mod_list

    def save_profile_as(self, name: str) -> ModProfile:
        loaded = self._loaded("save a profile")
        profile = ModProfile.from_mod_list(name, loaded.mod_list)
        self.profiles.save(profile)
        self.profile_name = name
        self.reload_profiles()
        return profile

    def delete_profile(self, name: str) -> None:
        self.profiles.delete(name)
        if self.profile_name == name:
            self.profile_name = ""
        self.reload_profiles()

    def reload_profiles(self) -> list[str]:
        self.profile_names = self.profiles.list_profiles()
        return self.profile_names
