"""
config_paths.py
Central helpers for the app data directory, user settings and the location
of the launcher mod file.

Data lives in platformdirs' user data dir (~/.local/share/grotloada on
Linux, %APPDATA%\\grotloada on Windows) unless $GROTLOADA_DATA_DIR is set.
Profiles, settings.json, backups and the log file all live there.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Iterable

from platformdirs import user_data_dir

from Utils.errors import NotFoundError, StorageError
from Utils.mod_file import MOD_FILE_NAME
from Utils.steam_finder import find_prefix

log = logging.getLogger(__name__)

APP_NAME = "grotloada"
ENV_DATA_DIR = "GROTLOADA_DATA_DIR"
ENV_MOD_FILE = "GROTLOADA_MOD_FILE"

# Total War: WARHAMMER III
TWWH3_STEAM_ID = "1142710"

_LAUNCHER_SUBDIR = Path("The Creative Assembly") / "Launcher"
_PROTON_APPDATA = Path("drive_c") / "users" / "steamuser" / "AppData" / "Roaming"
_SETTINGS_FILE = "settings.json"


def get_data_dir() -> Path:
    """Return the app data directory, creating it if it doesn't exist."""
    env = os.environ.get(ENV_DATA_DIR)
    data_dir = Path(env) if env else Path(user_data_dir(APP_NAME, appauthor=False))
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"Could not create app data dir: {data_dir}: {e}", data_dir) from e
    return data_dir


def get_log_path() -> Path:
    return get_data_dir() / "grotloada.log"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass
class Settings:
    mod_file_path: str | None = None
    # Only mods for this game are shown in the GUI; None shows everything.
    game_filter: str | None = "warhammer3"


def load_settings(data_dir: Path | None = None) -> Settings:
    path = (data_dir or get_data_dir()) / _SETTINGS_FILE
    if not path.is_file():
        return Settings()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log.warning("Ignoring unreadable settings file %s: %s", path, e)
        return Settings()
    if not isinstance(raw, dict):
        log.warning("Ignoring settings file %s: not a JSON object", path)
        return Settings()
    defaults = Settings()
    return Settings(
        mod_file_path=raw.get("mod_file_path", defaults.mod_file_path),
        game_filter=raw.get("game_filter", defaults.game_filter),
    )


def save_settings(settings: Settings, data_dir: Path | None = None) -> None:
    path = (data_dir or get_data_dir()) / _SETTINGS_FILE
    try:
        path.write_text(json.dumps(asdict(settings), indent=2), encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to write settings: {path}: {e}", path) from e


# ---------------------------------------------------------------------------
# Mod file location
# ---------------------------------------------------------------------------

def _proton_launcher_dir(pfx: Path) -> Path:
    return pfx / _PROTON_APPDATA / _LAUNCHER_SUBDIR


def default_mod_file_candidates(platform: str | None = None,
                                home: Path | None = None) -> list[Path]:
    """
    Places the launcher keeps its mod file, most specific first.
    The current directory always comes first so a copy next to the user
    wins over the installed one.
    """
    platform = platform or sys.platform
    home = home or Path.home()
    paths = [Path(MOD_FILE_NAME)]
    if platform.startswith("linux"):
        compatdata = Path("steamapps") / "compatdata" / TWWH3_STEAM_ID / "pfx"
        for lib in (home / ".steam" / "steam",
                    home / "Games" / "SteamLibrary" / "Default"):
            paths.append(_proton_launcher_dir(lib / compatdata) / MOD_FILE_NAME)
        pfx = find_prefix(TWWH3_STEAM_ID, home)
        if pfx is not None:
            found = _proton_launcher_dir(pfx) / MOD_FILE_NAME
            if found not in paths:
                paths.append(found)
    elif platform.startswith("win"):
        roaming = Path(user_data_dir(None, appauthor=False, roaming=True))
        paths.append(roaming / _LAUNCHER_SUBDIR / MOD_FILE_NAME)
    return paths


class ModFileLocator:
    """
    Resolve the path of the launcher mod file.

    An override (from --mod-file, $GROTLOADA_MOD_FILE or settings.json) is
    used as-is.  Otherwise the first candidate that exists wins.
    """

    def __init__(
        self,
        override: Path | str | None = None,
        candidates: Iterable[Path] | None = None,
        exists: Callable[[Path], bool] = Path.exists,
    ):
        self.override = Path(override) if override else None
        self._candidates = list(candidates) if candidates is not None else None
        self._exists = exists

    @classmethod
    def from_settings(cls, settings: Settings, cli_override: Path | str | None = None) -> ModFileLocator:
        override = cli_override or os.environ.get(ENV_MOD_FILE) or settings.mod_file_path
        return cls(override=override)

    @property
    def candidates(self) -> list[Path]:
        if self._candidates is None:
            self._candidates = default_mod_file_candidates()
        return self._candidates

    def resolve(self) -> Path:
        if self.override is not None:
            return self.override
        for p in self.candidates:
            if self._exists(p):
                log.debug("Found mod file at %s", p)
                return p
        searched = ", ".join(str(p) for p in self.candidates)
        raise NotFoundError(f"Could not find mod file! Searched: {searched}")
