"""
steam_finder.py
Locate Steam library folders and Proton prefixes on Linux.
No UI, no game-specific knowledge.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

log = logging.getLogger(__name__)

_VDF_FILENAME = "libraryfolders.vdf"
_VDF_PATH_PATTERN = re.compile(r'"path"\s+"([^"]+)"')


def steam_root_candidates(home: Path | None = None) -> list[Path]:
    """Known Steam install locations for the different install methods."""
    home = home or Path.home()
    return [
        home / ".local" / "share" / "Steam",                                          # Standard
        home / ".var" / "app" / "com.valvesoftware.Steam" / ".local" / "share" / "Steam",  # Flatpak
        home / "snap" / "steam" / "common" / ".local" / "share" / "Steam",            # Snap
        home / ".steam" / "steam",                                                     # Symlink fallback
    ]


def parse_vdf_libraries(vdf_path: Path) -> list[Path]:
    """
    Return every library root listed in a libraryfolders.vdf file.

    The VDF format contains lines like:
        "path"    "/home/deck/.local/share/Steam"
    Roots that no longer exist on disk are left out.
    """
    try:
        text = vdf_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.debug("Could not read %s: %s", vdf_path, e)
        return []
    return [Path(m.group(1)) for m in _VDF_PATH_PATTERN.finditer(text)
            if Path(m.group(1)).is_dir()]


def find_steam_libraries(home: Path | None = None) -> list[Path]:
    """Steam roots plus every library they list, deduplicated, roots first."""
    seen: set[Path] = set()
    libraries: list[Path] = []

    def _add(p: Path) -> None:
        resolved = p.resolve()
        if resolved not in seen:
            seen.add(resolved)
            libraries.append(p)

    for steam_root in steam_root_candidates(home):
        if not steam_root.is_dir():
            continue
        _add(steam_root)
        for lib in parse_vdf_libraries(steam_root / "steamapps" / _VDF_FILENAME):
            _add(lib)
    return libraries


def find_prefix(steam_id: str, home: Path | None = None) -> Path | None:
    """
    Locate the Proton prefix for a Steam App ID.

    Steam stores per-game prefixes under
        <library>/steamapps/compatdata/<steam_id>/pfx/
    in whichever library the game is installed to.  Returns the first pfx/
    that exists, or None.
    """
    if not steam_id:
        return None
    for lib in find_steam_libraries(home):
        pfx = lib / "steamapps" / "compatdata" / steam_id / "pfx"
        if pfx.is_dir():
            return pfx
    return None
