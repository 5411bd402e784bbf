"""
profiles.py
Save, load, list and delete mod profiles.

Each profile is one TOML file in the app data directory; the file stem is
the profile name:

  <data_dir>/Late Game.toml
      name = "Late Game"
      active_mods = [ "2935081283", "2789857593",]
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml

from Utils.errors import InvalidProfileNameError, NotFoundError, ParseError, StorageError
from Utils.mod_data import ModProfile, ModUUID

log = logging.getLogger(__name__)

_PROFILE_EXT = ".toml"


def profile_to_toml(profile: ModProfile) -> str:
    return toml.dumps({
        "name": profile.name,
        "active_mods": [u.value for u in profile.active_mods],
    })


def profile_from_toml(text: str, source: Path | str | None = None) -> ModProfile:
    try:
        data = toml.loads(text)
    except toml.TomlDecodeError as e:
        raise ParseError(f"Could not parse mod profile: {e}", source) from e
    name = data.get("name")
    mods = data.get("active_mods", [])
    if not isinstance(name, str):
        raise ParseError("Mod profile has no 'name' string", source)
    if not isinstance(mods, list) or not all(isinstance(m, str) for m in mods):
        raise ParseError("Mod profile 'active_mods' must be a list of strings", source)
    return ModProfile(name=name, active_mods=tuple(ModUUID(m) for m in mods))


class ProfileStore:
    """Profiles stored as <name>.toml files inside data_dir."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, name: str) -> Path:
        """File for profile `name`; the name must be a bare file stem."""
        if not name or name in (".", "..") or Path(name).name != name or "\\" in name:
            raise InvalidProfileNameError(name)
        return self.data_dir / f"{name}{_PROFILE_EXT}"

    def list_profiles(self) -> list[str]:
        """Names of all stored profiles, sorted."""
        if not self.data_dir.is_dir():
            return []
        try:
            return sorted(
                p.stem for p in self.data_dir.iterdir()
                if p.is_file() and p.suffix == _PROFILE_EXT
            )
        except OSError as e:
            raise StorageError(f"Failed to read data dir: {self.data_dir}: {e}",
                               self.data_dir) from e

    def save(self, profile: ModProfile) -> Path:
        path = self.path_for(profile.name)
        contents = profile_to_toml(profile)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write mod profile: {path}: {e}", path) from e
        log.info("Saved profile %r (%d mods) to %s",
                 profile.name, len(profile.active_mods), path)
        return path

    def load(self, name: str) -> ModProfile:
        path = self.path_for(name)
        if not path.is_file():
            raise NotFoundError(f"No profile named {name!r} ({path})", path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read mod profile: {path}: {e}", path) from e
        return profile_from_toml(text, path)

    def delete(self, name: str) -> None:
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise NotFoundError(f"No profile named {name!r} ({path})", path) from e
        except OSError as e:
            raise StorageError(f"Failed to delete mod profile: {path}: {e}", path) from e
        log.info("Deleted profile %r", name)
