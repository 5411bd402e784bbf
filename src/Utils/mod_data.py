"""
mod_data.py
In-memory model of the launcher mod list and of saved profiles.

A ModList is the launcher's mod list in launch order: index 0 loads first.
Position is the only place order lives in memory; the explicit 1-based
"order" field only exists in the on-disk records (see mod_file.py).

A ModProfile is a name plus the uuids that should be active, in the order
they should load.  Applying a profile reorders and re-flags the list but
never adds or removes an entry:

    result = profile-ordered active ++ leftover active ++ untouched inactive
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Iterator

log = logging.getLogger(__name__)

# Proton/Wine maps the Linux root to Z:, and the launcher writes packfile
# paths in that form.
_WINE_DRIVE_PREFIX = "Z:/"

FileExists = Callable[[str], bool]


@dataclass(frozen=True, order=True)
class ModUUID:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class ModEntry:
    uuid: ModUUID
    name: str
    active: bool
    category: str = ""
    game: str = ""
    owned: bool = False
    packfile: str = ""
    short: str = ""     # short description shown by the launcher

    @property
    def local_packfile(self) -> str:
        """Packfile path with the Wine drive prefix stripped ("Z:/x" -> "/x")."""
        if self.packfile.startswith(_WINE_DRIVE_PREFIX):
            return self.packfile[2:]
        return self.packfile

    def file_exists(self, exists: FileExists = os.path.exists) -> bool:
        return exists(self.local_packfile)


@dataclass(frozen=True)
class ModProfile:
    name: str
    active_mods: tuple[ModUUID, ...] = ()

    def __post_init__(self):
        # Accept any iterable but keep the stored sequence immutable.
        object.__setattr__(self, "active_mods", tuple(self.active_mods))

    @classmethod
    def from_mod_list(cls, name: str, mod_list: ModList) -> ModProfile:
        """Snapshot the currently active mods of mod_list, in list order."""
        return cls(name=name, active_mods=tuple(m.uuid for m in mod_list.get_active()))


@dataclass
class ModList:
    entries: list[ModEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ModEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> ModEntry:
        return self.entries[index]

    def mods(self) -> list[ModEntry]:
        return list(self.entries)

    def uuids(self) -> list[ModUUID]:
        return [m.uuid for m in self.entries]

    def get_active(self) -> list[ModEntry]:
        return [m for m in self.entries if m.active]

    def get_missing(self, exists: FileExists = os.path.exists) -> list[ModEntry]:
        """Entries whose packfile is not on disk, in list order."""
        return [m for m in self.entries if not m.file_exists(exists)]

    def for_game(self, game: str | None) -> list[tuple[int, ModEntry]]:
        """(list index, entry) pairs for one game; every entry if game is None."""
        return [
            (i, m) for i, m in enumerate(self.entries)
            if game is None or m.game == game
        ]

    def deactivate_all(self) -> None:
        for m in self.entries:
            m.active = False

    def set_mod_active_state(self, index: int, active: bool) -> None:
        """Set the active flag of the entry at index.

        Raises IndexError (and leaves the list untouched) when index is not
        a position in the list.  Negative indices are rejected rather than
        counted from the end.
        """
        if index < 0 or index >= len(self.entries):
            raise IndexError(
                f"Mod index {index} out of range for a list of {len(self.entries)} mods"
            )
        self.entries[index].active = active

    def apply_profile(self, profile: ModProfile) -> None:
        """In-place variant of apply_profile(): replace contents with the result."""
        self.entries = apply_profile(self, profile).entries

    def copy(self) -> ModList:
        return ModList([replace(m) for m in self.entries])


def apply_profile(mod_list: ModList | Iterable[ModEntry], profile: ModProfile) -> ModList:
    """
    Return a new ModList with profile applied; the input is not modified.

    Mods named by the profile become active and move to the top in the
    profile's order.  Every other mod becomes inactive and keeps its
    original relative order below them.  Profile uuids with no matching
    mod are skipped.  Never raises.

    Should a claimed mod fail to be placed by the ordering pass (only
    possible if the list holds duplicate uuids) it is appended straight
    after the ordered block, so the result is always a permutation of the
    input.
    """
    mods = [replace(m, active=False) for m in mod_list]
    wanted = set(profile.active_mods)

    claimed: list[ModEntry] = []
    unclaimed: list[ModEntry] = []
    for m in mods:
        if m.uuid in wanted:
            m.active = True
            claimed.append(m)
        else:
            unclaimed.append(m)

    ordered: list[ModEntry] = []
    for uuid in profile.active_mods:
        for i, m in enumerate(claimed):
            if m.uuid == uuid:
                ordered.append(claimed.pop(i))
                break
        else:
            log.debug("Profile %r: no mod with uuid %s, skipped", profile.name, uuid)

    if claimed:
        log.warning(
            "Profile %r: %d mod(s) matched but could not be ordered, appending",
            profile.name, len(claimed),
        )
    return ModList(ordered + claimed + unclaimed)
