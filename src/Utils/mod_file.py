"""
mod_file.py
Read and write the launcher's mod file (20190104-moddata.dat).

The file is a JSON array of flat records:

  {"uuid": "...", "name": "...", "active": true, "category": "...",
   "game": "warhammer3", "order": 3, "owned": true,
   "packfile": "Z:/home/.../foo.pack", "short": "..."}

"order" is 1-based launch priority.  The launcher treats 0 as "load last",
so we never write 0: on save every mod gets order = list index + 1.
On load the records are sorted by order and the field is dropped; from then
on the list position is the order.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from Utils.errors import NotFoundError, ParseError, StorageError
from Utils.mod_data import ModEntry, ModList, ModUUID

log = logging.getLogger(__name__)

MOD_FILE_NAME = "20190104-moddata.dat"

_STR_FIELDS = ("uuid", "name", "category", "game", "packfile", "short")
_BOOL_FIELDS = ("active", "owned")


@dataclass
class ModEntryRecord:
    """One mod exactly as the launcher stores it."""
    uuid: str
    name: str
    active: bool
    category: str
    game: str
    order: int
    owned: bool
    packfile: str
    short: str

    @classmethod
    def from_json(cls, raw: Any, index: int = 0) -> ModEntryRecord:
        if not isinstance(raw, dict):
            raise ParseError(f"Mod record #{index} is not an object")
        values: dict[str, Any] = {}
        for key in _STR_FIELDS:
            v = raw.get(key)
            if not isinstance(v, str):
                raise ParseError(f"Mod record #{index}: field {key!r} missing or not a string")
            values[key] = v
        for key in _BOOL_FIELDS:
            v = raw.get(key)
            if not isinstance(v, bool):
                raise ParseError(f"Mod record #{index}: field {key!r} missing or not a bool")
            values[key] = v
        order = raw.get("order")
        # bool is an int subclass; reject it explicitly
        if not isinstance(order, int) or isinstance(order, bool) or order < 0:
            raise ParseError(f"Mod record #{index}: field 'order' missing or not a non-negative integer")
        values["order"] = order
        return cls(**values)


def records_to_mod_list(records: list[ModEntryRecord]) -> ModList:
    """Sort records by their order field (stable) and drop it."""
    ordered = sorted(records, key=lambda r: r.order)
    return ModList([
        ModEntry(
            uuid=ModUUID(r.uuid),
            name=r.name,
            active=r.active,
            category=r.category,
            game=r.game,
            owned=r.owned,
            packfile=r.packfile,
            short=r.short,
        )
        for r in ordered
    ])


def mod_list_to_records(mod_list: ModList) -> list[ModEntryRecord]:
    """Give every mod order = index + 1 (the launcher treats 0 as "last")."""
    return [
        ModEntryRecord(
            uuid=m.uuid.value,
            name=m.name,
            active=m.active,
            category=m.category,
            game=m.game,
            order=i + 1,
            owned=m.owned,
            packfile=m.packfile,
            short=m.short,
        )
        for i, m in enumerate(mod_list)
    ]


def parse_mod_file_text(text: str, source: Path | str | None = None) -> ModList:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Could not parse mod file contents: {e}", source) from e
    if not isinstance(data, list):
        raise ParseError("Mod file is not a JSON array", source)
    try:
        records = [ModEntryRecord.from_json(raw, i) for i, raw in enumerate(data)]
    except ParseError as e:
        raise ParseError(f"Could not parse mod file contents: {e}", source) from e
    return records_to_mod_list(records)


def dump_mod_file_text(mod_list: ModList) -> str:
    return json.dumps([asdict(r) for r in mod_list_to_records(mod_list)],
                      indent=2, ensure_ascii=False)


def load_mod_file(path: Path) -> ModList:
    """Read and parse the mod file at path."""
    if not path.is_file():
        raise NotFoundError(f"Mod file not found: {path}", path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to load mod file: {path}: {e}", path) from e
    mod_list = parse_mod_file_text(text, path)
    log.info("Loaded %d mods from %s", len(mod_list), path)
    return mod_list


def save_mod_file(path: Path, mod_list: ModList) -> None:
    """
    Overwrite the mod file at path with mod_list.
    The JSON is built before the file is opened, so a failure there leaves
    the old file intact.
    """
    contents = dump_mod_file_text(mod_list)
    try:
        path.write_text(contents, encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to write mod file: {path}: {e}", path) from e
    log.info("Wrote %d mods to %s", len(mod_list), path)
