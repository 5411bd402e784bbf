"""
mod_file_backup.py
Keep copies of the launcher mod file from before we overwrite it.

Each backup is a folder under <data_dir>/backups/<timestamp>/ holding one
copy of 20190104-moddata.dat.  Used before every save (create_backup) and
by the `backups` / `restore` CLI commands.
"""

from __future__ import annotations

import logging
import re
import shutil
from datetime import datetime
from pathlib import Path

from Utils.errors import NotFoundError, StorageError
from Utils.mod_file import MOD_FILE_NAME

log = logging.getLogger(__name__)

_TIMESTAMP_FMT = "%Y%m%d_%H%M%S"
_MAX_BACKUPS = 10
_BACKUPS_SUBDIR = "backups"
# A second backup within the same second gets a _1, _2, ... suffix.
_BACKUP_NAME_PATTERN = re.compile(r"^(\d{8}_\d{6})(?:_(\d+))?$")


def _backup_key(name: str) -> tuple[datetime, int] | None:
    """Sort key for a backup folder name like '20250225_143022' or '20250225_143022_1'."""
    m = _BACKUP_NAME_PATTERN.fullmatch(name)
    if m is None:
        return None
    try:
        ts = datetime.strptime(m.group(1), _TIMESTAMP_FMT)
    except ValueError:
        return None
    return ts, int(m.group(2) or 0)


def _backup_dirs(backups_dir: Path) -> list[Path]:
    """Valid backup folders, oldest first."""
    if not backups_dir.is_dir():
        return []
    dirs = [
        p for p in backups_dir.iterdir()
        if p.is_dir() and _backup_key(p.name) is not None
    ]
    dirs.sort(key=lambda p: _backup_key(p.name))
    return dirs


def _new_backup_folder(backups_dir: Path, stamp: str) -> Path:
    """Create and return a fresh folder; never reuses an existing backup."""
    backups_dir.mkdir(parents=True, exist_ok=True)
    suffix = 0
    while True:
        folder = backups_dir / (stamp if suffix == 0 else f"{stamp}_{suffix}")
        try:
            folder.mkdir()
            return folder
        except FileExistsError:
            suffix += 1


def create_backup(mod_file: Path, data_dir: Path, now: datetime | None = None,
                  max_backups: int = _MAX_BACKUPS) -> Path | None:
    """
    Copy mod_file into a new data_dir/backups/<timestamp>/ folder.
    Returns the backup folder, or None if there was no file to back up.
    Only the newest max_backups folders are kept.
    """
    if not mod_file.is_file():
        return None
    backups_dir = data_dir / _BACKUPS_SUBDIR
    stamp = (now or datetime.now()).strftime(_TIMESTAMP_FMT)
    try:
        folder = _new_backup_folder(backups_dir, stamp)
        shutil.copy2(mod_file, folder / MOD_FILE_NAME)
    except OSError as e:
        raise StorageError(f"Failed to back up mod file to {backups_dir}: {e}", backups_dir) from e
    log.info("Backed up %s to %s", mod_file, folder)

    subdirs = _backup_dirs(backups_dir)
    while len(subdirs) > max_backups:
        oldest = subdirs.pop(0)
        try:
            shutil.rmtree(oldest)
            log.debug("Removed oldest backup %s", oldest.name)
        except OSError as e:
            log.warning("Could not remove old backup %s: %s", oldest, e)
    return folder


def list_backups(data_dir: Path) -> list[tuple[datetime, Path]]:
    """
    (timestamp, folder) for each backup holding a mod file, newest first.
    """
    result: list[tuple[datetime, Path]] = []
    for p in reversed(_backup_dirs(data_dir / _BACKUPS_SUBDIR)):
        if (p / MOD_FILE_NAME).is_file():
            result.append((_backup_key(p.name)[0], p))
    return result


def restore_backup(backup_dir: Path, mod_file: Path) -> None:
    """Copy the backed-up mod file over mod_file."""
    src = backup_dir / MOD_FILE_NAME
    if not src.is_file():
        raise NotFoundError(f"No mod file in backup {backup_dir}", src)
    try:
        shutil.copy2(src, mod_file)
    except OSError as e:
        raise StorageError(f"Failed to restore {src} to {mod_file}: {e}", mod_file) from e
    log.info("Restored %s from %s", mod_file, backup_dir)
