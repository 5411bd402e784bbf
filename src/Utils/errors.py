"""
errors.py
Typed failures raised by the mod file, profile store and session layers.

Out-of-range toggles use the built-in IndexError; applying a profile never
raises.
"""

from __future__ import annotations

from pathlib import Path


class GrotloadaError(Exception):
    """Base class for every error this package raises on purpose."""
    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class NotFoundError(GrotloadaError):
    """Mod file, profile file or every mod-file candidate is absent."""


class ParseError(GrotloadaError):
    """A mod file record or profile document could not be decoded."""


class StorageError(GrotloadaError):
    """Reading or writing a file failed at the OS level."""


class NoModListError(GrotloadaError):
    """An operation needed a loaded mod list but none is loaded yet."""
    def __init__(self, operation: str):
        super().__init__(f"Cannot {operation}: no mod list loaded")
        self.operation = operation


class InvalidProfileNameError(GrotloadaError):
    """A profile name that cannot be used as a file name inside the data dir."""
    def __init__(self, name: str):
        super().__init__(f"Invalid profile name {name!r}")
        self.name = name
