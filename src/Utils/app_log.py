"""
app_log.py
logging handlers for the GUI: one forwards records to the log panel, the
other appends them to grotloada.log.

The GUI calls install_gui_log(log_fn, after_fn) after building its log
panel, and install_file_log(path) once at startup.  Library code keeps using
logging.getLogger(__name__); anything at a handler's level reaches it.

Thread safety: records are always put on a queue and drained on the Tk main
thread via a periodic after() callback, so emit() is safe from any thread.
"""

from __future__ import annotations

import logging
import queue
from pathlib import Path
from typing import Callable

_DRAIN_INTERVAL_MS = 50


class GuiLogHandler(logging.Handler):
    def __init__(self, log_fn: Callable[[str], None],
                 after_fn: Callable[[int, Callable[[], None]], object],
                 level: int = logging.INFO):
        super().__init__(level)
        self._log_fn = log_fn
        self._after_fn = after_fn
        self._queue: queue.Queue[str] = queue.Queue()
        self._closed = False
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._queue.put_nowait(self.format(record))
        except Exception:
            self.handleError(record)

    def drain(self) -> None:
        """Run on the main thread: hand queued messages to the panel and reschedule."""
        while True:
            try:
                msg = self._queue.get_nowait()
            except queue.Empty:
                break
            self._log_fn(msg)
        if not self._closed:
            self._after_fn(_DRAIN_INTERVAL_MS, self.drain)

    def close(self) -> None:
        self._closed = True
        super().close()


def install_gui_log(log_fn: Callable[[str], None],
                    after_fn: Callable[[int, Callable[[], None]], object],
                    logger: logging.Logger | None = None) -> GuiLogHandler:
    """Attach a GuiLogHandler to logger (root by default) and start draining."""
    handler = GuiLogHandler(log_fn, after_fn)
    (logger or logging.getLogger()).addHandler(handler)
    after_fn(0, handler.drain)
    return handler


_FILE_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def install_file_log(path: Path, logger: logging.Logger | None = None,
                     level: int = logging.INFO) -> logging.FileHandler:
    """
    Append records at `level` and above to the file at path (grotloada.log in
    the data dir for the GUI).  Raises OSError if the file cannot be opened.
    """
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, _FILE_DATEFMT))
    (logger or logging.getLogger()).addHandler(handler)
    return handler
