"""SearchAssembler logging utilities.

All modules log through the package logger ``log``. CLI actions call
``configure_logging`` once; it replaces any handlers installed earlier.

Line format: ``mm-dd HH:MM:SS [LVL] message`` with LVL one of
DEBG/INFO/WARN/ERRO. Action log files live at
``<log_dir>/<action>/<action>_<mmddHHMMSS>.log`` and always record DEBUG.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

LINE_FORMAT = "%(asctime)s [%(levelabbr)s] %(message)s"
DATE_FORMAT = "%m-%d %H:%M:%S"

log = logging.getLogger("SearchAssembler")


class LevelAbbrevFilter(logging.Filter):
    """Attach a four-letter ``levelabbr`` attribute to every record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003 - stdlib name
        if record.levelno >= logging.ERROR:
            record.levelabbr = "ERRO"
        elif record.levelno >= logging.WARNING:
            record.levelabbr = "WARN"
        elif record.levelno >= logging.INFO:
            record.levelabbr = "INFO"
        else:
            record.levelabbr = "DEBG"
        return True


def log_file_path(log_dir: str | Path, action: str, now: datetime | None = None) -> Path:
    """Return the log file path for one run of ``action``."""
    stamp = (now or datetime.now()).strftime("%m%d%H%M%S")
    return Path(log_dir or "log") / action / f"{action}_{stamp}.log"


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LINE_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(LevelAbbrevFilter())
    return handler


def reset_logging() -> None:
    """Detach and close every handler of the package logger."""
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """Configure the package logger for one CLI action.

    Args:
        level: Console level name; unknown names fall back to INFO.
        action: CLI action name, required for file logging.
        log_to_file: Mirror logs to an action log file.
        log_dir: Base directory for action log files.

    Returns:
        Path of the log file, or None when logging only to the console.
    """
    console_level = logging.getLevelName((level or "INFO").upper())
    if not isinstance(console_level, int):
        console_level = logging.INFO

    reset_logging()
    log.addHandler(_handler(logging.StreamHandler(), console_level))

    path = None
    if log_to_file and action:
        path = log_file_path(log_dir, action)
        path.parent.mkdir(parents=True, exist_ok=True)
        log.addHandler(_handler(logging.FileHandler(path, encoding="utf-8"), logging.DEBUG))

    log.setLevel(logging.DEBUG if path else console_level)
    log.propagate = False
    return path
