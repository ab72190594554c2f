"""
Logging configuration — set up once by the CLI entry point.

Every module logs through ``logging.getLogger(__name__)``. Level
precedence: CLI flag > FMAKE_LOG_LEVEL > WARNING. An optional log file
(FMAKE_LOG_FILE, FMAKE_LOG_FILE_LEVEL) always gets the detailed format.
"""

from __future__ import annotations

import logging
import sys

_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_FMT_MINIMAL = "%(message)s"
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the whole process."""
    console_level = _parse_level(level)
    if console_level <= logging.DEBUG:
        fmt, datefmt = _FORMATS[logging.DEBUG]
    elif console_level <= logging.INFO:
        fmt, datefmt = _FORMATS[logging.INFO]
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)


def _parse_level(level: str | None) -> int:
    """Level name to numeric constant; unknown names fall back to WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
