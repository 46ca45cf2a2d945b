"""
Logging configuration — one-time setup for the CLI process.

Engine modules only ever do ``logger = logging.getLogger(__name__)``;
this module decides where those records go.

Level precedence:
    --debug / --verbose / --quiet  >  MODPLAN_LOG_LEVEL  >  WARNING

A second, file-only sink is enabled by MODPLAN_LOG_FILE, with its own
threshold in MODPLAN_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "MODPLAN_LOG_LEVEL"
ENV_FILE = "MODPLAN_LOG_FILE"
ENV_FILE_LEVEL = "MODPLAN_LOG_FILE_LEVEL"

# ── Formats ─────────────────────────────────────────────────────

# WARNING and above: the message is the whole story
_FMT_PLAIN = "%(message)s"

# INFO: which engine layer said it, and when
_FMT_INFO = "%(asctime)s [%(name)s] %(message)s"

# DEBUG and file sink: full location
_FMT_FULL = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

_DATEFMT_SHORT = "%H:%M:%S"
_DATEFMT_LONG = "%Y-%m-%d %H:%M:%S"

# Libraries silenced below DEBUG
_QUIET_LIBRARIES = ("yaml", "pydantic")


def resolve_level(verbose: bool = False, quiet: bool = False, debug: bool = False) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Install handlers on the root logger, replacing any present.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path for an additional file handler.
        log_file_level: Level for the file handler; defaults to ``level``.
        quiet_third_party: Keep library loggers at WARNING unless the
            console is at DEBUG.
    """
    console_level = _parse_level(level)

    if console_level <= logging.DEBUG:
        fmt, datefmt = _FMT_FULL, _DATEFMT_SHORT
    elif console_level <= logging.INFO:
        fmt, datefmt = _FMT_INFO, _DATEFMT_SHORT
    else:
        fmt, datefmt = _FMT_PLAIN, None

    # Console goes to stderr so plan / report text on stdout stays clean
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_FMT_FULL, datefmt=_DATEFMT_LONG))
        root.addHandler(file_handler)

    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _QUIET_LIBRARIES:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def setup_from_env(level: str) -> None:
    """``setup_logging`` with the file sink taken from the environment."""
    setup_logging(
        level=level,
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
        quiet_third_party=level.upper() != "DEBUG",
    )


def _parse_level(level: str | None) -> int:
    """Level name → numeric constant; unknown names fall back to WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
