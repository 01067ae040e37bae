"""
Logging configuration — one call at CLI start, inherited everywhere.

Every module does ``logger = logging.getLogger(__name__)``; main.py calls
``configure_logging`` once with the global flags. The console level comes
from the first of:

    --debug  >  --verbose  >  --quiet  >  XTASK_LOG_LEVEL  >  WARNING

``XTASK_LOG_FILE`` adds a file handler at ``XTASK_LOG_FILE_LEVEL``
(default: the console level). Output goes to stderr so ``--json``
results on stdout stay parseable.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LEVEL_ENV = "XTASK_LOG_LEVEL"
FILE_ENV = "XTASK_LOG_FILE"
FILE_LEVEL_ENV = "XTASK_LOG_FILE_LEVEL"

# ── Formats ─────────────────────────────────────────────────────

_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

# (max level, format, datefmt), first match wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, _DETAILED, "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = (_DETAILED, "%Y-%m-%d %H:%M:%S")


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def configure_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Configure logging from the global CLI flags and XTASK_LOG_* variables."""
    env = os.environ if environ is None else environ
    setup_logging(
        level=resolve_level(debug, verbose, quiet, env.get(LEVEL_ENV)),
        log_file=env.get(FILE_ENV),
        log_file_level=env.get(FILE_LEVEL_ENV),
    )


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with a stderr handler and,
    optionally, a file handler.

    Args:
        level: Console level name. Unknown names fall back to WARNING.
        log_file: Path of a log file to append to.
        log_file_level: File level name (default: same as ``level``).
    """
    console_level = _parse_level(level)
    handlers: list[logging.Handler] = [_console_handler(console_level)]
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fmt, datefmt = _FILE_FORMAT
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
        handlers.append(file_handler)
        root_level = min(root_level, file_level)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(root_level)

    logging.raiseExceptions = False


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = next((f, d) for limit, f, d in _CONSOLE_FORMATS if level <= limit)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name to its numeric value; WARNING when missing or unknown."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
