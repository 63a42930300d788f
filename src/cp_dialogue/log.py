"""Structured logging setup for cp-dialogue.

Provides a consistent log format across the package with ISO 8601
timestamps and pipe-separated fields.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "cp_dialogue"

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Marks handlers added by setup_logging so repeated calls stay idempotent
# without touching handlers added elsewhere.
_HANDLER_ATTR = "_cp_dialogue_log_handler"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with the project formatter.

    Attaches a single :class:`logging.StreamHandler` writing to *stderr*.
    Calling this again only updates the level.

    Args:
        level: A standard logging level name (e.g. ``"DEBUG"``).

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    root = logging.getLogger()
    root.setLevel(numeric_level)

    for handler in root.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            handler.setLevel(numeric_level)
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``cp_dialogue`` namespace.

    Module names already under the package are used as-is.  Anything else,
    including ``"__main__"`` when run with ``python -m cp_dialogue``, is
    nested under the package logger so one level setting covers it.

    Args:
        name: Dotted logger name, typically ``__name__`` of the caller.

    Returns:
        A :class:`logging.Logger` instance.
    """
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
