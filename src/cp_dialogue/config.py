"""Configuration loading for cp-dialogue.

Reads optional settings from environment variables (with .env support via
python-dotenv).  Every setting has a default, so a bare environment works.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from cp_dialogue.vocabulary import DEFAULT_SEGMENT_DELIMITER


class ConfigError(Exception):
    """Raised when a configuration value is present but invalid."""


@dataclass(frozen=True)
class Settings:
    """Settings loaded from environment variables.

    Attributes:
        log_level: Logging level (default ``"INFO"``).
        segment_delimiter: Separator between raw dialogue segments
            (default ``"#"``).
    """

    log_level: str = "INFO"
    segment_delimiter: str = DEFAULT_SEGMENT_DELIMITER


def load_settings() -> Settings:
    """Load settings from the environment.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the working
    directory is picked up automatically.

    Returns:
        A :class:`Settings` instance.

    Raises:
        ConfigError: If ``DIALOGUE_SEGMENT_DELIMITER`` is set to a
            whitespace-only value.
    """
    load_dotenv()

    values: dict[str, str] = {}

    log_level = os.environ.get("LOG_LEVEL", "").strip()
    if log_level:
        values["log_level"] = log_level

    delimiter = os.environ.get("DIALOGUE_SEGMENT_DELIMITER")
    if delimiter is not None and delimiter != "":
        if not delimiter.strip():
            raise ConfigError("DIALOGUE_SEGMENT_DELIMITER must not be whitespace")
        values["segment_delimiter"] = delimiter

    return Settings(**values)
