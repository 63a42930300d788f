"""Shared fixtures for cp-dialogue tests."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Generator

import pytest

from cp_dialogue.codec import LineCodec
from cp_dialogue.vocabulary import VocabularyTable, default_vocabulary


class SequentialIdSource:
    """Deterministic id source: ``dlg-1``, ``dlg-2``, ..."""

    def __init__(self, prefix: str = "dlg") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def next_id(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"


@pytest.fixture()
def vocabulary() -> VocabularyTable:
    """The host game's default control-code table."""
    return default_vocabulary()


@pytest.fixture()
def codec(vocabulary: VocabularyTable) -> LineCodec:
    """A codec over the default vocabulary."""
    return LineCodec(vocabulary)


@pytest.fixture()
def id_source() -> SequentialIdSource:
    """Deterministic id source for documents."""
    return SequentialIdSource()


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all cp-dialogue environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("cp_dialogue.config.load_dotenv", lambda *_a, **_kw: None)
    for key in ("LOG_LEVEL", "DIALOGUE_SEGMENT_DELIMITER"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
