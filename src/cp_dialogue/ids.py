"""Identifier sources for new dialogue documents.

Neither the codec nor the builder invents ids; they ask an
:class:`IdSource`.  :class:`UuidIdSource` is the default used by the
editor, tests inject a deterministic source.
"""

from __future__ import annotations

import uuid
from typing import Protocol


class IdSource(Protocol):
    """Supplies unique document ids."""

    def next_id(self) -> str:
        """Return a new, unused id."""
        ...


class UuidIdSource:
    """Random UUID4 ids, the same shape the editor stores on disk."""

    def next_id(self) -> str:
        return str(uuid.uuid4())
