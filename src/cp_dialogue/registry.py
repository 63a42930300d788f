"""In-memory registry of dialogue documents.

A :class:`DialogueRegistry` is an ordinary object passed to whoever needs
it; there is no process-wide collection.  Two editor sessions hold two
registries and never see each other's documents.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime

from cp_dialogue.log import get_logger
from cp_dialogue.models.dialogue import CommandType, DialogueDocument, Emotion

logger = get_logger(__name__)


class DialogueRegistry:
    """Documents keyed by id, in insertion order.

    Documents whose id is blank are ignored by :meth:`add` and by the
    constructor.
    """

    def __init__(self, documents: list[DialogueDocument] | None = None) -> None:
        self._documents: dict[str, DialogueDocument] = {}
        for document in documents or []:
            if document.id.strip():
                self._documents[document.id] = document

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[DialogueDocument]:
        return iter(list(self._documents.values()))

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._documents

    # -- mutation --------------------------------------------------------------

    def add(self, document: DialogueDocument) -> bool:
        """Insert or replace *document*.

        Returns:
            ``True`` if stored, ``False`` if the id was blank.
        """
        if not document.id.strip():
            logger.warning("Ignoring dialogue %r with a blank id", document.name)
            return False
        document.updated_at = datetime.now()
        self._documents[document.id] = document
        logger.info("Registered dialogue %s (%s)", document.id, document.speaker_id)
        return True

    def update(self, document: DialogueDocument) -> bool:
        """Replace an existing document; unknown ids are left alone."""
        if document.id not in self._documents:
            return False
        document.updated_at = datetime.now()
        self._documents[document.id] = document
        logger.info("Updated dialogue %s", document.id)
        return True

    def remove(self, document_id: str) -> bool:
        removed = self._documents.pop(document_id, None) is not None
        if removed:
            logger.info("Removed dialogue %s", document_id)
        return removed

    def clear(self) -> None:
        self._documents.clear()

    # -- queries ---------------------------------------------------------------

    def get(self, document_id: str) -> DialogueDocument | None:
        return self._documents.get(document_id)

    def exists(self, document_id: str) -> bool:
        return document_id in self._documents

    def all(self) -> list[DialogueDocument]:
        return list(self._documents.values())

    def search(self, predicate: Callable[[DialogueDocument], bool]) -> list[DialogueDocument]:
        return [d for d in self._documents.values() if predicate(d)]

    def by_speaker(self, speaker_id: str) -> list[DialogueDocument]:
        return self.search(lambda d: d.speaker_id == speaker_id)

    def interactive(self) -> list[DialogueDocument]:
        return self.search(lambda d: d.is_interactive)

    def quick_response(self) -> list[DialogueDocument]:
        return self.search(lambda d: d.is_quick_response)

    def by_emotion(self, emotion: Emotion) -> list[DialogueDocument]:
        """Documents with at least one line authored with *emotion*."""
        return self.search(lambda d: any(line.emotion is emotion for line in d.lines))

    def by_command_type(self, command_type: CommandType) -> list[DialogueDocument]:
        return self.search(
            lambda d: any(line.command_type is command_type for line in d.lines)
        )

    def search_text(self, text: str) -> list[DialogueDocument]:
        """Documents with a line containing *text*, ignoring case."""
        needle = text.casefold()
        return self.search(
            lambda d: any(needle in line.text.casefold() for line in d.lines)
        )

    def recent(self, count: int = 10) -> list[DialogueDocument]:
        """Most recently created documents first."""
        ordered = sorted(self._documents.values(), key=lambda d: d.created_at, reverse=True)
        return ordered[:count]

    def recently_updated(self, count: int = 10) -> list[DialogueDocument]:
        """Most recently updated documents first."""
        ordered = sorted(self._documents.values(), key=lambda d: d.updated_at, reverse=True)
        return ordered[:count]
