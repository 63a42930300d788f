"""Custom exceptions for cp-dialogue.

Decoding, validation and playback never raise on bad content; these
exceptions cover the two places where failing loudly is the right call:
a malformed vocabulary table (a programming error) and interchange text
that cannot be turned back into a document.
"""

from __future__ import annotations


class VocabularyError(ValueError):
    """Raised when a vocabulary table is constructed with invalid entries.

    Covers empty control codes and a tag listed twice within one family.
    """


class DocumentSerializationError(Exception):
    """Raised when interchange text cannot be parsed into documents.

    This covers JSON parse failures and Pydantic schema validation errors.

    Attributes:
        raw_text: The text that failed to load.
    """

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text
