"""JSON interchange for dialogue documents.

Documents are written with the editor's camelCase field names
(``dialogueLines``, ``responseText``, ``friendshipChange`` ...) in
declaration order, and read back through Pydantic validation.  Both
snake_case and camelCase keys are accepted on load.
"""

from __future__ import annotations

import json

from pydantic import TypeAdapter, ValidationError

from cp_dialogue.exceptions import DocumentSerializationError
from cp_dialogue.log import get_logger
from cp_dialogue.models.dialogue import DialogueDocument

logger = get_logger(__name__)

_DOCUMENT_LIST = TypeAdapter(list[DialogueDocument])


def dump_document(document: DialogueDocument, indent: int | None = 2) -> str:
    """Serialize one document to JSON text."""
    return document.model_dump_json(by_alias=True, indent=indent)


def dump_documents(documents: list[DialogueDocument], indent: int | None = 2) -> str:
    """Serialize a list of documents to a JSON array."""
    return _DOCUMENT_LIST.dump_json(documents, by_alias=True, indent=indent).decode("utf-8")


def load_document(text: str) -> DialogueDocument:
    """Parse JSON text produced by :func:`dump_document`.

    Raises:
        DocumentSerializationError: If *text* is empty, is not valid JSON,
            or does not match the document schema.
    """
    data = _parse_json(text)
    if not isinstance(data, dict):
        raise DocumentSerializationError(
            "Expected a JSON object for a dialogue document", raw_text=text
        )
    try:
        return DialogueDocument.model_validate(data)
    except ValidationError as exc:
        raise DocumentSerializationError(
            f"Schema validation failed: {exc}", raw_text=text
        ) from exc


def load_documents(text: str) -> list[DialogueDocument]:
    """Parse a JSON array produced by :func:`dump_documents`.

    Raises:
        DocumentSerializationError: On empty, malformed or off-schema input.
    """
    data = _parse_json(text)
    if not isinstance(data, list):
        raise DocumentSerializationError(
            "Expected a JSON array of dialogue documents", raw_text=text
        )
    try:
        documents = _DOCUMENT_LIST.validate_python(data)
    except ValidationError as exc:
        raise DocumentSerializationError(
            f"Schema validation failed: {exc}", raw_text=text
        ) from exc
    logger.debug("Loaded %d dialogue documents", len(documents))
    return documents


def _parse_json(text: str) -> object:
    if not text or not text.strip():
        raise DocumentSerializationError("Empty document text", raw_text=text or "")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentSerializationError(f"Invalid JSON: {exc}", raw_text=text) from exc
