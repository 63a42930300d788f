"""cp-dialogue: dialogue markup codec and playback for Content Patcher packs.

Encodes and decodes the host game's control-code annotated dialogue
strings and simulates stepping through a dialogue the way the game does.
"""

from __future__ import annotations

from cp_dialogue.builder import DialogueBuilder
from cp_dialogue.codec import LineCodec
from cp_dialogue.exceptions import DocumentSerializationError, VocabularyError
from cp_dialogue.ids import IdSource, UuidIdSource
from cp_dialogue.models.dialogue import (
    CommandType,
    ConditionType,
    DialogueCondition,
    DialogueDocument,
    DialogueLine,
    Emotion,
    PlayerResponseOption,
    SpecialCharacterType,
    SpecialTokenType,
)
from cp_dialogue.models.validation import ValidationResult
from cp_dialogue.playback import PlaybackPhase, PlaybackState
from cp_dialogue.registry import DialogueRegistry
from cp_dialogue.serializer import dump_document, load_document
from cp_dialogue.vocabulary import (
    MatchKind,
    VocabularyEntry,
    VocabularyTable,
    default_vocabulary,
)

__version__ = "0.1.0"

__all__ = [
    "CommandType",
    "ConditionType",
    "DialogueBuilder",
    "DialogueCondition",
    "DialogueDocument",
    "DialogueLine",
    "DialogueRegistry",
    "DocumentSerializationError",
    "Emotion",
    "IdSource",
    "LineCodec",
    "MatchKind",
    "PlaybackPhase",
    "PlaybackState",
    "PlayerResponseOption",
    "SpecialCharacterType",
    "SpecialTokenType",
    "UuidIdSource",
    "ValidationResult",
    "VocabularyEntry",
    "VocabularyError",
    "VocabularyTable",
    "default_vocabulary",
    "dump_document",
    "load_document",
]
