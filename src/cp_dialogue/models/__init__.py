"""Data models for cp-dialogue."""

from __future__ import annotations

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

__all__ = [
    "CommandType",
    "ConditionType",
    "DialogueCondition",
    "DialogueDocument",
    "DialogueLine",
    "Emotion",
    "PlayerResponseOption",
    "SpecialCharacterType",
    "SpecialTokenType",
    "ValidationResult",
]
