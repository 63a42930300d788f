"""Fluent builder for dialogue documents.

Assembles a :class:`~cp_dialogue.models.dialogue.DialogueDocument` line by
line, including the composite line kinds (conditional, chance, event,
question).  :meth:`DialogueBuilder.build` hands out a deep copy, so calls
made on the builder afterwards never reach an already-built document.

Example::

    document = (
        DialogueBuilder("Abigail", "rainy_day", id_source=ids)
        .add_line("Oh, hi @.", Emotion.HAPPY)
        .add_chance_line("Want to play a game?", 0.25)
        .add_end()
        .build()
    )
"""

from __future__ import annotations

import math
from decimal import Decimal

from cp_dialogue.codec import LineCodec
from cp_dialogue.ids import IdSource, UuidIdSource
from cp_dialogue.models.dialogue import (
    CommandType,
    DialogueCondition,
    DialogueDocument,
    Emotion,
)
from cp_dialogue.registry import DialogueRegistry
from cp_dialogue.vocabulary import default_vocabulary


# Decimal exponents written in fixed notation by the game's number formatting.
_MIN_FIXED_EXPONENT = -4
_MAX_FIXED_EXPONENT = 14


def format_invariant(value: float) -> str:
    """Format *value* the way the game writes numbers into dialogue strings.

    Uses the shortest round-tripping digits.  Decimal exponents from -4 to
    14 are written in fixed notation without trailing zeros (``1.0 -> "1"``,
    ``0.25 -> "0.25"``); anything else uses ``E`` notation with a signed,
    two-digit exponent (``1e-05 -> "1E-05"``, ``1e20 -> "1E+20"``).
    """
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "-∞" if number < 0 else "∞"
    if number == 0:
        return "0"

    digits = Decimal(repr(number))
    exponent = digits.adjusted()
    if _MIN_FIXED_EXPONENT <= exponent <= _MAX_FIXED_EXPONENT:
        text = format(digits, "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    sign, figures, _ = digits.as_tuple()
    mantissa = "".join(str(figure) for figure in figures).rstrip("0") or "0"
    if len(mantissa) > 1:
        mantissa = f"{mantissa[0]}.{mantissa[1:]}"
    exponent_sign = "+" if exponent >= 0 else "-"
    return f"{'-' if sign else ''}{mantissa}E{exponent_sign}{abs(exponent):02d}"


class DialogueBuilder:
    """Fluent assembler for a single dialogue document.

    Args:
        speaker_id: Internal name of the speaking NPC.
        name: Human-readable dialogue name.
        id_source: Supplies the document id.  Defaults to
            :class:`~cp_dialogue.ids.UuidIdSource`.
        codec: Codec used by :meth:`to_raw`.  Defaults to one built on
            :func:`~cp_dialogue.vocabulary.default_vocabulary`.
    """

    def __init__(
        self,
        speaker_id: str,
        name: str,
        id_source: IdSource | None = None,
        codec: LineCodec | None = None,
    ) -> None:
        source = id_source if id_source is not None else UuidIdSource()
        self._codec = codec if codec is not None else LineCodec(default_vocabulary())
        self._document = DialogueDocument(
            id=source.next_id(),
            speaker_id=speaker_id,
            name=name,
        )

    # -- lines -----------------------------------------------------------------

    def add_line(self, text: str | None, emotion: Emotion = Emotion.NEUTRAL) -> DialogueBuilder:
        self._document.add_line(text, emotion)
        return self

    def add_conditional_line(
        self,
        condition: DialogueCondition,
        true_text: str,
        false_text: str,
        emotion: Emotion = Emotion.NEUTRAL,
    ) -> DialogueBuilder:
        """Add a line whose text depends on a world-state condition.

        The command payload is ``"<condition_key> <true_text>|<false_text>"``.
        """
        payload = f"{condition.condition_key} {true_text}|{false_text}"
        self._document.add_line("", emotion, CommandType.CONDITIONAL, payload)
        return self

    def add_chance_line(
        self,
        text: str,
        probability: float,
        emotion: Emotion = Emotion.NEUTRAL,
    ) -> DialogueBuilder:
        """Add a line shown with the given probability (0.0 to 1.0)."""
        self._document.add_line(
            text, emotion, CommandType.CHANCE, format_invariant(probability)
        )
        return self

    def add_event_line(self, event_id: str, emotion: Emotion = Emotion.NEUTRAL) -> DialogueBuilder:
        """Add a line that triggers a game event."""
        self._document.add_line("", emotion, CommandType.EVENT, event_id)
        return self

    def add_question_line(
        self,
        question_id: str,
        text: str,
        emotion: Emotion = Emotion.NEUTRAL,
    ) -> DialogueBuilder:
        """Add a question line and mark the document interactive."""
        self._document.add_line(text, emotion, CommandType.QUESTION, question_id)
        self._document.is_interactive = True
        return self

    def add_break(self) -> DialogueBuilder:
        self._document.add_line("", Emotion.NEUTRAL, CommandType.BREAK)
        return self

    def add_end(self) -> DialogueBuilder:
        self._document.add_line("", Emotion.NEUTRAL, CommandType.END)
        return self

    # -- responses -------------------------------------------------------------

    def add_player_response(
        self,
        text: str,
        friendship_delta: int = 0,
        response_key: str | None = None,
        extra_argument: str | None = None,
        id: str | None = None,  # noqa: A002
    ) -> DialogueBuilder:
        self._document.add_player_response(
            text, friendship_delta, response_key, extra_argument, id
        )
        return self

    def add_quick_response(self, text: str) -> DialogueBuilder:
        self._document.add_quick_response(text)
        return self

    # -- properties ------------------------------------------------------------

    def set_properties(
        self,
        show_portrait: bool = True,
        face_farmer: bool = True,
        remove_on_next_move: bool = False,
    ) -> DialogueBuilder:
        """Set document-wide display flags."""
        self._document.show_portrait = show_portrait
        self._document.dont_face_farmer = not face_farmer
        self._document.remove_on_next_move = remove_on_next_move
        return self

    # -- output ----------------------------------------------------------------

    def build(self) -> DialogueDocument:
        """Return an independent copy of the document built so far."""
        return self._document.clone()

    def build_and_add(self, registry: DialogueRegistry) -> DialogueDocument:
        """Build a copy and register it in *registry*."""
        document = self.build()
        registry.add(document)
        return document

    def to_raw(self) -> str:
        """Encode the document built so far into a raw dialogue string."""
        return self._codec.encode_dialogue(self._document)
