"""Control-code vocabulary shared by the codec and the playback cursor.

The host dialogue engine owns the literal control-code strings.  This
module treats them as data: a :class:`VocabularyTable` is an ordered
lookup between codes and semantic tags, built by the caller and passed to
:class:`~cp_dialogue.codec.LineCodec`.  :func:`default_vocabulary` returns
the table for the current game release.

Four families are kept, each in priority order::

    emotions            SUBSTRING   detected anywhere in a segment
    commands            PREFIX      detected at the start of a segment
    special characters  REPLACE_ALL stripped everywhere during cleaning
                        MARKER      classified only, never stripped
    special tokens      REPLACE_ALL stripped everywhere during cleaning
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from cp_dialogue.exceptions import VocabularyError
from cp_dialogue.models.dialogue import (
    CommandType,
    Emotion,
    SpecialCharacterType,
    SpecialTokenType,
)

DEFAULT_SEGMENT_DELIMITER = "#"


class MatchKind(str, Enum):
    """How a code is located inside a raw segment."""

    PREFIX = "prefix"
    SUBSTRING = "substring"
    REPLACE_ALL = "replace_all"
    MARKER = "marker"


@dataclass(frozen=True)
class VocabularyEntry:
    """A single ``(code, tag, match_kind)`` triple.

    Attributes:
        code: Literal control code, e.g. ``"$h"``.
        tag: Enum member the code stands for.
        match_kind: How the codec looks for the code.
    """

    code: str
    tag: Enum
    match_kind: MatchKind


class VocabularyTable:
    """Ordered, injectable lookup between control codes and tags.

    Entry order within each family is the detection priority order.

    Args:
        emotions: Emotion entries (``Emotion`` tags).
        commands: Command entries (``CommandType`` tags).
        special_characters: Special-character entries.
        special_tokens: Special-token entries.
        segment_delimiter: String separating segments of a raw dialogue.

    Raises:
        VocabularyError: If a code is empty, a tag appears twice in one
            family, or an entry's tag belongs to the wrong family.
    """

    def __init__(
        self,
        emotions: Iterable[VocabularyEntry],
        commands: Iterable[VocabularyEntry],
        special_characters: Iterable[VocabularyEntry],
        special_tokens: Iterable[VocabularyEntry],
        segment_delimiter: str = DEFAULT_SEGMENT_DELIMITER,
    ) -> None:
        if not segment_delimiter:
            raise VocabularyError("Segment delimiter must not be empty")

        self.emotions = self._check_family("emotion", emotions, Emotion)
        self.commands = self._check_family("command", commands, CommandType)
        self.special_characters = self._check_family(
            "special character", special_characters, SpecialCharacterType
        )
        self.special_tokens = self._check_family(
            "special token", special_tokens, SpecialTokenType
        )
        self.segment_delimiter = segment_delimiter

        self._by_tag: dict[Enum, VocabularyEntry] = {}
        self._by_code: dict[tuple[type[Enum], str], Enum] = {}
        for entry in (
            *self.emotions,
            *self.commands,
            *self.special_characters,
            *self.special_tokens,
        ):
            self._by_tag[entry.tag] = entry
            self._by_code.setdefault((type(entry.tag), entry.code), entry.tag)

    @staticmethod
    def _check_family(
        family: str,
        entries: Iterable[VocabularyEntry],
        tag_type: type[Enum],
    ) -> tuple[VocabularyEntry, ...]:
        checked = tuple(entries)
        seen: set[Enum] = set()
        for entry in checked:
            if not entry.code:
                raise VocabularyError(f"Empty {family} code for {entry.tag!r}")
            if not isinstance(entry.tag, tag_type):
                raise VocabularyError(
                    f"{entry.tag!r} is not a valid {family} tag"
                )
            if entry.tag in seen:
                raise VocabularyError(f"Duplicate {family} tag: {entry.tag!r}")
            seen.add(entry.tag)
        return checked

    # -- lookups ---------------------------------------------------------------

    def code_for(self, tag: Enum) -> str | None:
        """Return the code registered for *tag*, or ``None``."""
        entry = self._by_tag.get(tag)
        return entry.code if entry is not None else None

    def classify_emotion(self, code: str) -> Emotion:
        """Map an exact emotion code to its tag (``NEUTRAL`` if unknown)."""
        return self._by_code.get((Emotion, code), Emotion.NEUTRAL)  # type: ignore[return-value]

    def classify_command(self, code: str) -> CommandType:
        """Map an exact command code to its tag (``NONE`` if unknown)."""
        return self._by_code.get((CommandType, code), CommandType.NONE)  # type: ignore[return-value]

    def classify_special_character(self, code: str) -> SpecialCharacterType:
        """Map an exact special-character code to its tag (``NONE`` if unknown)."""
        return self._by_code.get(  # type: ignore[return-value]
            (SpecialCharacterType, code), SpecialCharacterType.NONE
        )

    def classify_special_token(self, code: str) -> SpecialTokenType:
        """Map an exact special-token code to its tag (``NONE`` if unknown)."""
        return self._by_code.get(  # type: ignore[return-value]
            (SpecialTokenType, code), SpecialTokenType.NONE
        )

    def detectable_emotions(self) -> tuple[VocabularyEntry, ...]:
        """Emotion entries used for detection: every non-neutral entry."""
        return tuple(e for e in self.emotions if e.tag is not Emotion.NEUTRAL)

    def stripped_codes(self) -> tuple[VocabularyEntry, ...]:
        """Token and character entries removed everywhere during cleaning.

        Tokens come first so that multi-character tokens are removed before
        any single marker character they contain.
        """
        return tuple(
            e
            for e in (*self.special_tokens, *self.special_characters)
            if e.match_kind is MatchKind.REPLACE_ALL
        )

    def all_codes(self) -> dict[str, str]:
        """Return every code keyed by ``"<Family>.<TagValue>"``."""
        return {
            f"{type(entry.tag).__name__}.{entry.tag.value}": entry.code
            for entry in self._by_tag.values()
        }

    @property
    def continuation_marker(self) -> str | None:
        """Code that continues a line on the next screen."""
        return self.code_for(SpecialCharacterType.BREAK)

    @property
    def no_turn_token(self) -> str | None:
        """Token that keeps the speaker from turning to the player."""
        return self.code_for(SpecialTokenType.DONT_FACE_FARMER)

    @property
    def no_portrait_prefix(self) -> str | None:
        """Code that, leading a segment, hides the speaker portrait."""
        return self.code_for(SpecialCharacterType.NO_PORTRAIT_PREFIX)

    def __repr__(self) -> str:
        return (
            f"VocabularyTable(emotions={len(self.emotions)}, "
            f"commands={len(self.commands)}, "
            f"special_characters={len(self.special_characters)}, "
            f"special_tokens={len(self.special_tokens)}, "
            f"segment_delimiter={self.segment_delimiter!r})"
        )


# ---------------------------------------------------------------------------
# Host game defaults
# ---------------------------------------------------------------------------

_EMOTION_CODES: tuple[tuple[str, Emotion], ...] = (
    ("$h", Emotion.HAPPY),
    ("$s", Emotion.SAD),
    ("$u", Emotion.UNIQUE),
    ("$l", Emotion.LOVE),
    ("$a", Emotion.ANGRY),
    ("$neutral", Emotion.NEUTRAL),
)

_COMMAND_CODES: tuple[tuple[str, CommandType], ...] = (
    ("$b", CommandType.BREAK),
    ("$e", CommandType.END),
    ("$k", CommandType.KILL),
    ("$c", CommandType.CHANCE),
    ("$d", CommandType.CONDITIONAL),
    ("$v", CommandType.EVENT),
    ("$y", CommandType.QUICK_RESPONSE),
    ("$p", CommandType.PREREQUISITE),
    ("$1", CommandType.SINGLE),
    ("$query", CommandType.GAME_STATE_QUERY),
    ("${", CommandType.GENDER_SWITCH),
    ("$action", CommandType.RUN_ACTION),
    ("$t", CommandType.START_CONVERSATION_TOPIC),
    ("$q", CommandType.QUESTION),
    ("$r", CommandType.RESPONSE),
)

_SPECIAL_CHARACTER_CODES: tuple[tuple[str, SpecialCharacterType, MatchKind], ...] = (
    ("{", SpecialCharacterType.BREAK, MatchKind.REPLACE_ALL),
    ("@", SpecialCharacterType.PLAYER_NAME, MatchKind.REPLACE_ALL),
    ("*", SpecialCharacterType.QUICK_RESPONSE_DELINEATOR, MatchKind.REPLACE_ALL),
    ("||", SpecialCharacterType.MULTIPLE_DIALOGUE_DELINEATOR, MatchKind.REPLACE_ALL),
    ("^", SpecialCharacterType.GENDER_SPLIT, MatchKind.MARKER),
    ("¦", SpecialCharacterType.GENDER_SPLIT_2, MatchKind.MARKER),
    ("%", SpecialCharacterType.NO_PORTRAIT_PREFIX, MatchKind.MARKER),
)

_SPECIAL_TOKEN_CODES: tuple[tuple[str, SpecialTokenType], ...] = (
    ("%adj", SpecialTokenType.RANDOM_ADJECTIVE),
    ("%noun", SpecialTokenType.RANDOM_NOUN),
    ("%place", SpecialTokenType.RANDOM_PLACE),
    ("%spouse", SpecialTokenType.SPOUSE),
    ("%name", SpecialTokenType.RANDOM_NAME),
    ("%firstnameletters", SpecialTokenType.FIRST_NAME_LETTERS),
    ("%time", SpecialTokenType.TIME),
    ("%band", SpecialTokenType.BAND_NAME),
    ("%book", SpecialTokenType.BOOK_NAME),
    ("%pet", SpecialTokenType.PET),
    ("%farm", SpecialTokenType.FARM_NAME),
    ("%favorite", SpecialTokenType.FAVORITE_THING),
    ("%fork", SpecialTokenType.EVENT_FORK),
    ("%year", SpecialTokenType.YEAR),
    ("%kid1", SpecialTokenType.KID_1),
    ("%kid2", SpecialTokenType.KID_2),
    ("%revealtaste", SpecialTokenType.REVEAL_TASTE),
    ("%season", SpecialTokenType.SEASON),
    ("%noturn", SpecialTokenType.DONT_FACE_FARMER),
)


def default_vocabulary(
    segment_delimiter: str = DEFAULT_SEGMENT_DELIMITER,
) -> VocabularyTable:
    """Build a fresh table holding the host game's literal control codes.

    Args:
        segment_delimiter: Override for the segment delimiter, normally
            taken from :class:`~cp_dialogue.config.Settings`.

    Returns:
        A new :class:`VocabularyTable`.
    """
    return VocabularyTable(
        emotions=[
            VocabularyEntry(code, tag, MatchKind.SUBSTRING)
            for code, tag in _EMOTION_CODES
        ],
        commands=[
            VocabularyEntry(code, tag, MatchKind.PREFIX)
            for code, tag in _COMMAND_CODES
        ],
        special_characters=[
            VocabularyEntry(code, tag, kind)
            for code, tag, kind in _SPECIAL_CHARACTER_CODES
        ],
        special_tokens=[
            VocabularyEntry(code, tag, MatchKind.REPLACE_ALL)
            for code, tag in _SPECIAL_TOKEN_CODES
        ],
        segment_delimiter=segment_delimiter,
    )
