"""Playback cursor reproducing the host engine's line stepping.

A :class:`PlaybackState` is created per playback session and references a
:class:`~cp_dialogue.models.dialogue.DialogueDocument` without ever writing
to it, so any number of sessions can walk the same document at once.  The
processed text of the current line (markers and emotion code stripped) is
held by the state itself.

Lifecycle::

    NOT_STARTED (index 0) --advance--> IN_PROGRESS (index i) --advance--> FINISHED

:meth:`PlaybackState.advance` is the only transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from cp_dialogue.codec import LineCodec
from cp_dialogue.log import get_logger
from cp_dialogue.models.dialogue import (
    DialogueDocument,
    Emotion,
    PlayerResponseOption,
)
from cp_dialogue.vocabulary import default_vocabulary

logger = get_logger(__name__)

EMPTY_DIALOGUE_TEXT = "..."

_PORTRAIT_INDEX: dict[Emotion, int] = {
    Emotion.NEUTRAL: 0,
    Emotion.HAPPY: 1,
    Emotion.SAD: 2,
    Emotion.UNIQUE: 3,
    Emotion.LOVE: 4,
    Emotion.ANGRY: 5,
}


def portrait_index(emotion: Emotion) -> int:
    """Portrait sprite index the host engine uses for *emotion*."""
    return _PORTRAIT_INDEX.get(emotion, 0)


class PlaybackPhase(str, Enum):
    """Coarse position of a playback session."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


def _default_codec() -> LineCodec:
    return LineCodec(default_vocabulary())


@dataclass(eq=False)
class PlaybackState:
    """Cursor over one document for one playback session.

    The first line's special attributes are applied on construction, the
    same way the host engine prepares a freshly built dialogue.

    Attributes:
        document: The dialogue being played.  Treated as read-only.
        codec: Codec whose vocabulary supplies the continuation marker,
            the no-turn token and the emotion codes.
        current_index: Index of the current line.  Equals ``len(lines)``
            only after the session has finished.
        current_emotion: Emotion of the current line.
        emotion_explicit: Whether the current emotion came from a code.
        continued_on_next_screen: Whether the current line continues on
            the next screen.
        dont_face_farmer: Whether the speaker keeps facing away.
        finished: Whether the session has ended.
    """

    document: DialogueDocument
    codec: LineCodec = field(default_factory=_default_codec)
    current_index: int = 0
    current_emotion: Emotion = Emotion.NEUTRAL
    emotion_explicit: bool = False
    continued_on_next_screen: bool = False
    dont_face_farmer: bool = False
    finished: bool = False
    _current_text: str | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self._apply_special_attributes()

    # -- queries ---------------------------------------------------------------

    @property
    def phase(self) -> PlaybackPhase:
        """Where the session stands."""
        if self.finished:
            return PlaybackPhase.FINISHED
        if self.current_index == 0:
            return PlaybackPhase.NOT_STARTED
        return PlaybackPhase.IN_PROGRESS

    def is_finished(self) -> bool:
        return self.finished

    def current_text(self) -> str:
        """Return the text the speaker is currently saying.

        A document with no lines always yields ``"..."``.  Otherwise an
        ended session or an out-of-range cursor yields ``""``.
        """
        lines = self.document.lines
        if not lines:
            return EMPTY_DIALOGUE_TEXT
        if self.finished or self.current_index >= len(lines):
            return ""
        if self._current_text is not None:
            return self._current_text
        return lines[self.current_index].text

    def is_on_final_dialogue(self) -> bool:
        """``True`` when no later line has non-blank text."""
        return not any(
            line.has_text for line in self.document.lines[self.current_index + 1:]
        )

    def is_current_line_a_question(self) -> bool:
        """``True`` when the document is interactive and the cursor is on its last line."""
        return (
            self.document.is_interactive
            and self.current_index == len(self.document.lines) - 1
        )

    def get_portrait_index(self) -> int:
        """Portrait sprite index for the current emotion."""
        return portrait_index(self.current_emotion)

    def response_options(self) -> list[PlayerResponseOption]:
        return self.document.response_options()

    # -- stepping --------------------------------------------------------------

    def advance(self) -> str | None:
        """Step past the current line.

        Follows the host engine:

        1. If the cursor is on the final dialogue, bump the index and mark
           the session finished straight away.
        2. Remember whether the line being left continues on the next
           screen.
        3. If another line exists, move onto it and recompute its special
           attributes; otherwise mark the session finished.

        Calling this on a finished session does nothing.

        Returns:
            The text of the line just left when it continued on the next
            screen, otherwise ``None`` (the caller waits for input).
        """
        if self.finished:
            return None

        lines = self.document.lines
        if not lines:
            self.finished = True
            return None

        previous_text = self.current_text()

        if self.is_on_final_dialogue():
            self.current_index += 1
            self.finished = True

        was_continued = self.continued_on_next_screen

        if self.current_index < len(lines) - 1:
            self.current_index += 1
            self._apply_special_attributes()
        else:
            self.finished = True

        logger.debug(
            "Advanced dialogue %r to index %d (finished=%s, continued=%s)",
            self.document.id,
            self.current_index,
            self.finished,
            was_continued,
        )
        return previous_text if was_continued else None

    def _apply_special_attributes(self) -> None:
        """Recompute emotion and marker flags for the line under the cursor."""
        self.current_emotion = Emotion.NEUTRAL
        self.continued_on_next_screen = False
        self.dont_face_farmer = False

        lines = self.document.lines
        if self.current_index >= len(lines):
            self._current_text = None
            return

        vocabulary = self.codec.vocabulary
        text = lines[self.current_index].text

        marker = vocabulary.continuation_marker
        if marker and marker in text:
            text = text.replace(marker, "", 1)
            self.continued_on_next_screen = True

        no_turn = vocabulary.no_turn_token
        if no_turn and no_turn in text:
            text = text.replace(no_turn, "")
            self.dont_face_farmer = True

        text, self.current_emotion, self.emotion_explicit = self.codec.strip_emotion(text)
        self._current_text = text
