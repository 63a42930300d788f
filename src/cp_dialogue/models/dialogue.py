"""Pydantic models for authored dialogue content.

Defines the enumerations shared by the codec and the playback cursor, and
the authored data types:

- :class:`DialogueLine` -- one decoded segment of a raw dialogue string.
- :class:`PlayerResponseOption` -- one answer the player can pick.
- :class:`DialogueDocument` -- an ordered collection of lines plus metadata.
- :class:`DialogueCondition` -- a world-state condition used by the builder.

Documents are mutated only while authoring (``add_*`` calls, append-only).
Playback never writes to a document; the cursor lives in
:class:`~cp_dialogue.playback.PlaybackState`.

Field aliases match the content-pack JSON written by the editor, so
``model_dump_json(by_alias=True)`` produces interchange-ready output.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cp_dialogue.models.validation import ValidationResult

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Emotion(str, Enum):
    """Portrait emotion of a dialogue line."""

    NEUTRAL = "Neutral"
    HAPPY = "Happy"
    SAD = "Sad"
    UNIQUE = "Unique"
    LOVE = "Love"
    ANGRY = "Angry"


class CommandType(str, Enum):
    """Command directive prefixed to a dialogue segment."""

    NONE = "None"
    BREAK = "Break"
    END = "End"
    KILL = "Kill"
    CHANCE = "Chance"
    CONDITIONAL = "Conditional"
    EVENT = "Event"
    QUICK_RESPONSE = "QuickResponse"
    PREREQUISITE = "Prerequisite"
    SINGLE = "Single"
    GAME_STATE_QUERY = "GameStateQuery"
    GENDER_SWITCH = "GenderSwitch"
    RUN_ACTION = "RunAction"
    START_CONVERSATION_TOPIC = "StartConversationTopic"
    QUESTION = "Question"
    RESPONSE = "Response"


class SpecialCharacterType(str, Enum):
    """Inline marker characters recognised by the host dialogue engine."""

    NONE = "None"
    BREAK = "BreakSpecialCharacter"
    PLAYER_NAME = "PlayerNameSpecialCharacter"
    GENDER_SPLIT = "GenderDialogueSplitCharacter"
    GENDER_SPLIT_2 = "GenderDialogueSplitCharacter2"
    QUICK_RESPONSE_DELINEATOR = "QuickResponseDelineator"
    MULTIPLE_DIALOGUE_DELINEATOR = "MultipleDialogueDelineator"
    NO_PORTRAIT_PREFIX = "NoPortraitPrefix"


class SpecialTokenType(str, Enum):
    """Substitution tokens the host engine expands at display time.

    Tokens are only classified here, never evaluated.
    """

    NONE = "None"
    RANDOM_ADJECTIVE = "RandomAdjective"
    RANDOM_NOUN = "RandomNoun"
    RANDOM_PLACE = "RandomPlace"
    SPOUSE = "Spouse"
    RANDOM_NAME = "RandomName"
    FIRST_NAME_LETTERS = "FirstNameLetters"
    TIME = "Time"
    BAND_NAME = "BandName"
    BOOK_NAME = "BookName"
    PET = "Pet"
    FARM_NAME = "FarmName"
    FAVORITE_THING = "FavoriteThing"
    EVENT_FORK = "EventFork"
    YEAR = "Year"
    KID_1 = "Kid1"
    KID_2 = "Kid2"
    REVEAL_TASTE = "RevealTaste"
    SEASON = "Season"
    DONT_FACE_FARMER = "DontFaceFarmer"


class ConditionType(str, Enum):
    """Category of a world-state condition used in conditional lines."""

    COMMUNITY_CENTER = "CommunityCenter"
    JOJA_MART = "JojaMart"
    BUS = "Bus"
    KENT = "Kent"
    CUSTOM = "Custom"


# ---------------------------------------------------------------------------
# DialogueLine
# ---------------------------------------------------------------------------


class DialogueLine(BaseModel):
    """A single segment of a dialogue.

    Attributes:
        text: Display text with control codes removed.  ``None`` is
            coerced to ``""``.
        emotion: Portrait emotion for this line.
        show_portrait: Whether the speaker portrait is drawn.
        face_farmer: Whether the speaker turns to face the player.
        continued_on_next_screen: Whether the line spills onto another box.
        command_type: Command directive, ``CommandType.NONE`` for plain text.
        command_args: Raw argument payload following the command code.
    """

    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    emotion: Emotion = Emotion.NEUTRAL
    show_portrait: bool = Field(default=True, alias="showPortrait")
    face_farmer: bool = Field(default=True, alias="faceFarmer")
    continued_on_next_screen: bool = Field(default=False, alias="continuedOnNextScreen")
    command_type: CommandType = Field(default=CommandType.NONE, alias="commandType")
    command_args: str | None = Field(default=None, alias="commandArgs")

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, value: str | None) -> str:
        return "" if value is None else value

    @property
    def has_text(self) -> bool:
        """``True`` when the text is non-empty after trimming."""
        return bool(self.text.strip())


# ---------------------------------------------------------------------------
# PlayerResponseOption
# ---------------------------------------------------------------------------


class PlayerResponseOption(BaseModel):
    """An answer offered to the player after an interactive line.

    Attributes:
        text: Text shown on the response button.
        friendship_delta: Friendship points gained (or lost) when picked.
        response_key: Key the host engine records for this answer.
        extra_argument: Free-form argument passed along with the answer.
        id: Optional stable identifier of the option.
    """

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(default="", alias="responseText")
    friendship_delta: int = Field(default=0, alias="friendshipChange")
    response_key: str | None = Field(default=None, alias="responseKey")
    extra_argument: str | None = Field(default=None, alias="extraArgument")
    id: str | None = None

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, value: str | None) -> str:
        return "" if value is None else value


# ---------------------------------------------------------------------------
# DialogueDocument
# ---------------------------------------------------------------------------


class DialogueDocument(BaseModel):
    """An authored dialogue: ordered lines plus speaker metadata.

    Attributes:
        id: Unique document id (supplied by an id source, never generated
            here).
        speaker_id: Internal name of the speaking NPC.
        name: Human-readable name of the dialogue.
        description: Optional author note.
        translation_key: Optional asset key the dialogue is stored under.
        lines: Ordered dialogue lines.
        player_responses: Answers offered after an interactive final line.
        quick_responses: Quick-response texts.
        is_interactive: Whether the final line is a question.
        is_quick_response: Whether the dialogue uses quick responses.
        show_portrait: Document-wide portrait toggle.
        remove_on_next_move: Whether the box closes when the player moves.
        dont_face_farmer: Whether the speaker keeps their facing direction.
        temporary_dialogue_key: Optional key for temporary dialogue.
        created_at: Creation timestamp.
        updated_at: Timestamp of the last registry update or clone.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    speaker_id: str = Field(default="", alias="speakerId")
    name: str = ""
    description: str | None = None
    translation_key: str | None = Field(default=None, alias="translationKey")
    lines: list[DialogueLine] = Field(default_factory=list, alias="dialogueLines")
    player_responses: list[PlayerResponseOption] = Field(
        default_factory=list, alias="playerResponses"
    )
    quick_responses: list[str] = Field(default_factory=list, alias="quickResponses")
    is_interactive: bool = Field(default=False, alias="isLastDialogueInteractive")
    is_quick_response: bool = Field(default=False, alias="isQuickResponse")
    show_portrait: bool = Field(default=True, alias="showPortrait")
    remove_on_next_move: bool = Field(default=False, alias="removeOnNextMove")
    dont_face_farmer: bool = Field(default=False, alias="dontFaceFarmer")
    temporary_dialogue_key: str | None = Field(default=None, alias="temporaryDialogueKey")
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    updated_at: datetime = Field(default_factory=datetime.now, alias="updatedAt")

    # -- authoring -----------------------------------------------------------

    def add_line(
        self,
        text: str | None,
        emotion: Emotion = Emotion.NEUTRAL,
        command_type: CommandType = CommandType.NONE,
        command_args: str | None = None,
    ) -> DialogueLine:
        """Append a line and return it.

        ``None`` text is stored as ``""``; nothing is rejected here.  Use
        :meth:`validate` to find lines that are empty.
        """
        line = DialogueLine(
            text=text,
            emotion=emotion,
            command_type=command_type,
            command_args=command_args,
        )
        self.lines.append(line)
        return line

    def add_player_response(
        self,
        text: str | None,
        friendship_delta: int = 0,
        response_key: str | None = None,
        extra_argument: str | None = None,
        id: str | None = None,  # noqa: A002
    ) -> PlayerResponseOption:
        """Append a player response option and return it."""
        option = PlayerResponseOption(
            text=text,
            friendship_delta=friendship_delta,
            response_key=response_key,
            extra_argument=extra_argument,
            id=id,
        )
        self.player_responses.append(option)
        return option

    def add_quick_response(self, text: str | None) -> None:
        """Append a quick response and mark the document as quick-response."""
        self.quick_responses.append("" if text is None else text)
        self.is_quick_response = True

    def response_options(self) -> list[PlayerResponseOption]:
        """Return the player response options, in authored order."""
        return self.player_responses

    # -- checks --------------------------------------------------------------

    # Shadows the deprecated pydantic classmethod; call it on instances only.
    def validate(self) -> ValidationResult:  # type: ignore[override]
        """Check the document's structure.

        Every violation is collected; nothing is raised.

        Returns:
            A :class:`ValidationResult` listing all problems found.
        """
        errors: list[str] = []

        if not self.id.strip():
            errors.append("Dialogue id must not be empty")
        if not self.speaker_id.strip():
            errors.append("Speaker id must not be empty")
        if not self.name.strip():
            errors.append("Dialogue name must not be empty")
        if not self.lines:
            errors.append("Dialogue must contain at least one line")

        for index, line in enumerate(self.lines):
            if not line.has_text and line.command_type is CommandType.NONE:
                errors.append(f"Line {index + 1} has no text and no command")

        return ValidationResult(is_valid=not errors, errors=errors)

    def clone(self) -> DialogueDocument:
        """Return a deep copy sharing no mutable state with this document.

        ``updated_at`` of the copy is set to the current time.
        """
        copy = self.model_copy(deep=True)
        copy.updated_at = datetime.now()
        return copy


# ---------------------------------------------------------------------------
# DialogueCondition
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DialogueCondition:
    """A world-state condition referenced by a conditional line.

    Attributes:
        condition_key: Key the host engine evaluates (e.g. ``"bus"``).
        description: Author-facing description.
        type: Category of the condition.
    """

    condition_key: str
    description: str = ""
    type: ConditionType = ConditionType.CUSTOM
