"""Line codec for the host game's annotated dialogue strings.

A raw dialogue is a sequence of segments joined by the segment delimiter.
Each segment is laid out as::

    EMOTION_CODE? COMMAND_CODE? ARGS? TEXT

:meth:`LineCodec.encode_line` produces exactly that layout.
:meth:`LineCodec.decode_line` does not assume it: emotions are found by a
substring search over the whole segment, commands only by a prefix test.
A line carrying both a non-neutral emotion and a command therefore decodes
with ``CommandType.NONE``, since the emotion code sits in front of the command
code.  Existing content packs depend on this behaviour.

All matching is driven by the injected
:class:`~cp_dialogue.vocabulary.VocabularyTable`; nothing here knows a
literal code.
"""

from __future__ import annotations

from cp_dialogue.ids import IdSource
from cp_dialogue.log import get_logger
from cp_dialogue.models.dialogue import (
    CommandType,
    DialogueDocument,
    DialogueLine,
    Emotion,
    SpecialTokenType,
)
from cp_dialogue.vocabulary import VocabularyTable

logger = get_logger(__name__)


class LineCodec:
    """Encode and decode dialogue segments against a vocabulary table.

    Args:
        vocabulary: The control-code table supplied by the caller.
    """

    def __init__(self, vocabulary: VocabularyTable) -> None:
        self._vocabulary = vocabulary

    @property
    def vocabulary(self) -> VocabularyTable:
        """The table this codec matches against."""
        return self._vocabulary

    # -- encoding --------------------------------------------------------------

    def encode_line(self, line: DialogueLine) -> str:
        """Encode one line into a raw segment.

        The command code and its arguments are prepended first, then the
        emotion code, giving ``EMOTION? COMMAND? ARGS? TEXT``.  A line
        without a portrait gets the no-portrait prefix in front of all of
        that.  Tags with no code in the vocabulary are skipped.
        """
        raw = line.text

        if line.command_type is not CommandType.NONE:
            command_code = self._vocabulary.code_for(line.command_type)
            if command_code:
                raw = f"{command_code}{line.command_args or ''}{raw}"

        if line.emotion is not Emotion.NEUTRAL:
            emotion_code = self._vocabulary.code_for(line.emotion)
            if emotion_code:
                raw = f"{emotion_code}{raw}"

        if not line.show_portrait and self._vocabulary.no_portrait_prefix:
            raw = f"{self._vocabulary.no_portrait_prefix}{raw}"

        return raw

    def encode_dialogue(self, document: DialogueDocument) -> str:
        """Encode every line of *document* and join with the delimiter."""
        raw = self._vocabulary.segment_delimiter.join(
            self.encode_line(line) for line in document.lines
        )
        logger.debug(
            "Encoded dialogue %r (%d lines, %d chars)",
            document.id,
            len(document.lines),
            len(raw),
        )
        return raw

    # -- decoding --------------------------------------------------------------

    def detect_emotion(self, raw: str) -> tuple[Emotion, bool]:
        """Find the first emotion code occurring anywhere in *raw*.

        Emotions are tried in table priority order; the first one present
        anywhere in the string wins.

        Returns:
            ``(emotion, explicit)`` where *explicit* is ``True`` when a
            non-neutral code was found.
        """
        for entry in self._vocabulary.detectable_emotions():
            if entry.code in raw:
                return entry.tag, True  # type: ignore[return-value]
        return Emotion.NEUTRAL, False

    def detect_command(self, raw: str) -> CommandType:
        """Return the first command whose code *raw* starts with."""
        for entry in self._vocabulary.commands:
            if raw.startswith(entry.code):
                return entry.tag  # type: ignore[return-value]
        return CommandType.NONE

    def extract_command_args(self, raw: str, command: CommandType) -> str | None:
        """Return the text following *command*'s code at the start of *raw*.

        If that remainder itself starts with an emotion code, exactly one
        such code is removed.  Returns ``None`` when *raw* does not start
        with the command code.
        """
        command_code = self._vocabulary.code_for(command)
        if not command_code or not raw.startswith(command_code):
            return None

        args = raw[len(command_code):]
        for entry in self._vocabulary.detectable_emotions():
            if args.startswith(entry.code):
                args = args[len(entry.code):]
                break
        return args

    def clean_text(self, raw: str) -> str:
        """Strip control codes from *raw*, leaving display text.

        Removes at most one leading command code, then at most one leading
        emotion code (neutral included), then every occurrence of every
        stripped token and character, and finally trims whitespace.
        """
        text = raw

        for entry in self._vocabulary.commands:
            if text.startswith(entry.code):
                text = text[len(entry.code):]
                break

        for entry in self._vocabulary.emotions:
            if text.startswith(entry.code):
                text = text[len(entry.code):]
                break

        for entry in self._vocabulary.stripped_codes():
            text = text.replace(entry.code, "")

        return text.strip()

    def classify_tokens(self, text: str) -> list[SpecialTokenType]:
        """List the special tokens present in *text*, in table order.

        Tokens are only identified; their display value is the host
        engine's business.
        """
        return [
            entry.tag  # type: ignore[misc]
            for entry in self._vocabulary.special_tokens
            if entry.code in text
        ]

    def strip_emotion(self, text: str) -> tuple[str, Emotion, bool]:
        """Remove the first occurrence of the highest-priority emotion code.

        Returns:
            ``(text, emotion, explicit)`` with the code removed from *text*.
        """
        for entry in self._vocabulary.detectable_emotions():
            if entry.code in text:
                return text.replace(entry.code, "", 1), entry.tag, True  # type: ignore[return-value]
        return text, Emotion.NEUTRAL, False

    def has_no_portrait_prefix(self, raw: str) -> bool:
        """``True`` when *raw* starts with the no-portrait prefix.

        A segment starting with a special token (``%noturn``, ``%fork``
        ...) shares the prefix character but keeps its portrait.
        """
        prefix = self._vocabulary.no_portrait_prefix
        if not prefix or not raw.startswith(prefix):
            return False
        return not any(
            raw.startswith(entry.code) for entry in self._vocabulary.special_tokens
        )

    def decode_line(self, raw: str | None) -> DialogueLine:
        """Decode one raw segment into a :class:`DialogueLine`.

        A leading no-portrait prefix is removed and recorded as
        ``show_portrait=False``.  Never raises.  Unknown codes are left in
        the text untouched.
        """
        raw = raw or ""
        show_portrait = True
        if self.has_no_portrait_prefix(raw):
            raw = raw[len(self._vocabulary.no_portrait_prefix or ""):]
            show_portrait = False

        emotion, _ = self.detect_emotion(raw)
        command = self.detect_command(raw)
        args = (
            self.extract_command_args(raw, command)
            if command is not CommandType.NONE
            else None
        )
        return DialogueLine(
            text=self.clean_text(raw),
            emotion=emotion,
            command_type=command,
            command_args=args,
            show_portrait=show_portrait,
        )

    def decode_dialogue(
        self,
        raw: str | None,
        speaker_id: str,
        id_source: IdSource,
        translation_key: str | None = None,
        name: str | None = None,
    ) -> DialogueDocument:
        """Decode a full raw dialogue string into a new document.

        Args:
            raw: Delimiter-joined segments.  ``None`` or ``""`` yields a
                document with no lines.
            speaker_id: Internal name of the speaking NPC.
            id_source: Supplies the new document's id.
            translation_key: Asset key the string was read from, if any.
            name: Document name; defaults to *translation_key* (or ``""``).

        Returns:
            A new :class:`DialogueDocument`.  Never raises on content.
        """
        document = DialogueDocument(
            id=id_source.next_id(),
            speaker_id=speaker_id,
            name=name if name is not None else (translation_key or ""),
            translation_key=translation_key,
        )

        segments = raw.split(self._vocabulary.segment_delimiter) if raw else []
        for segment in segments:
            document.lines.append(self.decode_line(segment))

        logger.debug(
            "Decoded dialogue %r for %s: %d segments",
            document.id,
            speaker_id,
            len(segments),
        )
        return document

