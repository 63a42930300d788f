"""Console preview of a dialogue playback.

Walks a fresh :class:`~cp_dialogue.playback.PlaybackState` from the first
line to the end and renders what a player would see, one row per visited
line, followed by the response options.

The primary entry point is :func:`format_playback`, which returns the
formatted string.  :func:`print_playback` is a convenience wrapper that
writes directly to stdout.
"""

from __future__ import annotations

import sys

from cp_dialogue.codec import LineCodec
from cp_dialogue.models.dialogue import CommandType, DialogueDocument
from cp_dialogue.playback import PlaybackState, portrait_index

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH
_THIN_SEPARATOR = "-" * _BANNER_WIDTH
_CONTINUED_MARKER = " >>"
_QUESTION_MARKER = " [?]"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_playback(document: DialogueDocument, codec: LineCodec | None = None) -> str:
    """Render a simulated playback of *document*.

    Each row shows the line index, portrait index, emotion, any command,
    and the processed text.  Rows for lines that continue on the next
    screen end with ``>>``; the question line ends with ``[?]``.

    Args:
        document: The dialogue to play.  It is not modified.
        codec: Codec supplying the vocabulary; defaults to the host
            game's table.

    Returns:
        A multi-line string ready for console display.
    """
    lines: list[str] = []

    _append_banner(lines, document)
    _append_playback(lines, document, codec)
    _append_responses(lines, document)
    lines.append(_SEPARATOR)

    return "\n".join(lines)


def print_playback(document: DialogueDocument, codec: LineCodec | None = None) -> None:
    """Format and print a playback preview to stdout."""
    sys.stdout.write(format_playback(document, codec) + "\n")


# ---------------------------------------------------------------------------
# Internal formatters
# ---------------------------------------------------------------------------


def _append_banner(lines: list[str], document: DialogueDocument) -> None:
    lines.append(_SEPARATOR)
    lines.append(f"  DIALOGUE PREVIEW: {document.name or '(unnamed)'}")
    lines.append(f"  Speaker: {document.speaker_id or '(none)'}")
    lines.append(_SEPARATOR)


def _append_playback(
    lines: list[str],
    document: DialogueDocument,
    codec: LineCodec | None,
) -> None:
    state = PlaybackState(document) if codec is None else PlaybackState(document, codec)

    if not document.lines:
        lines.append(f"  {state.current_text()}")
        return

    # One step per line at most; advance() always moves or finishes.
    for _ in range(len(document.lines) + 1):
        if state.finished:
            break
        line = document.lines[state.current_index]
        command = (
            f" [{line.command_type.value}]"
            if line.command_type is not CommandType.NONE
            else ""
        )
        suffix = ""
        if state.continued_on_next_screen:
            suffix += _CONTINUED_MARKER
        if state.is_current_line_a_question():
            suffix += _QUESTION_MARKER
        # Decoded and built lines keep their emotion on the line, not in the text.
        emotion = state.current_emotion if state.emotion_explicit else line.emotion
        row = (
            f"  [{state.current_index}] "
            f"(portrait {portrait_index(emotion)}, {emotion.value})"
            f"{command} {state.current_text()}"
        )
        lines.append(row.rstrip() + suffix)
        state.advance()


def _append_responses(lines: list[str], document: DialogueDocument) -> None:
    if not document.player_responses and not document.quick_responses:
        return

    lines.append(_THIN_SEPARATOR)
    if document.player_responses:
        lines.append("  Responses:")
        for number, option in enumerate(document.player_responses, start=1):
            lines.append(f"    {number}. {option.text} ({option.friendship_delta:+d})")
    if document.quick_responses:
        lines.append("  Quick responses:")
        for text in document.quick_responses:
            lines.append(f"    - {text}")
