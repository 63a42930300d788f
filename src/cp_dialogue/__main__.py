"""Entry point for ``python -m cp_dialogue``.

Provides a small CLI around the codec for authors working in a terminal.
Uses stdlib :mod:`argparse` for argument parsing.

Subcommands:
    decode   -- Decode a raw dialogue string and print the document JSON.
    encode   -- Read document JSON from stdin and print the raw string.
    preview  -- Decode a raw string (or ``-`` for JSON on stdin) and print
                a simulated playback.
    validate -- Read document JSON from stdin and report structural errors.

Exit codes:
    0 -- Success.
    1 -- Invalid input or invalid document.
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import sys

from cp_dialogue.codec import LineCodec
from cp_dialogue.config import ConfigError, Settings, load_settings
from cp_dialogue.exceptions import DocumentSerializationError
from cp_dialogue.ids import UuidIdSource
from cp_dialogue.log import get_logger, setup_logging
from cp_dialogue.models.dialogue import DialogueDocument
from cp_dialogue.preview import print_playback
from cp_dialogue.serializer import dump_document, load_document
from cp_dialogue.vocabulary import default_vocabulary

logger = get_logger(__name__)

_STDIN_MARKER = "-"


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cp-dialogue",
        description="Encode, decode and preview Content Patcher dialogue strings.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- "decode" -----------------------------------------------------
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode a raw dialogue string into document JSON.",
    )
    _add_raw_arguments(decode_parser)

    # --- "encode" -----------------------------------------------------
    subparsers.add_parser(
        "encode",
        help="Encode document JSON read from stdin into a raw string.",
    )

    # --- "preview" ----------------------------------------------------
    preview_parser = subparsers.add_parser(
        "preview",
        help="Print a simulated playback of a dialogue.",
    )
    _add_raw_arguments(preview_parser, speaker_required=False)

    # --- "validate" ---------------------------------------------------
    subparsers.add_parser(
        "validate",
        help="Validate document JSON read from stdin.",
    )

    return parser


def _add_raw_arguments(
    parser: argparse.ArgumentParser,
    speaker_required: bool = True,
) -> None:
    parser.add_argument(
        "raw",
        type=str,
        help=f"Raw dialogue string ('{_STDIN_MARKER}' reads document JSON from stdin "
        "for preview).",
    )
    parser.add_argument(
        "--speaker",
        type=str,
        required=speaker_required,
        default="",
        help="Internal name of the speaking NPC.",
    )
    parser.add_argument("--name", type=str, default=None, help="Dialogue name.")
    parser.add_argument(
        "--translation-key",
        type=str,
        default=None,
        help="Asset key the dialogue is stored under.",
    )


def _read_document_from_stdin() -> DialogueDocument:
    return load_document(sys.stdin.read())


def _decode(args: argparse.Namespace, codec: LineCodec) -> DialogueDocument:
    return codec.decode_dialogue(
        args.raw,
        speaker_id=args.speaker,
        id_source=UuidIdSource(),
        translation_key=args.translation_key,
        name=args.name,
    )


def _handle_decode(args: argparse.Namespace, codec: LineCodec) -> int:
    document = _decode(args, codec)
    sys.stdout.write(dump_document(document) + "\n")
    return 0


def _handle_encode(codec: LineCodec) -> int:
    document = _read_document_from_stdin()
    sys.stdout.write(codec.encode_dialogue(document) + "\n")
    return 0


def _handle_preview(args: argparse.Namespace, codec: LineCodec) -> int:
    if args.raw == _STDIN_MARKER:
        document = _read_document_from_stdin()
    else:
        document = _decode(args, codec)
    print_playback(document, codec)
    return 0


def _handle_validate() -> int:
    document = _read_document_from_stdin()
    result = document.validate()
    if result.is_valid:
        sys.stdout.write(f"{document.id}: OK\n")
        return 0

    logger.warning("Dialogue %s failed validation (%d errors)", document.id, len(result.errors))
    for error in result.errors:
        sys.stdout.write(f"{document.id}: {error}\n")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Run the cp-dialogue CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    setup_logging("DEBUG" if args.verbose else settings.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    codec = _build_codec(settings)

    try:
        if args.command == "decode":
            return _handle_decode(args, codec)
        if args.command == "encode":
            return _handle_encode(codec)
        if args.command == "preview":
            return _handle_preview(args, codec)
        return _handle_validate()
    except DocumentSerializationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _build_codec(settings: Settings) -> LineCodec:
    return LineCodec(default_vocabulary(settings.segment_delimiter))


if __name__ == "__main__":
    raise SystemExit(main())
