"""Unit tests for the dialogue data models."""

from __future__ import annotations

from cp_dialogue.models import ValidationResult
from cp_dialogue.models.dialogue import (
    CommandType,
    DialogueDocument,
    DialogueLine,
    Emotion,
    PlayerResponseOption,
)


def _valid_document() -> DialogueDocument:
    document = DialogueDocument(id="d1", speaker_id="Abigail", name="greeting")
    document.add_line("Hi.")
    return document


class TestDialogueLine:
    """Tests for DialogueLine."""

    def test_defaults(self) -> None:
        line = DialogueLine()

        assert line.text == ""
        assert line.emotion is Emotion.NEUTRAL
        assert line.show_portrait is True
        assert line.face_farmer is True
        assert line.continued_on_next_screen is False
        assert line.command_type is CommandType.NONE
        assert line.command_args is None

    def test_none_text_becomes_empty(self) -> None:
        assert DialogueLine(text=None).text == ""

    def test_has_text(self) -> None:
        assert DialogueLine(text="hi").has_text is True
        assert DialogueLine(text="   ").has_text is False

    def test_accepts_camel_case(self) -> None:
        line = DialogueLine.model_validate({"text": "x", "commandType": "End"})

        assert line.command_type is CommandType.END


class TestPlayerResponseOption:
    """Tests for PlayerResponseOption."""

    def test_aliases(self) -> None:
        option = PlayerResponseOption.model_validate(
            {"responseText": "Sure", "friendshipChange": 25}
        )

        assert option.text == "Sure"
        assert option.friendship_delta == 25

    def test_none_text_becomes_empty(self) -> None:
        assert PlayerResponseOption(text=None).text == ""


class TestAuthoring:
    """Tests for the append-only add_* methods."""

    def test_add_line_returns_line(self) -> None:
        document = DialogueDocument(id="d1")

        line = document.add_line("Boo!", Emotion.ANGRY, CommandType.CHANCE, "0.5")

        assert document.lines == [line]
        assert line.command_args == "0.5"

    def test_add_line_none_text(self) -> None:
        """None is stored as an empty string and nothing is rejected."""
        document = DialogueDocument(id="d1")

        document.add_line(None)

        assert document.lines[0].text == ""

    def test_add_player_response(self) -> None:
        document = DialogueDocument(id="d1")

        option = document.add_player_response("Yes", 10, "yes_key", "extra", "opt-1")

        assert document.response_options() == [option]
        assert option.response_key == "yes_key"
        assert option.extra_argument == "extra"
        assert option.id == "opt-1"

    def test_add_quick_response_sets_flag(self) -> None:
        document = DialogueDocument(id="d1")

        document.add_quick_response("Nice")
        document.add_quick_response(None)

        assert document.quick_responses == ["Nice", ""]
        assert document.is_quick_response is True


class TestValidate:
    """Tests for DialogueDocument.validate."""

    def test_valid(self) -> None:
        result = _valid_document().validate()

        assert isinstance(result, ValidationResult)
        assert result.is_valid is True
        assert result.errors == []
        assert bool(result) is True

    def test_collects_every_error(self) -> None:
        result = DialogueDocument().validate()

        assert result.is_valid is False
        assert result.errors == [
            "Dialogue id must not be empty",
            "Speaker id must not be empty",
            "Dialogue name must not be empty",
            "Dialogue must contain at least one line",
        ]

    def test_blank_line_without_command(self) -> None:
        document = _valid_document()
        document.add_line("   ")

        assert document.validate().errors == ["Line 2 has no text and no command"]

    def test_blank_line_with_command_is_fine(self) -> None:
        document = _valid_document()
        document.add_line("", command_type=CommandType.END)

        assert document.validate().is_valid is True

    def test_whitespace_ids_rejected(self) -> None:
        document = _valid_document()
        document.speaker_id = "  "

        assert document.validate().errors == ["Speaker id must not be empty"]

    def test_instance_validate_is_structural_check(self) -> None:
        """validate() on a document is the structural check, not pydantic's."""
        assert isinstance(_valid_document().validate(), ValidationResult)

    def test_model_validate_still_parses(self) -> None:
        document = DialogueDocument.model_validate(
            {"id": "d9", "speakerId": "Leah", "name": "n", "lines": [{"text": "Hey."}]}
        )

        assert document.speaker_id == "Leah"
        assert document.lines[0].text == "Hey."
        assert document.validate().is_valid is True


class TestClone:
    """Tests for DialogueDocument.clone."""

    def test_clone_is_deep(self) -> None:
        original = _valid_document()
        original.add_player_response("Yes", 10)

        copy = original.clone()
        copy.lines[0].text = "changed"
        copy.add_line("extra")
        copy.player_responses[0].text = "No"

        assert original.lines[0].text == "Hi."
        assert len(original.lines) == 1
        assert original.player_responses[0].text == "Yes"

    def test_clone_keeps_identity_and_touches_updated_at(self) -> None:
        original = _valid_document()

        copy = original.clone()

        assert copy.id == original.id
        assert copy.created_at == original.created_at
        assert copy.updated_at >= original.updated_at
