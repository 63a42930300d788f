"""Unit tests for the fluent dialogue builder."""

from __future__ import annotations

import pytest

from cp_dialogue.builder import DialogueBuilder, format_invariant
from cp_dialogue.models.dialogue import (
    CommandType,
    ConditionType,
    DialogueCondition,
    Emotion,
)
from cp_dialogue.playback import PlaybackState
from cp_dialogue.registry import DialogueRegistry


@pytest.fixture()
def builder(id_source) -> DialogueBuilder:
    return DialogueBuilder("Abigail", "rainy_day", id_source=id_source)


class TestFormatInvariant:
    """Tests for format_invariant."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1.0, "1"),
            (0.0, "0"),
            (0.25, "0.25"),
            (0.1, "0.1"),
            (1, "1"),
            (-0.5, "-0.5"),
            (0.0001, "0.0001"),
            (1e14, "100000000000000"),
        ],
    )
    def test_values(self, value: float, expected: str) -> None:
        assert format_invariant(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1e-05, "1E-05"),
            (1.5e-07, "1.5E-07"),
            (1e15, "1E+15"),
            (1e20, "1E+20"),
            (-2.5e-10, "-2.5E-10"),
        ],
    )
    def test_exponent_notation(self, value: float, expected: str) -> None:
        """Very small and very large values use a signed two-digit exponent."""
        assert format_invariant(value) == expected

    def test_non_finite(self) -> None:
        assert format_invariant(float("nan")) == "NaN"
        assert format_invariant(float("inf")) == "∞"
        assert format_invariant(float("-inf")) == "-∞"


class TestLines:
    """Tests for the add_* line methods."""

    def test_identity(self, builder: DialogueBuilder) -> None:
        document = builder.build()

        assert document.id == "dlg-1"
        assert document.speaker_id == "Abigail"
        assert document.name == "rainy_day"

    def test_plain_line(self, builder: DialogueBuilder) -> None:
        document = builder.add_line("Oh, hi @.", Emotion.HAPPY).build()

        assert document.lines[0].text == "Oh, hi @."
        assert document.lines[0].emotion is Emotion.HAPPY
        assert document.lines[0].command_type is CommandType.NONE

    def test_conditional_line(self, builder: DialogueBuilder) -> None:
        """The payload carries the condition key and both branches."""
        condition = DialogueCondition("bus", "Bus repaired", ConditionType.BUS)

        line = builder.add_conditional_line(condition, "Let's go!", "Still broken.").build().lines[0]

        assert line.command_type is CommandType.CONDITIONAL
        assert line.command_args == "bus Let's go!|Still broken."
        assert line.text == ""

    def test_chance_line(self, builder: DialogueBuilder) -> None:
        line = builder.add_chance_line("Lucky you.", 0.25).build().lines[0]

        assert line.command_type is CommandType.CHANCE
        assert line.command_args == "0.25"
        assert line.text == "Lucky you."

    def test_event_line(self, builder: DialogueBuilder) -> None:
        line = builder.add_event_line("4").build().lines[0]

        assert line.command_type is CommandType.EVENT
        assert line.command_args == "4"
        assert line.text == ""

    def test_question_marks_document_interactive(self, builder: DialogueBuilder) -> None:
        document = builder.add_question_line("q_cave", "Do you like caves?").build()

        assert document.is_interactive is True
        assert document.lines[0].command_type is CommandType.QUESTION
        assert document.lines[0].command_args == "q_cave"
        assert document.lines[0].text == "Do you like caves?"

    def test_break_and_end(self, builder: DialogueBuilder) -> None:
        document = builder.add_break().add_end().build()

        assert [line.command_type for line in document.lines] == [
            CommandType.BREAK,
            CommandType.END,
        ]
        assert all(line.command_args is None for line in document.lines)

    def test_order_is_preserved(self, builder: DialogueBuilder) -> None:
        document = builder.add_line("one").add_line("two").add_line("three").build()

        assert [line.text for line in document.lines] == ["one", "two", "three"]


class TestResponsesAndProperties:
    """Tests for responses and document-wide flags."""

    def test_player_responses(self, builder: DialogueBuilder) -> None:
        document = (
            builder.add_player_response("Sure!", 10, response_key="yes")
            .add_player_response("No way.", -5)
            .build()
        )

        assert [(r.text, r.friendship_delta) for r in document.player_responses] == [
            ("Sure!", 10),
            ("No way.", -5),
        ]
        assert document.player_responses[0].response_key == "yes"

    def test_quick_response(self, builder: DialogueBuilder) -> None:
        document = builder.add_quick_response("Thanks").build()

        assert document.quick_responses == ["Thanks"]
        assert document.is_quick_response is True

    def test_set_properties(self, builder: DialogueBuilder) -> None:
        document = builder.set_properties(
            show_portrait=False, face_farmer=False, remove_on_next_move=True
        ).build()

        assert document.show_portrait is False
        assert document.dont_face_farmer is True
        assert document.remove_on_next_move is True

    def test_set_properties_defaults(self, builder: DialogueBuilder) -> None:
        document = builder.set_properties().build()

        assert document.show_portrait is True
        assert document.dont_face_farmer is False
        assert document.remove_on_next_move is False


class TestOutput:
    """Tests for build, build_and_add and to_raw."""

    def test_build_returns_independent_copy(self, builder: DialogueBuilder) -> None:
        """Later builder calls do not reach an already-built document."""
        first = builder.add_line("one").build()
        builder.add_line("two").add_player_response("ok")

        assert len(first.lines) == 1
        assert first.player_responses == []

    def test_build_twice_gives_distinct_objects(self, builder: DialogueBuilder) -> None:
        first = builder.add_line("one").build()
        second = builder.build()

        first.lines[0].text = "changed"

        assert second.lines[0].text == "one"
        assert first.id == second.id

    def test_build_and_add(self, builder: DialogueBuilder) -> None:
        registry = DialogueRegistry()

        document = builder.add_line("hi").build_and_add(registry)

        assert registry.get(document.id) is document
        assert len(registry) == 1

    def test_to_raw(self, builder: DialogueBuilder) -> None:
        raw = (
            builder.add_line("Hi", Emotion.HAPPY)
            .add_chance_line("Maybe", 0.25)
            .add_end()
            .to_raw()
        )

        assert raw == "$hHi#$c0.25Maybe#$e"

    def test_default_id_source(self) -> None:
        """Without an id source a random non-empty id is assigned."""
        first = DialogueBuilder("Abigail", "a").build()
        second = DialogueBuilder("Abigail", "b").build()

        assert first.id
        assert first.id != second.id


def test_question_line_is_question_only_at_the_end(id_source) -> None:
    """A built question is reported as such only on the last line."""
    document = (
        DialogueBuilder("Abigail", "cave", id_source=id_source)
        .add_line("Hey.")
        .add_question_line("cave", "Want to explore?")
        .build()
    )
    state = PlaybackState(document)

    assert document.is_interactive is True
    assert state.is_current_line_a_question() is False
    state.advance()
    assert state.is_current_line_a_question() is True
