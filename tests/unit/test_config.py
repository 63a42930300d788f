"""Tests for cp-dialogue configuration loading."""

from __future__ import annotations

import pytest

from cp_dialogue.config import ConfigError, Settings, load_settings


@pytest.mark.usefixtures("clean_env")
class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self) -> None:
        """A bare environment yields the defaults."""
        settings = load_settings()

        assert settings == Settings()
        assert settings.log_level == "INFO"
        assert settings.segment_delimiter == "#"

    def test_custom_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """LOG_LEVEL=DEBUG is honoured."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        assert load_settings().log_level == "DEBUG"

    def test_blank_log_level_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A whitespace-only LOG_LEVEL falls back to INFO."""
        monkeypatch.setenv("LOG_LEVEL", "   ")

        assert load_settings().log_level == "INFO"

    def test_custom_delimiter(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """DIALOGUE_SEGMENT_DELIMITER overrides the separator."""
        monkeypatch.setenv("DIALOGUE_SEGMENT_DELIMITER", "|")

        assert load_settings().segment_delimiter == "|"

    def test_empty_delimiter_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An empty DIALOGUE_SEGMENT_DELIMITER is treated as unset."""
        monkeypatch.setenv("DIALOGUE_SEGMENT_DELIMITER", "")

        assert load_settings().segment_delimiter == "#"

    def test_whitespace_delimiter_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A whitespace-only delimiter is rejected."""
        monkeypatch.setenv("DIALOGUE_SEGMENT_DELIMITER", "  ")

        with pytest.raises(ConfigError, match="DIALOGUE_SEGMENT_DELIMITER"):
            load_settings()


def test_settings_is_frozen() -> None:
    """Settings instances cannot be modified."""
    settings = Settings()

    with pytest.raises(AttributeError):
        settings.log_level = "DEBUG"  # type: ignore[misc]
