"""Tests for environment configuration."""

from __future__ import annotations

import pytest

from pushbullet_async.config import get_config, get_log_level, validate_config


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's .env file out of these tests."""
    monkeypatch.setattr("pushbullet_async.config.load_dotenv", lambda: False)


class TestGetConfig:
    """Tests for get_config."""

    def test_token_is_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a missing token is reported by name."""
        monkeypatch.delenv("PUSHBULLET_TOKEN", raising=False)

        with pytest.raises(ValueError, match="PUSHBULLET_TOKEN"):
            get_config()

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default log level."""
        monkeypatch.setenv("PUSHBULLET_TOKEN", "o.abc")
        monkeypatch.delenv("PUSHBULLET_LOG_LEVEL", raising=False)

        config = get_config()

        assert config == {"PUSHBULLET_TOKEN": "o.abc", "PUSHBULLET_LOG_LEVEL": "WARNING"}

    def test_log_level_is_upper_cased(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the log level may be given in any case."""
        monkeypatch.setenv("PUSHBULLET_LOG_LEVEL", "debug")

        assert get_log_level() == "DEBUG"


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a present token validates."""
        monkeypatch.setenv("PUSHBULLET_TOKEN", "o.abc")

        assert validate_config()

    def test_invalid(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a missing token fails validation."""
        monkeypatch.setenv("PUSHBULLET_TOKEN", "")

        assert not validate_config()
