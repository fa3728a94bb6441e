"""
Tests for the settings module.
"""

import pytest
from dotenv import load_dotenv

from settings import Settings


class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self, clean_env):
        settings = Settings.from_env(dotenv=False)
        assert settings == Settings()
        assert settings.log_level == "WARNING"

    def test_reads_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("LOGANALYSIS_DPI", "150")
        monkeypatch.setenv("LOGANALYSIS_DOT_SIZE", "3.5")
        monkeypatch.setenv("LOGANALYSIS_LOG_LEVEL", "debug")

        settings = Settings.from_env(dotenv=False)

        assert settings.dpi == 150.0
        assert settings.dot_size == 3.5
        assert settings.log_level == "DEBUG"

    def test_reads_dotenv_file(self, clean_env, monkeypatch):
        env_file = clean_env / ".env"
        env_file.write_text("LOGANALYSIS_WIDTH=12\n")
        # registered so the value is removed again after the test
        monkeypatch.setenv("LOGANALYSIS_WIDTH", "")
        monkeypatch.setattr(
            "settings.load_dotenv",
            lambda: load_dotenv(env_file, override=True),
        )

        assert Settings.from_env().width == 12.0

    @pytest.mark.parametrize("value", ["wide", "0", "-3"])
    def test_rejects_bad_numbers(self, clean_env, monkeypatch, value):
        monkeypatch.setenv("LOGANALYSIS_WIDTH", value)
        with pytest.raises(ValueError, match="LOGANALYSIS_WIDTH"):
            Settings.from_env(dotenv=False)

    def test_rejects_unknown_log_level(self, clean_env, monkeypatch):
        monkeypatch.setenv("LOGANALYSIS_LOG_LEVEL", "chatty")
        with pytest.raises(ValueError, match="LOGANALYSIS_LOG_LEVEL"):
            Settings.from_env(dotenv=False)
