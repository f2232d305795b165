"""Tests for discord_scraper.config.settings."""

from __future__ import annotations

import json

import pytest

from discord_scraper.config.settings import (
    BASE_URL,
    DEFAULT_DB_PATH,
    DEFAULT_USER_AGENT,
    ScraperSettings,
    load_settings,
)
from discord_scraper.core.errors import ConfigError


class TestDefaults:
    def test_defaults(self):
        settings = ScraperSettings()

        assert settings.auth_token is None
        assert settings.db_path == DEFAULT_DB_PATH == "./data/messages.db"
        assert settings.user_agent == DEFAULT_USER_AGENT
        assert settings.base_url == BASE_URL
        assert settings.retry_pad == 0.1
        assert settings.max_rate_limit_retries is None
        assert settings.page_size == 100


class TestSources:
    def test_token_from_environment(self, monkeypatch):
        monkeypatch.setenv("DISCORD_AUTH_TOKEN", "env-token")

        assert ScraperSettings().auth_token == "env-token"

    def test_override_wins_over_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DISCORD_AUTH_TOKEN", "env-token")

        settings = load_settings(tmp_path / "missing.json", auth_token="flag-token")

        assert settings.auth_token == "flag-token"

    def test_none_override_falls_back_to_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DISCORD_AUTH_TOKEN", "env-token")

        settings = load_settings(tmp_path / "missing.json", auth_token=None, db_path=None)

        assert settings.auth_token == "env-token"
        assert settings.db_path == DEFAULT_DB_PATH

    def test_config_file_values(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps({"auth_token": "file-token", "max_rate_limit_retries": 5, "unknown": 1}),
            encoding="utf-8",
        )

        settings = ScraperSettings.from_json(path, db_path="out.db")

        assert settings.auth_token == "file-token"
        assert settings.max_rate_limit_retries == 5
        assert settings.db_path == "out.db"

    def test_invalid_json_raises_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid config file"):
            ScraperSettings.from_json(path)

    def test_non_object_json_raises_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigError):
            ScraperSettings.from_json(path)

    def test_out_of_range_value_raises_config_error(self, tmp_path):
        with pytest.raises(ConfigError, match="Invalid configuration"):
            ScraperSettings.from_json(tmp_path / "missing.json", page_size=0)


class TestRequireToken:
    def test_returns_token(self):
        assert ScraperSettings(auth_token="abc").require_token() == "abc"

    def test_missing_token_raises(self):
        with pytest.raises(ConfigError, match="No authorization token found!"):
            ScraperSettings().require_token()

    def test_blank_token_counts_as_missing(self):
        settings = ScraperSettings(auth_token="   ")

        assert settings.auth_token is None
        with pytest.raises(ConfigError):
            settings.require_token()
