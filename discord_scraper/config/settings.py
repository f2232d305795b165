"""Configuration management using pydantic-settings.

Provides validated configuration with support for:
- Environment variables (DISCORD_AUTH_TOKEN, DISCORD_DB_PATH, ...)
- Optional JSON config file (config.json)
- Explicit overrides from the command line
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from discord_scraper.core.errors import ConfigError


# Discord API base URL
BASE_URL = "https://discord.com/api/v10"

DEFAULT_DB_PATH = "./data/messages.db"
DEFAULT_USER_AGENT = "MessageScraperBot (1.0.0)"


class ScraperSettings(BaseSettings):
    """Scraper settings with validation.

    Precedence, highest first: explicit overrides, config file values,
    environment variables, defaults.
    """

    auth_token: str | None = None
    db_path: str = DEFAULT_DB_PATH
    user_agent: str = DEFAULT_USER_AGENT
    base_url: str = BASE_URL

    # Rate limiting
    retry_pad: float = Field(default=0.1, ge=0.0)
    max_rate_limit_retries: int | None = Field(default=None, ge=0)

    # Pagination / transport
    page_size: int = Field(default=100, ge=1, le=100)
    timeout: float = Field(default=30.0, gt=0.0)

    model_config = SettingsConfigDict(
        env_prefix="DISCORD_",
        extra="ignore",
    )

    @field_validator("auth_token", mode="before")
    @classmethod
    def blank_token_is_missing(cls, v: Any) -> Any:
        """Treat an empty credential the same as an absent one."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_json(
        cls, path: str | Path = "config.json", **overrides: Any
    ) -> "ScraperSettings":
        """Load settings from an optional JSON config file.

        Args:
            path: Path to the JSON config file (skipped if it does not exist)
            **overrides: Values that win over the file; None values are ignored

        Returns:
            ScraperSettings instance with validated configuration
        """
        data: dict[str, Any] = {}
        config_path = Path(path)
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                try:
                    data = json.load(f)
                except json.JSONDecodeError as e:
                    raise ConfigError(f"Invalid config file {config_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Config file {config_path} must hold a JSON object")

        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def require_token(self) -> str:
        """Return the authorization token or raise ConfigError."""
        if not self.auth_token:
            raise ConfigError("No authorization token found!")
        return self.auth_token


def load_settings(
    config_path: str | Path = "config.json", **overrides: Any
) -> ScraperSettings:
    """Load settings from file, environment and overrides."""
    return ScraperSettings.from_json(config_path, **overrides)
