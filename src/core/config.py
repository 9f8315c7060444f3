"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (HTTP, stores) read config the same way.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "twitch-mark"
ENV_PREFIX = "TWITCH_MARK_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_user_config_dir() -> Path:
    """`%APPDATA%`, `~/Library/Application Support` or `$XDG_CONFIG_HOME` (default `~/.config`), plus the app name."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def read_user_env_vars() -> dict[str, str]:
    """Return the variables stored in the user's global .env (empty if absent)."""

    env_path = get_user_env_file()
    if not env_path.exists():
        return {}
    return _parse_env_lines(env_path.read_text(encoding="utf-8"))


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Write/update variables in the user's global .env."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing = read_user_env_vars()
    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# twitch-mark user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Sources, in order of precedence: environment variables, the project
    `.env`, then the user's global `.env`.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    twitch_id: str | None = Field(
        default=None,
        description="Numeric Twitch user id of the broadcaster (config key `twitch.id`).",
    )
    user_agent: str = Field(
        default="twitch-mark/0.1",
        min_length=1,
        description="User-Agent sent with API requests.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Root log level (DEBUG, INFO, WARNING, ...).",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return level


def load_settings() -> AppSettings:
    """Build settings, resolving the user env file now rather than at import."""

    return AppSettings(_env_file=(".env", str(get_user_env_file())))


# Config keys exposed to operators, mapped to their AppSettings field.
CONFIG_KEYS: dict[str, str] = {
    "twitch.id": "twitch_id",
    "user.agent": "user_agent",
    "log.level": "log_level",
}


def env_var_for_key(key: str) -> str:
    """`twitch.id` -> `TWITCH_MARK_TWITCH_ID`."""

    try:
        field_name = CONFIG_KEYS[key]
    except KeyError:
        raise KeyError(f"unknown config key: {key}") from None
    return ENV_PREFIX + field_name.upper()
