"""Configuration Store backed by `AppSettings`."""

from __future__ import annotations

from pydantic import ValidationError

from core.config import CONFIG_KEYS, AppSettings, load_settings
from core.errors import ConfigurationError


class SettingsConfigStore:
    """Dotted-key view over `AppSettings` (`twitch.id` -> `twitch_id`)."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> AppSettings:
        if self._settings is None:
            raise ConfigurationError("configuration not loaded")
        return self._settings

    def load(self) -> None:
        if self._settings is not None:
            return
        try:
            self._settings = load_settings()
        except ValidationError as exc:
            raise ConfigurationError(f"invalid configuration: {exc}") from exc
        except OSError as exc:
            raise ConfigurationError(f"cannot read configuration: {exc}") from exc

    def get(self, key: str) -> str:
        field_name = CONFIG_KEYS.get(key, key.replace(".", "_"))
        if field_name not in AppSettings.model_fields:
            return ""
        value = getattr(self.settings, field_name)
        if value is None:
            return ""
        return str(value).strip()
