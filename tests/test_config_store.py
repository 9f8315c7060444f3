import pytest

from adapters.config_store import SettingsConfigStore
from core.config import env_var_for_key, get_user_env_file, read_user_env_vars, write_user_env_vars
from core.errors import ConfigurationError


def test_get_before_load_raises():
    with pytest.raises(ConfigurationError, match="not loaded"):
        SettingsConfigStore().get("twitch.id")


def test_twitch_id_from_environment(monkeypatch):
    monkeypatch.setenv("TWITCH_MARK_TWITCH_ID", "42")
    store = SettingsConfigStore()
    store.load()
    assert store.get("twitch.id") == "42"


def test_twitch_id_from_user_env_file(user_config_dir):
    path = write_user_env_vars({"TWITCH_MARK_TWITCH_ID": "77"})
    assert path == user_config_dir / ".env"

    store = SettingsConfigStore()
    store.load()
    assert store.get("twitch.id") == "77"


def test_environment_overrides_user_env_file(monkeypatch):
    write_user_env_vars({"TWITCH_MARK_TWITCH_ID": "77"})
    monkeypatch.setenv("TWITCH_MARK_TWITCH_ID", "88")
    store = SettingsConfigStore()
    store.load()
    assert store.get("twitch.id") == "88"


def test_unset_and_unknown_keys_are_empty():
    store = SettingsConfigStore()
    store.load()
    assert store.get("twitch.id") == ""
    assert store.get("no.such.key") == ""
    assert store.get("model_config") == ""


def test_invalid_settings_raise_configuration_error(monkeypatch):
    monkeypatch.setenv("TWITCH_MARK_LOG_LEVEL", "loud")
    with pytest.raises(ConfigurationError, match="invalid configuration"):
        SettingsConfigStore().load()


def test_write_user_env_vars_keeps_existing_keys():
    write_user_env_vars({"TWITCH_MARK_TWITCH_ID": "1"})
    write_user_env_vars({"TWITCH_MARK_LOG_LEVEL": "DEBUG", "TWITCH_MARK_USER_AGENT": None})

    assert read_user_env_vars() == {"TWITCH_MARK_TWITCH_ID": "1", "TWITCH_MARK_LOG_LEVEL": "DEBUG"}
    assert get_user_env_file().read_text(encoding="utf-8").startswith("# twitch-mark user config")


def test_env_var_for_key():
    assert env_var_for_key("twitch.id") == "TWITCH_MARK_TWITCH_ID"
    with pytest.raises(KeyError):
        env_var_for_key("twitch.secret")
