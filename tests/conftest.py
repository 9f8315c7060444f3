import os

import pytest

from core.domain.models import AppCredential
from fakes import FakeConfigStore, FakeCredentialStore


@pytest.fixture(autouse=True)
def user_config_dir(tmp_path, monkeypatch):
    """Point the user config dir at tmp and drop any real TWITCH_MARK_* vars."""

    for name in list(os.environ):
        if name.startswith("TWITCH_MARK_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
    return tmp_path / "config" / "twitch-mark"


@pytest.fixture
def config_store():
    return FakeConfigStore({"twitch.id": "123"})


@pytest.fixture
def credential_store():
    return FakeCredentialStore({"twitch": AppCredential(client_id="client-abc", access_token="tok-xyz")})
