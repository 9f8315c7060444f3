import json

import httpx
import pytest
from typer.testing import CliRunner

from adapters.config_store import SettingsConfigStore
from adapters.credential_store import JsonCredentialStore
from cli import main as cli_main
from core.domain.models import AppCredential
from core.services.marker_submitter import MarkerSubmitter

runner = CliRunner()


@pytest.fixture
def requests_sent(monkeypatch):
    sent = []

    def handler(request):
        sent.append(request)
        return httpx.Response(204)

    def build_submitter():
        return MarkerSubmitter(
            SettingsConfigStore(),
            JsonCredentialStore(),
            client_factory=lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

    monkeypatch.setattr(cli_main, "build_submitter", build_submitter)
    return sent


def test_mark_posts_and_prints_status(monkeypatch, requests_sent):
    monkeypatch.setenv("TWITCH_MARK_TWITCH_ID", "999")
    JsonCredentialStore().save("twitch", AppCredential(client_id="cid", access_token="tok"))

    result = runner.invoke(cli_main.app, ["mark", "great", "play"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "204"
    [request] = requests_sent
    body = json.loads(request.content)
    assert body["user_id"] == "999"
    assert body["description"].endswith("\ngreat play")


def test_mark_accepts_note_starting_with_dash(monkeypatch, requests_sent):
    monkeypatch.setenv("TWITCH_MARK_TWITCH_ID", "999")
    JsonCredentialStore().save("twitch", AppCredential(client_id="cid", access_token="tok"))

    result = runner.invoke(cli_main.app, ["mark", "-5", "hp", "lost"])

    assert result.exit_code == 0, result.output
    [request] = requests_sent
    assert json.loads(request.content)["description"].endswith("\n-5 hp lost")


def test_cli_submitter_uses_ten_second_deadline():
    assert cli_main.build_submitter()._deadline_seconds == 10.0


def test_mark_without_twitch_id_fails(requests_sent):
    result = runner.invoke(cli_main.app, ["mark"])

    assert result.exit_code == 1
    assert "twitch.id not found" in result.output
    assert requests_sent == []


def test_mark_without_credential_fails(monkeypatch, requests_sent):
    monkeypatch.setenv("TWITCH_MARK_TWITCH_ID", "999")

    result = runner.invoke(cli_main.app, ["mark", "note"])

    assert result.exit_code == 1
    assert "twitch-mark auth add" in result.output
    assert requests_sent == []


def test_mark_rejects_long_note(requests_sent):
    result = runner.invoke(cli_main.app, ["mark", "z" * 130])

    assert result.exit_code == 1
    assert "at most 120 characters" in result.output
    assert requests_sent == []


def test_config_set_then_get(user_config_dir):
    result = runner.invoke(cli_main.app, ["config", "set", "twitch.id", "555"])
    assert result.exit_code == 0, result.output
    assert "TWITCH_MARK_TWITCH_ID=555" in (user_config_dir / ".env").read_text(encoding="utf-8")

    result = runner.invoke(cli_main.app, ["config", "get", "twitch.id"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "555"


def test_config_set_unknown_key_is_usage_error():
    result = runner.invoke(cli_main.app, ["config", "set", "twitch.secret", "x"])
    assert result.exit_code == 2


def test_auth_add_stores_credential():
    result = runner.invoke(cli_main.app, ["auth", "add"], input="cid\noauth:secret-token\n")

    assert result.exit_code == 0, result.output
    _, credential = JsonCredentialStore().lookup("twitch")
    assert credential.client_id == "cid"
    assert credential.access_token == "secret-token"


def test_auth_list_redacts_tokens():
    JsonCredentialStore().save("twitch", AppCredential(client_id="cid", access_token="secret-token"))

    result = runner.invoke(cli_main.app, ["auth", "list"])

    assert result.exit_code == 0, result.output
    assert "twitch" in result.output
    assert "secret-token" not in result.output


def test_doctor_reports_missing_setup(monkeypatch):
    async def offline(url):
        return False, "offline"

    monkeypatch.setattr("cli.doctor._check_http", offline)

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_doctor_passes_when_configured(monkeypatch):
    async def reachable(url):
        return True, "HTTP 404"

    monkeypatch.setattr("cli.doctor._check_http", reachable)
    monkeypatch.setenv("TWITCH_MARK_TWITCH_ID", "999")
    JsonCredentialStore().save("twitch", AppCredential(client_id="cid", access_token="secret-token"))

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "FAIL" not in result.output
    assert "secret-token" not in result.output
