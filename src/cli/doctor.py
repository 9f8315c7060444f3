"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.config_store import SettingsConfigStore
from adapters.credential_store import JsonCredentialStore
from adapters.http_client import build_async_client
from cli.auth import redact
from core.config import get_user_env_file
from core.errors import ConfigurationError, CredentialError
from core.services.marker_submitter import TWITCH_ID_KEY, TWITCH_SERVICE

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

API_HOST_URL = "https://api.twitch.tv/"


async def _check_http(url: str) -> tuple[bool, str]:
    try:
        async with build_async_client(timeout=10.0) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or type(exc).__name__


def _check_config() -> tuple[bool, str]:
    store = SettingsConfigStore()
    try:
        store.load()
    except ConfigurationError as exc:
        return False, str(exc)
    twitch_id = store.get(TWITCH_ID_KEY)
    if not twitch_id:
        return False, f"not set (run `twitch-mark config set {TWITCH_ID_KEY} <id>`)"
    return True, twitch_id


def _check_credential() -> tuple[bool, str]:
    store = JsonCredentialStore()
    try:
        meta, credential = store.lookup(TWITCH_SERVICE)
    except CredentialError as exc:
        return False, str(exc)
    return True, f"{meta.source} (token {redact(credential.access_token)})"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    table = Table(title="twitch-mark doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("User config", "OK", str(get_user_env_file()))

    ok_config, detail_config = _check_config()
    table.add_row(TWITCH_ID_KEY, "OK" if ok_config else "FAIL", escape(detail_config))

    ok_cred, detail_cred = _check_credential()
    table.add_row(f"{TWITCH_SERVICE} credential", "OK" if ok_cred else "FAIL", escape(detail_cred))

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(API_HOST_URL))
    table.add_row("API connectivity", "OK" if ok_http else "FAIL", escape(detail_http))

    _console.print(table)

    if not (ok_config and ok_cred):
        _console.print(
            "\n[yellow]Note:[/yellow] `twitch-mark mark` needs both a twitch.id and a stored twitch credential."
        )
        raise typer.Exit(code=1)
