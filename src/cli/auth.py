"""`auth` commands: store app credentials for later lookup."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.credential_store import JsonCredentialStore
from core.domain.models import AppCredential
from core.errors import CredentialError

app = typer.Typer(no_args_is_help=True, help="Manage stored API credentials.")

_console = Console(highlight=False)


def redact(token: str) -> str:
    """Keep the last four characters only."""

    if len(token) <= 4:
        return "*" * len(token)
    return "*" * 8 + token[-4:]


@app.command()
def add(service: str = typer.Argument("twitch", help="Service name to store the credential under.")) -> None:
    """Interactive credential setup (client id + access token).

    Generate the token elsewhere (e.g. the Twitch CLI) with the
    `channel:manage:broadcast` scope, then paste it here.
    """

    client_id = typer.prompt("Client ID").strip()
    access_token = typer.prompt("Access token", hide_input=True, confirmation_prompt=False).strip()
    if access_token.lower().startswith("oauth:"):
        access_token = access_token[len("oauth:"):]

    if not client_id or not access_token:
        raise typer.BadParameter("client id and access token are required")

    store = JsonCredentialStore()
    try:
        path = store.save(service, AppCredential(client_id=client_id, access_token=access_token))
    except CredentialError as exc:
        _console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    _console.print(f"[green]Saved {service} credential to:[/green] {path}")


@app.command(name="list")
def list_services() -> None:
    """Show stored services with redacted tokens."""

    store = JsonCredentialStore()
    try:
        names = store.services()
    except CredentialError as exc:
        _console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if not names:
        _console.print("[yellow]No credentials stored.[/yellow] Run `twitch-mark auth add`.")
        return

    table = Table(title="Stored credentials")
    table.add_column("Service", style="bright_green", no_wrap=True)
    table.add_column("Client ID", style="white")
    table.add_column("Token", style="dim")
    table.add_column("Updated", style="dim")
    for name in names:
        meta, credential = store.lookup(name)
        updated = meta.updated_at.isoformat(timespec="seconds") if meta.updated_at else "-"
        table.add_row(name, credential.client_id, redact(credential.access_token), updated)
    _console.print(table)
