"""`config` commands: read and write the user's global .env."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.config_store import SettingsConfigStore
from core.config import CONFIG_KEYS, env_var_for_key, write_user_env_vars
from core.errors import ConfigurationError

app = typer.Typer(no_args_is_help=True, help="Show and change configuration values.")

_console = Console(highlight=False)


def _env_var(key: str) -> str:
    try:
        return env_var_for_key(key)
    except KeyError:
        known = ", ".join(sorted(CONFIG_KEYS))
        raise typer.BadParameter(f"unknown key {key!r} (known: {known})") from None


def _load_store() -> SettingsConfigStore:
    store = SettingsConfigStore()
    try:
        store.load()
    except ConfigurationError as exc:
        _console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    return store


@app.command(name="set")
def set_value(key: str, value: str) -> None:
    """Store KEY=VALUE in the user config (e.g. `config set twitch.id 12345`)."""

    env_path = write_user_env_vars({_env_var(key): value.strip()})
    _console.print(f"[green]Saved {key} to:[/green] {env_path}")


@app.command(name="get")
def get_value(key: str) -> None:
    """Print the effective value of KEY (empty when unset)."""

    _env_var(key)
    _console.print(_load_store().get(key), markup=False)


@app.command(name="list")
def list_values() -> None:
    """Show every known key with its effective value."""

    store = _load_store()
    table = Table(title="twitch-mark config")
    table.add_column("Key", style="bright_green", no_wrap=True)
    table.add_column("Env var", style="dim")
    table.add_column("Value", style="white")
    for key in sorted(CONFIG_KEYS):
        table.add_row(key, env_var_for_key(key), store.get(key) or "-")
    _console.print(table)
