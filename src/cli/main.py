"""twitch-mark CLI (Typer).

The commands only wire collaborators together and turn `MarkerError` into a
red message plus exit code 1; the work happens in `core.services`.
"""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.config_store import SettingsConfigStore
from adapters.credential_store import JsonCredentialStore
from cli import auth, config, doctor
from core.config import load_settings
from core.errors import MarkerError
from core.logging_config import configure_logging
from core.services.marker_submitter import MarkerSubmitter

app = typer.Typer(no_args_is_help=True, help="Place markers in your live Twitch broadcast.")
app.add_typer(config.app, name="config")
app.add_typer(auth.app, name="auth")
app.add_typer(doctor.app, name="doctor")

_console = Console(highlight=False)
_err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def _configured_log_level() -> str:
    try:
        return load_settings().log_level.upper()
    except ValidationError:
        return "WARNING"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    configure_logging("DEBUG" if verbose else _configured_log_level())


def build_submitter() -> MarkerSubmitter:
    return MarkerSubmitter(SettingsConfigStore(), JsonCredentialStore(), console=_console)


# Every word is note text, including ones that start with "-".
@app.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
def mark(
    text: list[str] | None = typer.Argument(None, help="Optional note saved with the marker.", show_default=False),
) -> None:
    """Place a mark in the current live video and the resulting VOD.

    The mark is named after the current time to the second. Any text given is
    saved with it as a reminder for later editing (Twitch keeps mark names
    short: 140 characters in total).
    """

    try:
        build_submitter().submit(text or [])
    except MarkerError as exc:
        _err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def run() -> None:
    app()
