"""CLI principal (Typer).

Comandos:
- `serve`: levanta la API HTTP (uvicorn).
- `transfer`: ejecuta un change-owner desde la terminal.
- `doctor`: diagnóstico de configuración y conectividad.
"""

from __future__ import annotations

import asyncio
import json

import typer
import uvicorn
from rich.console import Console

from cli import doctor
from cli.ui_components import build_result_panel, print_banner
from core.config import AppSettings
from core.domain.errors import ValidationError
from core.logging_setup import configure_logging
from core.services.input_validator import validate_payload
from core.services.response_translator import result_from_error
from core.services.transfer_pipeline import relay_change_owner

app = typer.Typer(no_args_is_help=True, help="Relay change-owner requests to the remote groups API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind host (default from OWNER_RELAY_HOST)."),
    port: int | None = typer.Option(None, help="Bind port (default from OWNER_RELAY_PORT)."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the banner."),
) -> None:
    """Start the HTTP API."""

    settings = AppSettings()
    configure_logging(settings.log_level)
    if not no_banner:
        print_banner(_console)
    uvicorn.run(
        "api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@app.command()
def transfer(
    group_id: str = typer.Option(..., "--group-id", help="Group whose owner changes."),
    target_id: str = typer.Option(..., "--target-id", help="User that becomes the owner."),
    credential: str = typer.Option(
        ...,
        envvar="OWNER_RELAY_CREDENTIAL",
        prompt="Session credential",
        hide_input=True,
        help="Session credential (prompted when not set).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON envelope."),
) -> None:
    """Transfer ownership of a group once, from the terminal."""

    settings = AppSettings()
    configure_logging(settings.log_level)

    payload = {"credential": credential, "sourceEntityId": group_id, "targetEntityId": target_id}
    try:
        request = validate_payload(payload, settings)
    except ValidationError as exc:
        result = result_from_error(exc)
    else:
        result = asyncio.run(relay_change_owner(request, settings=settings))

    if as_json:
        _console.print_json(json.dumps(result.to_payload(), default=str))
    else:
        _console.print(build_result_panel(result))

    if not result.success:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
