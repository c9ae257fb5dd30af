"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from cli.ui_components import build_endpoints_table
from core.config import AppSettings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    # Any HTTP status means the host is reachable.
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, type(exc).__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show the effective configuration."""

    settings = AppSettings()

    table = Table(title="Group-Owner-Relay Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Groups API", "OK", settings.groups_base_url)
    table.add_row("Auth API", "OK", settings.auth_base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:.1f}s")
    table.add_row("Token pause", "OK", f"{settings.token_retry_pause_seconds:.2f}s")
    table.add_row("Min credential length", "OK", str(settings.credential_min_length))
    if settings.placeholder_entity_ids:
        placeholders = ", ".join(str(i) for i in sorted(settings.placeholder_entity_ids))
        table.add_row("Placeholder ids", "OK", placeholders)
    else:
        table.add_row("Placeholder ids", "OPTIONAL", "None configured")

    # Connectivity (best-effort)
    for label, url in (("Groups connectivity", settings.groups_base_url), ("Auth connectivity", settings.auth_base_url)):
        ok, detail = asyncio.run(_check_http(url, settings))
        table.add_row(label, "OK" if ok else "FAIL", detail)

    _console.print(table)
    _console.print(build_endpoints_table(settings.token_endpoints))
