"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import EndpointDescriptor, TransferResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("GROUP-OWNER-RELAY", style="bold cyan")
    subtitle = Text("Token anti-forgery • Change owner", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_endpoints_table(endpoints: Iterable[EndpointDescriptor]) -> Table:
    """Tabla con la cadena de endpoints del token, en orden de prueba."""

    table = Table(title="Token endpoint chain")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Method", style="white")
    table.add_column("URL", style="magenta")
    table.add_column("Omits", style="yellow")
    for index, endpoint in enumerate(endpoints, start=1):
        role = "primary" if index == 1 else "fallback"
        table.add_row(
            f"{index} ({role})",
            endpoint.name,
            endpoint.method.upper(),
            endpoint.url,
            ", ".join(endpoint.omit_headers) or "-",
        )
    return table


def build_result_panel(result: TransferResult) -> Panel:
    """Panel para presentar un `TransferResult`."""

    body = Text()
    if result.success:
        body.append((result.message or "OK") + "\n", style="bold green")
        if result.data:
            body.append(json.dumps(result.data, ensure_ascii=False, indent=2))
        return Panel(body, title=Text("Change owner", style="bold green"), border_style="green")

    body.append(f"{result.error_code}\n", style="bold red")
    body.append((result.message or "") + "\n")
    if result.details:
        body.append("\n")
        body.append(json.dumps(result.details, ensure_ascii=False, indent=2, default=str), style="dim")
    body.append(f"\nHTTP {result.status_code}", style="dim")
    return Panel(body, title=Text("Change owner", style="bold red"), border_style="red")
