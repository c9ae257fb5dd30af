"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y User-Agent de todas las llamadas salientes.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
- Agrupa utilidades de respuesta (lookup de headers, captura de cuerpo acotada).
"""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx

from core.config import AppSettings
from core.domain.models import RemoteOutcome

CSRF_HEADER = "x-csrf-token"

# Literal variants checked when the container is a plain dict.
_HEADER_CASE_VARIANTS = (str.lower, str.upper, str.title)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que token y mutación se comporten igual.
    - `transport` permite sustituir la red por un fake en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


def get_header(headers: Mapping[str, str] | httpx.Headers, name: str) -> str | None:
    """Lookup case-insensitive de un header.

    Los servicios remotos no son consistentes con el casing (`x-csrf-token`,
    `X-CSRF-TOKEN`, `X-Csrf-Token`...). Devuelve None si falta o está vacío.
    """

    if isinstance(headers, httpx.Headers):
        value = headers.get(name)
        if value is None or not value.strip():
            return None
        return value.strip()

    for variant in _HEADER_CASE_VARIANTS:
        value = headers.get(variant(name))
        if isinstance(value, str) and value.strip():
            return value.strip()

    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted and isinstance(value, str) and value.strip():
            return value.strip()
    return None


def truncate_text(value: str | None, max_chars: int) -> str:
    if not value:
        return ""
    if len(value) <= max_chars:
        return value
    return value[: max_chars - 1].rstrip() + "…"


def read_outcome(response: httpx.Response, *, max_chars: int = 500) -> RemoteOutcome:
    """Convierte una respuesta en `RemoteOutcome`.

    Si el cuerpo no es JSON, guarda el texto crudo truncado.
    """

    text = response.text or ""
    if text.strip():
        try:
            parsed: Any = json.loads(text)
        except json.JSONDecodeError:
            return RemoteOutcome(
                status_code=response.status_code,
                raw_text=truncate_text(text, max_chars),
            )
        return RemoteOutcome(status_code=response.status_code, parsed_body=parsed)
    return RemoteOutcome(status_code=response.status_code)


def cookie_header(cookie_name: str, credential: str) -> dict[str, str]:
    return {"Cookie": f"{cookie_name}={credential}"}
