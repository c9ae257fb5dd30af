"""Obtención del token anti-forgery (`x-csrf-token`).

Protocolo:
- Se envía una petición mutante *sin* token a un endpoint que lo exige.
- La API la rechaza y devuelve el token en los headers de la respuesta.
- Si el endpoint no lo devuelve, se prueba el siguiente de la cadena (con pausa).

La única señal de éxito es la presencia del header; ni el status ni el cuerpo
cuentan como éxito por sí solos.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

import httpx

from adapters.http_client import CSRF_HEADER, cookie_header, get_header, truncate_text
from core.config import AppSettings
from core.domain.errors import CredentialRejected, InternalError, TokenUnavailable
from core.domain.models import EndpointDescriptor
from core.logging_setup import mask_secret

# Statuses that mean the session itself is rejected: every endpoint would fail alike.
AUTH_REJECTION_STATUSES = frozenset({401})

_log = logging.getLogger(__name__)


class CsrfTokenAcquirer:
    """Recorre una cadena ordenada de endpoints hasta obtener el token."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: AppSettings | None = None,
        *,
        endpoints: Sequence[EndpointDescriptor] | None = None,
        logger: logging.Logger | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._settings = settings or AppSettings()
        self._endpoints = list(endpoints if endpoints is not None else self._settings.token_endpoints)
        self._log = logger or _log
        self._sleep = sleep

    def _build_request(self, endpoint: EndpointDescriptor, credential: str) -> httpx.Request:
        request = self._client.build_request(
            endpoint.method.upper(),
            endpoint.url,
            headers=cookie_header(self._settings.cookie_name, credential),
            json=endpoint.json_body,
        )
        for name in endpoint.omit_headers:
            if name in request.headers:
                del request.headers[name]
        return request

    async def acquire(self, credential: str) -> str:
        if not self._endpoints:
            raise TokenUnavailable("No token endpoints configured", details={"attempts": 0})

        pause = self._settings.token_retry_pause_seconds
        max_chars = self._settings.body_snippet_max_chars
        last_status: int | None = None
        last_snippet = ""
        last_endpoint: str | None = None
        last_error: httpx.HTTPError | None = None
        attempts = 0

        for index, endpoint in enumerate(self._endpoints):
            if index > 0 and pause > 0:
                await self._sleep(pause)

            attempts += 1
            try:
                response = await self._client.send(self._build_request(endpoint, credential))
            except httpx.HTTPError as exc:
                last_error = exc
                self._log.warning(
                    "csrf endpoint %s failed at transport level (%s)",
                    endpoint.name,
                    type(exc).__name__,
                )
                continue

            token = get_header(response.headers, CSRF_HEADER)
            if token:
                self._log.info(
                    "csrf token obtained from %s (attempt %d, status %d, token %s)",
                    endpoint.name,
                    attempts,
                    response.status_code,
                    mask_secret(token),
                )
                return token

            if response.status_code in AUTH_REJECTION_STATUSES:
                self._log.warning(
                    "credential rejected by %s (status %d); aborting token chain",
                    endpoint.name,
                    response.status_code,
                )
                raise CredentialRejected(
                    "The session credential was rejected by the remote API",
                    details={"remote_status": response.status_code, "endpoint": endpoint.name},
                )

            last_status = response.status_code
            last_endpoint = endpoint.name
            last_snippet = truncate_text(response.text, max_chars)
            self._log.info(
                "no csrf token from %s (status %d); trying next endpoint",
                endpoint.name,
                response.status_code,
            )

        if last_status is None and last_error is not None:
            raise InternalError(
                "Network error while contacting the remote API",
                details={"error": type(last_error).__name__, "attempts": attempts},
            )

        raise TokenUnavailable(
            "Could not obtain an anti-forgery token from any endpoint",
            details={
                "remote_status": last_status,
                "endpoint": last_endpoint,
                "body_snippet": last_snippet,
                "attempts": attempts,
            },
        )
