"""HTTP surface (FastAPI).

The handler reads the raw body itself instead of declaring a request model:
InputValidator owns every parsing decision (empty body, bad JSON, aliases),
so the framework parser stays out of the way.
"""

from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.config import AppSettings
from core.domain.errors import InternalError, PayloadTooLarge
from core.services.response_translator import result_from_error
from core.services.transfer_pipeline import relay_raw_body

CHANGE_OWNER_PATH = "/api/change-owner"

_log = logging.getLogger(__name__)


def _too_large(limit: int) -> JSONResponse:
    result = result_from_error(
        PayloadTooLarge("Request body too large", details={"max_bytes": limit})
    )
    return JSONResponse(result.to_payload(), status_code=result.status_code)


def create_app(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    logger: logging.Logger | None = None,
) -> FastAPI:
    """Build the application.

    `transport` replaces the outbound network (tests pass an `httpx.MockTransport`).
    """

    settings = settings or AppSettings()
    log = logger or _log

    app = FastAPI(title="Group Owner Relay", version="0.1.0")
    app.state.transport = transport

    @app.post(CHANGE_OWNER_PATH)
    async def change_owner(request: Request) -> JSONResponse:
        """Transfer group ownership using the caller's session credential."""

        limit = settings.max_request_body_bytes
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > limit:
            return _too_large(limit)

        # Chunked bodies carry no Content-Length; stop reading past the limit.
        chunks: list[bytes] = []
        received = 0
        async for chunk in request.stream():
            received += len(chunk)
            if received > limit:
                return _too_large(limit)
            chunks.append(chunk)
        raw = b"".join(chunks)

        try:
            result = await relay_raw_body(
                raw,
                settings=settings,
                transport=app.state.transport,
                logger=log,
            )
        except Exception as exc:
            log.error("unexpected change-owner failure: %s", type(exc).__name__)
            result = result_from_error(InternalError("Internal server error"))

        return JSONResponse(result.to_payload(), status_code=result.status_code)

    @app.api_route(
        CHANGE_OWNER_PATH,
        methods=["GET", "PUT", "PATCH", "DELETE", "OPTIONS"],
        include_in_schema=False,
    )
    async def change_owner_method_not_allowed() -> JSONResponse:
        return JSONResponse(
            {
                "success": False,
                "error": {
                    "code": "method_not_allowed",
                    "message": "Method not allowed",
                    "details": {"allowed": ["POST"]},
                },
            },
            status_code=405,
            headers={"Allow": "POST"},
        )

    @app.get("/healthz")
    async def healthz() -> dict[str, bool]:
        return {"success": True}

    return app
