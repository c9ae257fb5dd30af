"""Change-owner orchestration.

InputValidator -> TokenAcquirer -> MutationExecutor -> ResponseTranslator.

The HTTP API and the CLI both delegate here, which keeps side-effects
(printing, HTTP framing) out of the core flow. Each call is independent: a
fresh client, a fresh token, nothing cached between invocations. Nothing is
retried automatically once a step has failed.
"""

from __future__ import annotations

import logging

import httpx

from adapters.http_client import build_async_client
from adapters.roblox import ChangeOwnerMutator, CsrfTokenAcquirer
from core.config import AppSettings
from core.domain.errors import InternalError, RelayError, ValidationError
from core.domain.models import TransferRequest, TransferResult
from core.interfaces import AntiForgeryTokenProvider, OwnershipMutator
from core.logging_setup import mask_secret
from core.services.input_validator import validate_transfer
from core.services.response_translator import result_from_error, translate

_log = logging.getLogger(__name__)


async def execute_transfer(
    *,
    request: TransferRequest,
    token_provider: AntiForgeryTokenProvider,
    mutator: OwnershipMutator,
    settings: AppSettings,
    logger: logging.Logger | None = None,
) -> TransferResult:
    """Acquire a token, run the mutation and translate the outcome.

    Token acquisition must finish before the mutation starts because the
    mutation carries the token.
    """

    log = logger or _log
    credential = request.credential.get_secret_value()
    log.info(
        "change-owner requested group=%d target=%d credential=%s",
        request.source_entity_id,
        request.target_entity_id,
        mask_secret(credential),
    )

    try:
        token = await token_provider.acquire(credential)
        outcome = await mutator.execute(request, token)
    except RelayError as exc:
        log.warning("change-owner aborted: %s (%s)", exc.kind.value, exc.message)
        return result_from_error(exc)
    except httpx.HTTPError as exc:
        log.error("change-owner network failure: %s", type(exc).__name__)
        return result_from_error(
            InternalError(
                "Network error while contacting the remote API",
                details={"error": type(exc).__name__},
            )
        )

    result = translate(outcome, max_chars=settings.body_snippet_max_chars)
    if result.success:
        log.info("change-owner succeeded group=%d", request.source_entity_id)
    else:
        log.warning(
            "change-owner failed group=%d: %s (remote status %d)",
            request.source_entity_id,
            result.error_code,
            outcome.status_code,
        )
    return result


async def relay_change_owner(
    request: TransferRequest,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    logger: logging.Logger | None = None,
) -> TransferResult:
    """Run a validated request against the real adapters."""

    settings = settings or AppSettings()
    async with build_async_client(settings, transport=transport) as client:
        return await execute_transfer(
            request=request,
            token_provider=CsrfTokenAcquirer(client, settings, logger=logger),
            mutator=ChangeOwnerMutator(client, settings, logger=logger),
            settings=settings,
            logger=logger,
        )


async def relay_raw_body(
    raw_body: bytes | str | None,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    logger: logging.Logger | None = None,
) -> TransferResult:
    """Full flow from the untrusted transport body.

    Validation failures return before any client is created.
    """

    settings = settings or AppSettings()
    log = logger or _log
    try:
        request = validate_transfer(raw_body, settings)
    except ValidationError as exc:
        log.info("change-owner input rejected: %s", exc.kind.value)
        return result_from_error(exc)
    return await relay_change_owner(request, settings=settings, transport=transport, logger=logger)
