"""Mutación change-owner contra la API de grupos.

Solo captura status + cuerpo; la interpretación es trabajo de
`core.services.response_translator`.
"""

from __future__ import annotations

import logging

import httpx

from adapters.http_client import cookie_header, read_outcome
from core.config import AppSettings
from core.domain.models import RemoteOutcome, TransferRequest

_log = logging.getLogger(__name__)


class ChangeOwnerMutator:
    """Envía `POST /v1/groups/{groupId}/change-owner` con cookie + token."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: AppSettings | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self._settings = settings or AppSettings()
        self._log = logger or _log

    def change_owner_url(self, group_id: int) -> str:
        base = self._settings.groups_base_url.rstrip("/")
        return f"{base}/v1/groups/{group_id}/change-owner"

    async def execute(self, request: TransferRequest, token: str) -> RemoteOutcome:
        headers = {
            **cookie_header(self._settings.cookie_name, request.credential.get_secret_value()),
            "X-CSRF-TOKEN": token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        response = await self._client.post(
            self.change_owner_url(request.source_entity_id),
            headers=headers,
            json={"userId": request.target_entity_id},
        )
        outcome = read_outcome(response, max_chars=self._settings.body_snippet_max_chars)
        self._log.info(
            "change-owner group=%d target=%d -> status %d",
            request.source_entity_id,
            request.target_entity_id,
            outcome.status_code,
        )
        return outcome
