"""End-to-end tests of the change-owner flow against a fake remote."""

from __future__ import annotations

import asyncio
import json

from pydantic import SecretStr

from conftest import CREDENTIAL, LOGIN_URL, LOGOUT_URL, PRIMARY_GROUP_URL, change_owner_url
from core.domain.errors import CredentialRejected
from core.domain.models import RemoteOutcome, TransferRequest
from core.interfaces import AntiForgeryTokenProvider, OwnershipMutator
from core.services.transfer_pipeline import execute_transfer, relay_raw_body


def _body(**overrides: object) -> str:
    payload = {"credential": CREDENTIAL, "sourceEntityId": 321, "targetEntityId": 654}
    payload.update(overrides)
    return json.dumps(payload)


def _relay(raw, remote, settings, logger):
    return asyncio.run(relay_raw_body(raw, settings=settings, transport=remote.transport, logger=logger))


def test_successful_transfer(remote, settings, silent_logger):
    remote.reply(LOGOUT_URL, 403, headers={"x-csrf-token": "tok-1"})
    remote.reply(change_owner_url(321), 200, json={"id": 123})

    result = _relay(_body(), remote, settings, silent_logger)

    assert result.success is True
    assert result.data == {"id": 123}
    assert remote.urls == [LOGOUT_URL, change_owner_url(321)]
    assert remote.requests[1].headers["x-csrf-token"] == "tok-1"


def test_validation_failure_makes_no_network_calls(remote, settings, silent_logger):
    result = _relay(_body(credential="too-short"), remote, settings, silent_logger)

    assert result.status_code == 400
    assert result.error_code == "invalid_credential"
    assert remote.requests == []


def test_token_unavailable_skips_mutation(remote, settings, silent_logger):
    remote.reply(LOGOUT_URL, 403)
    remote.reply(LOGIN_URL, 403)
    remote.reply(PRIMARY_GROUP_URL, 404, text="gone")

    result = _relay(_body(), remote, settings, silent_logger)

    assert result.status_code == 502
    assert result.error_code == "token_unavailable"
    assert result.details["remote_status"] == 404
    assert remote.calls_to(change_owner_url(321)) == 0


def test_rejected_credential_is_401(remote, settings, silent_logger):
    remote.reply(LOGOUT_URL, 401)

    result = _relay(_body(), remote, settings, silent_logger)

    assert result.status_code == 401
    assert result.error_code == "credential_rejected"
    assert len(remote.requests) == 1


def test_verification_gate_reported_as_final_outcome(remote, settings, silent_logger):
    remote.reply(LOGOUT_URL, 403, headers={"x-csrf-token": "tok-1"})
    remote.reply(
        change_owner_url(321),
        403,
        json={"errors": [{"code": 0, "message": "Challenge is required to authorize the request"}]},
    )

    result = _relay(_body(), remote, settings, silent_logger)

    assert result.status_code == 403
    assert result.details["sub_reason"] == "verification_required"
    assert remote.calls_to(change_owner_url(321)) == 1


def test_network_failure_during_mutation_is_internal_error(remote, settings, silent_logger):
    remote.reply(LOGOUT_URL, 403, headers={"x-csrf-token": "tok-1"})
    remote.fail(change_owner_url(321))

    result = _relay(_body(), remote, settings, silent_logger)

    assert result.status_code == 500
    assert result.error_code == "internal_error"
    assert CREDENTIAL not in json.dumps(result.to_payload())


class _StaticProvider:
    def __init__(self, token=None, error=None):
        self.calls = 0
        self._token = token
        self._error = error

    async def acquire(self, credential: str) -> str:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return self._token


class _RecordingMutator:
    def __init__(self, outcome):
        self.seen: list[tuple[TransferRequest, str]] = []
        self._outcome = outcome

    async def execute(self, request: TransferRequest, token: str) -> RemoteOutcome:
        self.seen.append((request, token))
        return self._outcome


def test_execute_transfer_with_injected_components(settings, silent_logger):
    provider = _StaticProvider(token="tok-x")
    mutator = _RecordingMutator(RemoteOutcome(status_code=200, parsed_body={"id": 1}))
    request = TransferRequest(credential=SecretStr(CREDENTIAL), source_entity_id=1, target_entity_id=2)

    assert isinstance(provider, AntiForgeryTokenProvider)
    assert isinstance(mutator, OwnershipMutator)

    result = asyncio.run(
        execute_transfer(
            request=request,
            token_provider=provider,
            mutator=mutator,
            settings=settings,
            logger=silent_logger,
        )
    )

    assert result.success is True
    assert mutator.seen == [(request, "tok-x")]


def test_acquisition_failure_never_reaches_mutator(settings, silent_logger):
    provider = _StaticProvider(error=CredentialRejected("rejected"))
    mutator = _RecordingMutator(RemoteOutcome(status_code=200))
    request = TransferRequest(credential=SecretStr(CREDENTIAL), source_entity_id=1, target_entity_id=2)

    result = asyncio.run(
        execute_transfer(
            request=request,
            token_provider=provider,
            mutator=mutator,
            settings=settings,
            logger=silent_logger,
        )
    )

    assert result.error_code == "credential_rejected"
    assert mutator.seen == []
