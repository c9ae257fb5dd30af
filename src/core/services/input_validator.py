"""Input validation for the change-owner relay.

Turns the raw transport body into a `TransferRequest` or raises one of the
`ValidationError` subclasses. Everything here is a pure function of its input
and settings: no I/O, no logging, no network.

Canonical field names are `credential`, `sourceEntityId` and `targetEntityId`.
The aliases used by older handler variants (`cookie`, `groupId`, `targetId`,
`userId`) are accepted, but error messages always name the canonical field.
"""

from __future__ import annotations

import json
import re
from typing import Any, Mapping

from pydantic import SecretStr

from core.config import AppSettings
from core.domain.errors import (
    EmptyBody,
    InvalidCredential,
    MalformedPayload,
    MissingField,
    NumericValidation,
)
from core.domain.models import TransferRequest

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "credential": ("credential", "cookie"),
    "sourceEntityId": ("sourceEntityId", "groupId"),
    "targetEntityId": ("targetEntityId", "targetId", "userId"),
}

MAX_ENTITY_ID = 2**63 - 1

_DIGITS_RE = re.compile(r"\+?[0-9]+", re.ASCII)

# Printable ASCII minus `,` and `;`: the value goes verbatim into a Cookie header.
_COOKIE_VALUE_RE = re.compile(r"[\x21-\x2b\x2d-\x3a\x3c-\x7e]+", re.ASCII)


def parse_body(raw: bytes | str | None) -> dict[str, Any]:
    """Decode the raw body into a JSON object."""

    if raw is None:
        raise EmptyBody()

    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedPayload("Request body is not valid UTF-8") from exc
    else:
        text = raw

    if not text.strip():
        raise EmptyBody()

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedPayload(
            "Invalid JSON in request body",
            details={"reason": exc.msg, "position": exc.pos},
        ) from exc

    if not isinstance(payload, dict):
        raise MalformedPayload("Request body must be a JSON object")
    return payload


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def pick_field(payload: Mapping[str, Any], field: str) -> Any:
    """First non-blank value among the canonical name and its aliases."""

    for key in FIELD_ALIASES[field]:
        value = payload.get(key)
        if not _is_blank(value):
            return value
    return None


def normalize_credential(value: object, *, cookie_name: str, min_length: int) -> str:
    """Trim, drop a `name=` cookie-pair prefix and check a plausible length.

    The credential is never echoed back in the error.
    """

    if not isinstance(value, str):
        raise InvalidCredential("credential must be a string")

    secret = value.strip()
    prefix = f"{cookie_name}="
    if secret[: len(prefix)].lower() == prefix.lower():
        secret = secret[len(prefix) :]
    # Copied cookie pairs often keep their separator.
    secret = secret.strip().rstrip(";").strip()

    if len(secret) < min_length:
        raise InvalidCredential(
            "credential is too short to be a valid session token",
            details={"field": "credential", "min_length": min_length},
        )
    if not _COOKIE_VALUE_RE.fullmatch(secret):
        raise InvalidCredential(
            "credential contains characters not allowed in a cookie value",
            details={"field": "credential"},
        )
    return secret


def parse_entity_id(value: object, field: str, *, placeholders: set[int] | None = None) -> int:
    """Parse a base-10 positive integer id from a JSON number or string."""

    if isinstance(value, bool):
        raise NumericValidation(field, "must be an integer, not a boolean")

    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise NumericValidation(field, "must be a whole number")
        number = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _DIGITS_RE.fullmatch(text):
            raise NumericValidation(field, "must be a base-10 integer")
        number = int(text, 10)
    else:
        raise NumericValidation(field, "must be a number or a numeric string")

    if number <= 0:
        raise NumericValidation(field, "must be a positive integer")
    if number > MAX_ENTITY_ID:
        raise NumericValidation(field, "is out of range")
    if placeholders and number in placeholders:
        raise NumericValidation(field, "is a placeholder id")
    return number


def validate_payload(payload: Mapping[str, Any], settings: AppSettings | None = None) -> TransferRequest:
    settings = settings or AppSettings()

    values = {field: pick_field(payload, field) for field in FIELD_ALIASES}
    missing = [field for field, value in values.items() if value is None]
    if missing:
        raise MissingField(missing)

    credential = normalize_credential(
        values["credential"],
        cookie_name=settings.cookie_name,
        min_length=settings.credential_min_length,
    )
    source_id = parse_entity_id(
        values["sourceEntityId"],
        "sourceEntityId",
        placeholders=settings.placeholder_entity_ids,
    )
    target_id = parse_entity_id(
        values["targetEntityId"],
        "targetEntityId",
        placeholders=settings.placeholder_entity_ids,
    )

    return TransferRequest(
        credential=SecretStr(credential),
        source_entity_id=source_id,
        target_entity_id=target_id,
    )


def validate_transfer(raw: bytes | str | None, settings: AppSettings | None = None) -> TransferRequest:
    """Full InputValidator contract: raw body in, `TransferRequest` out."""

    return validate_payload(parse_body(raw), settings)
