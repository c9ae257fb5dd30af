"""Map remote outcomes and relay errors onto one stable result shape.

Pure functions only: identical inputs always produce identical `TransferResult`
values. Upstream failures are always attributed to the upstream (5xx from the
remote API becomes a 502 here, never a 500).
"""

from __future__ import annotations

import json
from typing import Any

from core.domain.errors import ErrorKind, RelayError
from core.domain.models import PermissionSubReason, RemoteOutcome, TransferResult

# Lowercased substrings that signal an interactive verification gate.
VERIFICATION_MARKERS: tuple[str, ...] = (
    "challenge",
    "two-step verification",
    "2-step verification",
    "twostepverification",
    "verification is required",
    "captcha",
)
TOKEN_VALIDATION_MARKERS: tuple[str, ...] = ("token validation failed",)


def _searchable_text(outcome: RemoteOutcome) -> str:
    if outcome.parsed_body is not None:
        try:
            return json.dumps(outcome.parsed_body, ensure_ascii=False).lower()
        except (TypeError, ValueError):
            return str(outcome.parsed_body).lower()
    return (outcome.raw_text or "").lower()


def _diagnostics(outcome: RemoteOutcome, max_chars: int) -> dict[str, Any]:
    details: dict[str, Any] = {"remote_status": outcome.status_code}
    body = outcome.parsed_body
    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        details["remote_errors"] = body["errors"][:5]
    elif body is not None:
        details["remote_body"] = body
    elif outcome.raw_text:
        text = outcome.raw_text
        details["body_snippet"] = text if len(text) <= max_chars else text[: max_chars - 1] + "…"
    return details


def classify_forbidden(outcome: RemoteOutcome) -> PermissionSubReason:
    text = _searchable_text(outcome)
    if any(marker in text for marker in VERIFICATION_MARKERS):
        return PermissionSubReason.VERIFICATION_REQUIRED
    if any(marker in text for marker in TOKEN_VALIDATION_MARKERS):
        return PermissionSubReason.TOKEN_VALIDATION_FAILED
    return PermissionSubReason.FORBIDDEN


def _failure(kind: ErrorKind, status_code: int, message: str, details: dict[str, Any]) -> TransferResult:
    return TransferResult(
        success=False,
        status_code=status_code,
        error_code=kind.value,
        message=message,
        details=details,
    )


def translate(outcome: RemoteOutcome, *, max_chars: int = 500) -> TransferResult:
    """ResponseTranslator: `RemoteOutcome` -> `TransferResult`."""

    status = outcome.status_code
    if outcome.ok:
        return TransferResult(
            success=True,
            status_code=200,
            data=outcome.parsed_body,
            message="Ownership transferred successfully",
        )

    details = _diagnostics(outcome, max_chars)

    if status == 401:
        return _failure(
            ErrorKind.CREDENTIAL_REJECTED,
            401,
            "The session credential was rejected by the remote API",
            details,
        )
    if status == 403:
        sub_reason = classify_forbidden(outcome)
        details["sub_reason"] = sub_reason.value
        messages = {
            PermissionSubReason.VERIFICATION_REQUIRED: "The remote API requires interactive verification",
            PermissionSubReason.TOKEN_VALIDATION_FAILED: "The anti-forgery token was not accepted; retry the request",
            PermissionSubReason.FORBIDDEN: "The remote API denied permission for this change",
        }
        return _failure(ErrorKind.PERMISSION_DENIED, 403, messages[sub_reason], details)
    if status == 404:
        return _failure(ErrorKind.TARGET_NOT_FOUND, 404, "Group or user not found", details)
    if status == 429:
        return _failure(ErrorKind.RATE_LIMITED, 429, "Rate limited by the remote API", details)
    if 500 <= status <= 599:
        return _failure(ErrorKind.REMOTE_UNAVAILABLE, 502, "The remote API is unavailable", details)
    return _failure(ErrorKind.UNKNOWN_REMOTE_ERROR, 502, f"Unexpected remote status {status}", details)


def result_from_error(error: RelayError) -> TransferResult:
    return _failure(error.kind, error.status_code, error.message, error.details)
