"""Taxonomía de errores del relay.

Cada error lleva un `ErrorKind` estable y el status HTTP local con el que se
expone. Los errores de validación se resuelven localmente y nunca llegan a red.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable


class ErrorKind(str, Enum):
    """Códigos de error estables expuestos a los clientes."""

    EMPTY_BODY = "empty_body"
    MALFORMED_PAYLOAD = "malformed_payload"
    MISSING_FIELD = "missing_field"
    NUMERIC_VALIDATION = "numeric_validation"
    INVALID_CREDENTIAL = "invalid_credential"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    CREDENTIAL_REJECTED = "credential_rejected"
    TOKEN_UNAVAILABLE = "token_unavailable"
    PERMISSION_DENIED = "permission_denied"
    TARGET_NOT_FOUND = "target_not_found"
    RATE_LIMITED = "rate_limited"
    REMOTE_UNAVAILABLE = "remote_unavailable"
    UNKNOWN_REMOTE_ERROR = "unknown_remote_error"
    INTERNAL_ERROR = "internal_error"


class RelayError(Exception):
    """Base de todos los errores conocidos del relay."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = dict(details or {})


class ValidationError(RelayError):
    """Entrada inválida; nunca dispara llamadas de red."""

    kind = ErrorKind.MALFORMED_PAYLOAD
    status_code = 400


class EmptyBody(ValidationError):
    kind = ErrorKind.EMPTY_BODY

    def __init__(self) -> None:
        super().__init__("Empty request body")


class MalformedPayload(ValidationError):
    kind = ErrorKind.MALFORMED_PAYLOAD


class MissingField(ValidationError):
    kind = ErrorKind.MISSING_FIELD

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = list(fields)
        super().__init__(
            f"Missing required field(s): {', '.join(self.fields)}",
            details={"fields": self.fields},
        )


class NumericValidation(ValidationError):
    kind = ErrorKind.NUMERIC_VALIDATION

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field} {reason}", details={"field": field, "reason": reason})


class InvalidCredential(ValidationError):
    kind = ErrorKind.INVALID_CREDENTIAL


class PayloadTooLarge(ValidationError):
    kind = ErrorKind.PAYLOAD_TOO_LARGE
    status_code = 413


class CredentialRejected(RelayError):
    kind = ErrorKind.CREDENTIAL_REJECTED
    status_code = 401


class TokenUnavailable(RelayError):
    """Todos los endpoints de la cadena se agotaron sin devolver token."""

    kind = ErrorKind.TOKEN_UNAVAILABLE
    status_code = 502


class InternalError(RelayError):
    """Fallo local inesperado (p.ej. error de red ajeno al contrato remoto)."""

    kind = ErrorKind.INTERNAL_ERROR
    status_code = 500
