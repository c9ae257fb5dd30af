"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Todos los valores son efímeros: se crean al inicio de una invocación y se
  descartan al final. Nada se persiste.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict


class EndpointDescriptor(BaseModel):
    """Un endpoint candidato para obtener el token anti-forgery.

    La petición se envía a propósito *sin* el token; la API la rechaza y devuelve
    el token en los headers de la respuesta.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, max_length=64)
    url: str = Field(..., min_length=8)
    method: str = Field(default="POST", min_length=1)
    omit_headers: tuple[str, ...] = Field(
        default=("x-csrf-token",),
        description="Headers que nunca se envían a este endpoint.",
    )
    json_body: dict[str, Any] | None = Field(
        default_factory=dict,
        description="Cuerpo JSON enviado (None = sin cuerpo).",
    )


class TransferRequest(BaseModel):
    """Entrada validada: credencial normalizada + IDs de grupo y usuario destino."""

    model_config = ConfigDict(frozen=True)

    credential: SecretStr = Field(
        ...,
        description="Secreto de sesión ya normalizado (sin prefijo de cookie).",
    )
    source_entity_id: int = Field(..., gt=0, description="ID del grupo cuyo owner cambia.")
    target_entity_id: int = Field(..., gt=0, description="ID del usuario que pasa a ser owner.")


class RemoteOutcome(BaseModel):
    """Resultado crudo de una llamada remota (status + cuerpo parseado o texto)."""

    status_code: int = Field(..., ge=0, le=999)
    parsed_body: Any = Field(
        default=None,
        description="Cuerpo JSON decodificado, si lo había.",
    )
    raw_text: str | None = Field(
        default=None,
        description="Texto crudo truncado cuando el cuerpo no era JSON.",
    )

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class PermissionSubReason(str, Enum):
    """Refinamiento de un 403 remoto."""

    VERIFICATION_REQUIRED = "verification_required"
    TOKEN_VALIDATION_FAILED = "token_validation_failed"
    FORBIDDEN = "forbidden"


class TransferResult(BaseModel):
    """Resultado estable de cara al cliente."""

    success: bool
    status_code: int = Field(..., ge=100, le=599, description="Status HTTP local.")
    data: Any = None
    error_code: str | None = None
    message: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        if self.success:
            return {
                "success": True,
                "message": self.message or "Ownership transferred successfully",
                "data": self.data,
            }
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            },
        }
