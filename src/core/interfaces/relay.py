"""Contratos del flujo de transferencia.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el pipeline use adaptadores HTTP reales o fakes en tests sin
  acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import RemoteOutcome, TransferRequest


@runtime_checkable
class AntiForgeryTokenProvider(Protocol):
    """Obtiene un token anti-forgery para una credencial."""

    async def acquire(self, credential: str) -> str:
        """Devuelve el token o lanza `CredentialRejected` / `TokenUnavailable`."""

        ...


@runtime_checkable
class OwnershipMutator(Protocol):
    """Ejecuta la mutación autenticada y devuelve el resultado crudo."""

    async def execute(self, request: TransferRequest, token: str) -> RemoteOutcome:
        ...
