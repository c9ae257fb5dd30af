"""Adaptadores HTTP para la API remota de grupos.

Por qué un paquete:
- Agrupa el protocolo del token anti-forgery y la mutación change-owner.
- Cada clase implementa un contrato de `core.interfaces`.
"""

from adapters.roblox.mutation_executor import ChangeOwnerMutator
from adapters.roblox.token_acquirer import AUTH_REJECTION_STATUSES, CsrfTokenAcquirer

__all__ = [
    "AUTH_REJECTION_STATUSES",
    "ChangeOwnerMutator",
    "CsrfTokenAcquirer",
]
