"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI ni la API.
- Permite que adaptadores (HTTP) lean config de forma consistente.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import EndpointDescriptor

DEFAULT_GROUPS_BASE_URL = "https://groups.roblox.com"
DEFAULT_AUTH_BASE_URL = "https://auth.roblox.com"


def default_token_endpoints() -> list[EndpointDescriptor]:
    """Cadena por defecto de endpoints que emiten `x-csrf-token` al rechazar la petición.

    El primero es el primario; el resto son fallbacks en orden.
    """

    return [
        EndpointDescriptor(name="auth-logout", url=f"{DEFAULT_AUTH_BASE_URL}/v2/logout"),
        EndpointDescriptor(name="auth-login", url=f"{DEFAULT_AUTH_BASE_URL}/v2/login"),
        EndpointDescriptor(
            name="groups-primary-membership",
            url=f"{DEFAULT_GROUPS_BASE_URL}/v1/user/groups/primary",
        ),
    ]


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/API/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="OWNER_RELAY_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Timeout por request saliente (segundos).",
    )
    user_agent: str = Field(
        default="group-owner-relay/0.1",
        min_length=1,
        description="User-Agent para las peticiones a la API remota.",
    )

    groups_base_url: str = Field(
        default=DEFAULT_GROUPS_BASE_URL,
        min_length=8,
        description="Base URL de la API de grupos (endpoint change-owner).",
    )
    auth_base_url: str = Field(
        default=DEFAULT_AUTH_BASE_URL,
        min_length=8,
        description="Base URL de la API de autenticación.",
    )
    cookie_name: str = Field(
        default=".ROBLOSECURITY",
        min_length=1,
        description="Nombre de la cookie de sesión que transporta la credencial.",
    )

    credential_min_length: int = Field(
        default=50,
        ge=1,
        description="Longitud mínima plausible de la credencial tras normalizarla.",
    )
    placeholder_entity_ids: set[int] = Field(
        default_factory=set,
        description=(
            "IDs de relleno (ejemplos/plantillas) que nunca deben llegar a la API. "
            "Vacío por defecto: cualquier ID positivo puede ser un grupo/usuario real, "
            "y el placeholder universal (0) ya se rechaza por no ser positivo."
        ),
    )

    token_endpoints: list[EndpointDescriptor] = Field(
        default_factory=default_token_endpoints,
        min_length=1,
        description="Cadena ordenada de endpoints para obtener el token anti-forgery (JSON en env).",
    )
    token_retry_pause_seconds: float = Field(
        default=0.5,
        ge=0,
        le=10,
        description="Pausa entre intentos de la cadena de fallback (evita rate limiting).",
    )
    body_snippet_max_chars: int = Field(
        default=500,
        ge=16,
        le=20_000,
        description="Máximo de caracteres de cuerpo remoto conservados para diagnóstico.",
    )

    max_request_body_bytes: int = Field(
        default=16 * 1024,
        ge=64,
        description="Tamaño máximo del cuerpo de la petición entrante.",
    )
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING...).",
    )
    host: str = Field(default="127.0.0.1", description="Host para `serve`.")
    port: int = Field(default=8000, ge=1, le=65535, description="Puerto para `serve`.")
