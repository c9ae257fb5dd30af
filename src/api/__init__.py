"""Superficie HTTP del relay (FastAPI)."""

from api.app import CHANGE_OWNER_PATH, create_app

__all__ = [
    "CHANGE_OWNER_PATH",
    "create_app",
]
