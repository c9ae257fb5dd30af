"""Logging helpers shared by the API, the CLI and the adapters.

Components never print. Each one takes an optional `logger` and falls back to
its module logger, so tests can inject a silent or capturing logger.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler


def configure_logging(level: str = "INFO") -> None:
    """Install a Rich handler on the root logger (idempotent)."""

    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return
    handler = RichHandler(rich_tracebacks=False, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)


def mask_secret(value: str | None, *, visible: int = 4) -> str:
    """Return a log-safe form of a secret: only the last `visible` chars survive."""

    if not value:
        return "<empty>"
    if len(value) <= visible * 2:
        return "***"
    return f"***{value[-visible:]}"
