"""Atajo de desarrollo: `python -m main serve` sin `pip install -e .`.

Instalado, el mismo punto de entrada es el script `group-owner-relay`.
"""

from __future__ import annotations

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(_SRC) not in sys.path:
        sys.path.insert(0, str(_SRC))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
