"""Entry point de desarrollo: `python -m main ...` sin instalar el paquete.

El código vive en `src/`; sin `pip install -e .` Python no encuentra `cli`
ni `core`, así que se añade `src/` al path antes de importar la CLI. Instalado,
el script `orion-client` apunta directamente a `cli.main:run`.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    # Terminales Windows con cp1252 fallan al imprimir las tablas de Rich.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
