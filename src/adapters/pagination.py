"""Paginación por desplazamiento sobre listados del broker.

Contrato:
- Se empieza en `start` (página 0 por defecto) y se avanza de uno en uno.
- La primera página vacía termina el listado.
- No hay límite de páginas ni de-duplicación: si el broker nunca devuelve una
  página vacía, el bucle no termina. Quien necesite acotar debe usar
  `iter_pages` (perezoso) junto con `itertools.islice`.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, TypeVar

from core.domain.models import Page
from core.errors import IncompleteListing, OrionError

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageFetcher = Callable[[Page], list[T]]


def iter_pages(fetch: PageFetcher[T], start: Page = Page()) -> Iterator[list[T]]:
    """Genera páginas no vacías hasta la primera vacía. Los errores se propagan."""

    page = start
    while True:
        chunk = fetch(page)
        if not chunk:
            return
        yield chunk
        page = page.next()


def paginate(fetch: PageFetcher[T], start: Page = Page()) -> list[T]:
    """Concatena todas las páginas.

    Ante un error de la librería en una página se lanza `IncompleteListing`
    con lo acumulado hasta entonces; el error original queda en `__cause__`.
    """

    collected: list[T] = []
    page = start
    while True:
        try:
            chunk = fetch(page)
        except OrionError as exc:
            logger.warning("listing aborted at page %s with %d entities collected: %s", page, len(collected), exc)
            raise IncompleteListing(collected, page, exc) from exc
        if not chunk:
            logger.debug("empty page %s, listing complete (%d entities)", page, len(collected))
            return collected
        collected.extend(chunk)
        page = page.next()
