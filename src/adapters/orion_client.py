"""Cliente del context broker (API v1, estilo NGSI).

Por qué un cliente síncrono:
- Cada operación es exactamente una llamada remota (salvo `list_all`).
- El cliente solo guarda la URL base (inmutable) y el `httpx.Client`; no hay
  estado mutable por llamada, así que es tan seguro entre hilos como el
  transporte que se le inyecte.

Errores:
- `TransportError` / `DecodeError` se propagan sin tocar.
- Un `statusCode` embebido distinto de 200 -> `OperationFailed`.
- `exists` es la única operación que enmascara errores (devuelve `False`).
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from adapters.http_client import build_client, send_json
from adapters.pagination import iter_pages, paginate
from adapters.wire_codec import decode_attributes, decode_envelope, encode_attributes
from adapters.wire_models import (
    WireAlteredResponse,
    WireQueryElement,
    WireQueryResponse,
    WireStatus,
)
from core.config import AppSettings
from core.domain.models import Page
from core.errors import OperationFailed, OrionError, UnexpectedResult
from core.interfaces.entity import Entity, EntityFactory

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)
M = TypeVar("M", bound=BaseModel)

STATUS_OK = 200


def _segment(value: str) -> str:
    return quote(value, safe="")


def _check_status(status: WireStatus, operation: str) -> None:
    if status.code != STATUS_OK:
        logger.warning("entity %s failed: code=%s message=%s", operation, status.code, status.reason_phrase)
        raise OperationFailed(status.code, status.reason_phrase, operation=operation)


class OrionClient:
    """Operaciones CRUD, comprobación de existencia y listados paginados."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        settings: AppSettings | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        url = base_url if base_url is not None else self._settings.broker_url
        if url.endswith("/"):
            url = url[:-1]
        self._base_url = url
        self._owns_client = http_client is None
        self._http = http_client if http_client is not None else build_client(self._settings)

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "OrionClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def entity_url(self, entity_type: str, entity_id: str) -> str:
        return f"{self._base_url}/v1/contextEntities/type/{_segment(entity_type)}/id/{_segment(entity_id)}"

    def type_url(self, entity_type: str) -> str:
        return f"{self._base_url}/v1/contextEntityTypes/{_segment(entity_type)}"

    def _call(
        self,
        model: type[M],
        method: str,
        url: str,
        *,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> M:
        raw = send_json(self._http, method, url, body=body, params=params)
        return decode_envelope(model, raw)

    def _alter(self, method: str, entity: Entity, operation: str) -> None:
        url = self.entity_url(entity.type, entity.id)
        result = self._call(WireAlteredResponse, method, url, body=encode_attributes(entity.attributes()))
        if not result.context_responses:
            logger.warning("entity %s returned no context responses: %r", operation, result)
            raise UnexpectedResult(f"entity {operation} returned no context responses")
        _check_status(result.context_responses[0].status, operation)

    def create(self, entity: Entity) -> None:
        """POST de los atributos de `entity`; la entidad local no se modifica."""

        self._alter("POST", entity, "creation")

    def update(self, entity: Entity) -> None:
        """PUT de los atributos de `entity`; la entidad local no se modifica."""

        self._alter("PUT", entity, "update")

    def read(self, entity: Entity) -> None:
        """Rellena `entity` con los atributos del broker (solo si el status es 200)."""

        result = self._call(WireQueryElement, "GET", self.entity_url(entity.type, entity.id))
        _check_status(result.status, "lookup")
        entity.set_attributes(decode_attributes(result.context_element))

    def delete(self, entity: Entity) -> None:
        result = self._call(WireStatus, "DELETE", self.entity_url(entity.type, entity.id))
        _check_status(result, "deletion")

    def exists(self, entity_type: str, entity_id: str) -> bool:
        """`True` solo si el broker responde status 200; cualquier error -> `False`."""

        try:
            result = self._call(WireQueryElement, "GET", self.entity_url(entity_type, entity_id))
        except OrionError as exc:
            logger.debug("exists(%s, %s) treated as missing: %s", entity_type, entity_id, exc)
            return False
        return result.status.code == STATUS_OK

    def list_page(self, entity_type: str, page: Page | int, factory: EntityFactory[E]) -> list[E]:
        """Una página de `Page.size` entidades; una lista vacía marca el final."""

        if not isinstance(page, Page):
            page = Page(page)
        result = self._call(
            WireQueryResponse,
            "GET",
            self.type_url(entity_type),
            params={"limit": page.limit, "offset": page.offset},
        )
        entities: list[E] = []
        for element in result.context_responses:
            ctx = element.context_element
            entity = factory(ctx.type, ctx.id)
            entity.set_attributes(decode_attributes(ctx))
            entities.append(entity)
        return entities

    def list_all(self, entity_type: str, factory: EntityFactory[E]) -> list[E]:
        """Todas las entidades del tipo; ante error lanza `IncompleteListing` con lo parcial."""

        return paginate(lambda page: self.list_page(entity_type, page, factory))

    def iter_entities(self, entity_type: str, factory: EntityFactory[E], start: Page = Page()) -> Iterator[E]:
        for chunk in iter_pages(lambda page: self.list_page(entity_type, page, factory), start):
            yield from chunk
