"""Modelos del dominio.

Nota:
- Estos modelos describen *qué* es una entidad de contexto, no *cómo* viaja
  por el cable (eso vive en `adapters.wire_models`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from core.domain.attributes import Attributes

PAGE_SIZE = 100


@dataclass(frozen=True, order=True)
class Page:
    """Cursor de paginación sobre bloques fijos de `PAGE_SIZE` entidades."""

    number: int = 0

    size: ClassVar[int] = PAGE_SIZE

    def __post_init__(self) -> None:
        if self.number < 0:
            raise ValueError(f"page number must be non-negative, got {self.number}")

    @property
    def limit(self) -> int:
        return self.size

    @property
    def offset(self) -> int:
        return self.number * self.size

    def next(self) -> "Page":
        return Page(self.number + 1)

    def __str__(self) -> str:
        return str(self.number)


class ContextEntity:
    """Entidad genérica: `(type, id)` inmutable más un conjunto de atributos.

    Implementa `core.interfaces.Entity` y, como su constructor recibe
    `(type, id)`, la propia clase sirve de `EntityFactory`.
    """

    __slots__ = ("_type", "_id", "_attributes")

    def __init__(self, entity_type: str, entity_id: str, attributes: Attributes | None = None) -> None:
        self._type = entity_type
        self._id = entity_id
        self._attributes = attributes if attributes is not None else Attributes()

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> str:
        return self._type

    def attributes(self) -> Attributes:
        return self._attributes

    def set_attributes(self, attributes: Attributes) -> None:
        self._attributes = attributes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContextEntity):
            return NotImplemented
        return (self._type, self._id, self._attributes) == (other._type, other._id, other._attributes)

    def __repr__(self) -> str:
        return f"ContextEntity(type={self._type!r}, id={self._id!r}, attributes={self._attributes!r})"
