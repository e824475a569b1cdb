"""Contrato de entidades de contexto.

El cliente no conoce las clases concretas del llamador: solo necesita
identidad, tipo y acceso a los atributos. Para materializar entidades durante
un listado recibe una `EntityFactory`.
"""

from __future__ import annotations

from typing import Callable, Protocol, TypeVar, runtime_checkable

from core.domain.attributes import Attributes


@runtime_checkable
class Entity(Protocol):
    """Contrato mínimo de una entidad.

    Reglas:
    - `(type, id)` no cambia durante la vida del objeto.
    - `set_attributes` reemplaza el conjunto completo de atributos.
    """

    @property
    def id(self) -> str: ...

    @property
    def type(self) -> str: ...

    def attributes(self) -> Attributes: ...

    def set_attributes(self, attributes: Attributes) -> None: ...


E = TypeVar("E", bound=Entity)

EntityFactory = Callable[[str, str], E]
"""Construye una entidad vacía a partir de `(type, id)`."""
