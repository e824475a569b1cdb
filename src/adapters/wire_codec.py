"""Códec entre el modelo de atributos tipados y los envoltorios JSON.

Traducción estructural, no validación semántica: las etiquetas de tipo del
cable se conservan tal cual (incluida la etiqueta "int" para floats de 64 bits
que envían algunos pares).
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from adapters.wire_models import WireAttribute, WireAttributes
from core.domain.attributes import Attribute, Attributes
from core.errors import DecodeError, TransportError

M = TypeVar("M", bound=BaseModel)


def encode_attributes(attributes: Attributes) -> dict[str, Any]:
    """`Attributes` -> `{"attributes": [{name, type, value}, ...]}` en orden de inserción."""

    envelope = WireAttributes(
        attributes=[
            WireAttribute(name=name, type=attr.type, value=attr.value)
            for name, attr in attributes.items()
        ]
    )
    return envelope.model_dump(by_alias=True)


def decode_attributes(envelope: WireAttributes) -> Attributes:
    """Construye un `Attributes` nuevo a partir de la lista del cable."""

    attributes = Attributes()
    for item in envelope.attributes:
        attributes.add(item.name, Attribute(type=item.type, value=item.value))
    return attributes


def decode_envelope(model: type[M], body: bytes) -> M:
    """Decodifica `body` en el envoltorio `model`.

    - Cuerpo que no es JSON -> `TransportError`.
    - JSON que no encaja en el envoltorio -> `DecodeError`.
    """

    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as exc:
        raise TransportError(f"response body is not JSON: {exc}") from exc

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"unexpected {model.__name__} shape: {exc}") from exc
