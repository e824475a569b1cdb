"""Envoltorios JSON del broker (Pydantic v2).

Por qué modelos separados del dominio:
- Reflejan exactamente la forma del JSON de la API v1 (alias camelCase).
- Se descartan tras decodificar; nunca llegan al llamador.

Rarezas del cable que se conservan:
- `isPattern` es un booleano codificado como texto (`"true"`/`"false"`).
- `statusCode.code` es un entero codificado como texto (`"200"`).
- Claves ausentes decodifican a valores cero; listas `null` a listas vacías.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

_CODE_RE = re.compile(r"[0-9]+")


def parse_string_bool(raw: Any) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise ValueError(f'expected "true" or "false" as a string, got {raw!r}')


def parse_string_code(raw: Any) -> int:
    if not isinstance(raw, str) or _CODE_RE.fullmatch(raw) is None:
        raise ValueError(f"expected a non-negative integer encoded as a string, got {raw!r}")
    return int(raw)


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WireAttribute(WireModel):
    name: str = ""
    type: str = ""
    value: str = ""


class WireAttributes(WireModel):
    attributes: list[WireAttribute] = Field(default_factory=list)

    @field_validator("attributes", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value


class WireEntityId(WireModel):
    id: str = ""
    is_pattern: bool = Field(default=False, alias="isPattern")
    type: str = ""

    @field_validator("is_pattern", mode="before")
    @classmethod
    def _string_bool(cls, value: Any) -> bool:
        return parse_string_bool(value)

    @field_serializer("is_pattern")
    def _dump_string_bool(self, value: bool) -> str:
        return "true" if value else "false"


class WireStatus(WireModel):
    code: int = 0
    reason_phrase: str = Field(default="", alias="reasonPhrase")

    @field_validator("code", mode="before")
    @classmethod
    def _string_code(cls, value: Any) -> int:
        return parse_string_code(value)

    @field_serializer("code")
    def _dump_string_code(self, value: int) -> str:
        return str(value)


def _null_object(value: Any) -> Any:
    return {} if value is None else value


class WireAlteredElement(WireAttributes):
    """Un elemento de `contextResponses` en la respuesta de create/update."""

    status: WireStatus = Field(default_factory=WireStatus, alias="statusCode")

    @field_validator("status", mode="before")
    @classmethod
    def _null_status(cls, value: Any) -> Any:
        return _null_object(value)


class WireAlteredResponse(WireEntityId):
    context_responses: list[WireAlteredElement] = Field(default_factory=list, alias="contextResponses")

    @field_validator("context_responses", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value


class WireContextElement(WireAttributes, WireEntityId):
    """Atributos + identificador de entidad en un mismo objeto."""


class WireQueryElement(WireModel):
    """Respuesta de lectura individual (y cada elemento de un listado)."""

    context_element: WireContextElement = Field(default_factory=WireContextElement, alias="contextElement")
    status: WireStatus = Field(default_factory=WireStatus, alias="statusCode")

    @field_validator("context_element", "status", mode="before")
    @classmethod
    def _null_object(cls, value: Any) -> Any:
        return _null_object(value)


class WireQueryResponse(WireModel):
    context_responses: list[WireQueryElement] = Field(default_factory=list, alias="contextResponses")

    @field_validator("context_responses", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value
