"""Modelo de atributos tipados.

Cada atributo se guarda como un par `(type, value)` donde `value` es siempre
la representación en texto que viaja por el cable. La inferencia de tipo
ocurre al añadir valores nativos y la decodificación al leerlos.

Contrato tolerante (heredado del broker original):
- `get_int` / `get_float` devuelven el valor cero con `present=True` cuando el
  texto guardado no se puede parsear. Con `strict=True` se lanza
  `AttributeDecodeError` en su lugar.
"""

from __future__ import annotations

import math
import re
import struct
from decimal import Decimal
from typing import Iterator, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field

from core.errors import AttributeDecodeError, UnsupportedType

STRING = "string"
INT = "int"
FLOAT = "float"

_INT_RE = re.compile(r"[+-]?[0-9]+")


class Attribute(BaseModel):
    """Valor etiquetado: tipo de cable + valor codificado como texto."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Etiqueta de tipo (string/int/float o una propia).")
    value: str = Field(..., description="Valor codificado como texto.")


def _to_single(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class Float32(float):
    """A float rounded to single precision; tagged "float" on the wire."""

    def __new__(cls, value: float = 0.0) -> "Float32":
        return super().__new__(cls, _to_single(float(value)))

    def __repr__(self) -> str:
        return f"Float32({format_float32(self)})"


AttributeValue = Union[str, int, Float32, float, Attribute]


def _format_non_finite(value: float) -> str | None:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return None


def _plain_decimal(shortest: str) -> str:
    # No exponent notation and no trailing zeros: 1e20 -> "100000000000000000000", 1.0 -> "1".
    return format(Decimal(shortest).normalize(), "f")


def format_float64(value: float) -> str:
    special = _format_non_finite(value)
    if special is not None:
        return special
    return _plain_decimal(repr(float(value)))


def format_float32(value: float) -> str:
    special = _format_non_finite(value)
    if special is not None:
        return special
    single = _to_single(float(value))
    for digits in range(1, 10):
        candidate = f"{single:.{digits}g}"
        if _to_single(float(candidate)) == single:
            return _plain_decimal(candidate)
    return _plain_decimal(repr(single))


def parse_int(raw: str) -> int | None:
    if _INT_RE.fullmatch(raw) is None:
        return None
    return int(raw)


def parse_float(raw: str) -> float | None:
    if raw != raw.strip() or "_" in raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def infer_attribute(name: str, value: object) -> Attribute:
    """Infiere la etiqueta de cable de un valor nativo.

    El orden importa: `bool` es subclase de `int` y `Float32` de `float`.
    """

    if isinstance(value, Attribute):
        return value
    if isinstance(value, bool):
        raise UnsupportedType(name, value)
    if isinstance(value, str):
        return Attribute(type=STRING, value=value)
    if isinstance(value, int):
        return Attribute(type=INT, value=str(value))
    if isinstance(value, Float32):
        return Attribute(type=FLOAT, value=format_float32(value))
    if isinstance(value, float):
        # FIXME: 64-bit floats are tagged "int", inherited from the broker's
        # reference client. Peers rely on this tag, so it is kept as is.
        return Attribute(type=INT, value=format_float64(value))
    raise UnsupportedType(name, value)


class Attributes:
    """Colección de atributos indexada por nombre (último en escribir gana)."""

    def __init__(self) -> None:
        self._values: dict[str, Attribute] = {}

    @classmethod
    def from_mapping(cls, values: Mapping[str, AttributeValue]) -> "Attributes":
        attrs = cls()
        for name, value in values.items():
            attrs.add(name, value)
        return attrs

    def add(self, name: str, value: AttributeValue) -> None:
        """Guarda `value` bajo `name`; lanza `UnsupportedType` sin mutar si el tipo no se acepta."""

        self._values[name] = infer_attribute(name, value)

    def get(self, name: str) -> tuple[Attribute | None, bool]:
        entry = self._values.get(name)
        return entry, entry is not None

    def get_string(self, name: str) -> tuple[str, bool]:
        entry = self._values.get(name)
        if entry is None:
            return "", False
        return entry.value, True

    def get_int(self, name: str, *, strict: bool = False) -> tuple[int, bool]:
        entry = self._values.get(name)
        if entry is None:
            return 0, False
        parsed = parse_int(entry.value)
        if parsed is None:
            if strict:
                raise AttributeDecodeError(name, INT, entry.value)
            return 0, True
        return parsed, True

    def get_float(self, name: str, *, strict: bool = False) -> tuple[float, bool]:
        entry = self._values.get(name)
        if entry is None:
            return 0.0, False
        parsed = parse_float(entry.value)
        if parsed is None:
            if strict:
                raise AttributeDecodeError(name, FLOAT, entry.value)
            return 0.0, True
        return parsed, True

    def items(self) -> Iterator[tuple[str, Attribute]]:
        return iter(self._values.items())

    def copy(self) -> "Attributes":
        clone = Attributes()
        clone._values = dict(self._values)
        return clone

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attributes):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v.type}:{v.value!r}" for k, v in self._values.items())
        return f"Attributes({inner})"
