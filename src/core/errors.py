"""Taxonomía de errores del cliente.

Todas las excepciones heredan de `OrionError`, de modo que un llamador puede
capturar cualquier fallo de la librería con un único `except`.
"""

from __future__ import annotations

from typing import Any


class OrionError(Exception):
    """Base exception for every error raised by the broker client."""


class TransportError(OrionError):
    """Network/connection failure, or a response body that is not JSON."""


class DecodeError(OrionError):
    """The JSON body does not match the expected envelope shape."""


class UnsupportedType(OrionError, TypeError):
    """A native value of an unrecognized type was given to `Attributes.add`."""

    def __init__(self, name: str, value: object) -> None:
        self.name = name
        self.value = value
        super().__init__(
            f"unsupported implicit type {type(value).__name__!r} for attribute {name!r}"
        )


class AttributeDecodeError(OrionError, ValueError):
    """Raised by strict accessors when a stored value cannot be parsed."""

    def __init__(self, name: str, expected: str, raw: str) -> None:
        self.name = name
        self.expected = expected
        self.raw = raw
        super().__init__(f"attribute {name!r} value {raw!r} is not a valid {expected}")


class OperationFailed(OrionError):
    """The broker answered with an embedded status code other than 200."""

    def __init__(self, code: int, message: str, *, operation: str = "operation") -> None:
        self.code = code
        self.message = message
        self.operation = operation
        super().__init__(f"entity {operation} failed. code={code} message={message}")


class UnexpectedResult(OrionError):
    """A syntactically valid but empty success envelope (no context responses)."""


class IncompleteListing(OrionError):
    """A paginated listing stopped on an error.

    `entities` holds everything collected before the failing page and `page`
    is the cursor whose fetch failed. The original error is chained as
    `__cause__`.
    """

    def __init__(self, entities: list[Any], page: Any, error: BaseException) -> None:
        self.entities = entities
        self.page = page
        self.error = error
        super().__init__(
            f"listing stopped at page {page} after {len(entities)} entities: {error}"
        )
