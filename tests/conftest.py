"""Fixtures compartidos: un broker falso sobre `httpx.MockTransport`."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.orion_client import OrionClient

BROKER_URL = "http://broker.test"

Handler = Callable[[httpx.Request], httpx.Response]


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


def status(code: int, reason: str = "OK") -> dict[str, str]:
    return {"code": str(code), "reasonPhrase": reason}


def context_element(entity_type: str, entity_id: str, attributes: list[dict[str, str]] | None = None) -> dict[str, Any]:
    return {
        "type": entity_type,
        "id": entity_id,
        "isPattern": "false",
        "attributes": attributes or [],
    }


class FakeBroker:
    """Registra cada petición y delega la respuesta en `handler`."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self) -> OrionClient:
        http = httpx.Client(transport=httpx.MockTransport(self))
        return OrionClient(BROKER_URL, http_client=http)


@pytest.fixture
def fake_broker() -> Callable[[Handler], FakeBroker]:
    return FakeBroker
