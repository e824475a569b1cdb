"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y logging para todas las llamadas al broker.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx

from core.config import AppSettings
from core.errors import TransportError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    Por qué un builder:
    - Centraliza timeout/User-Agent/Accept para que todas las operaciones se
      comporten igual.
    - `transport` permite sustituir la red por un broker falso en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": JSON_CONTENT_TYPE,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )


def send_json(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    body: Any = None,
    params: Mapping[str, Any] | None = None,
) -> bytes:
    """Envía una petición y devuelve el cuerpo crudo de la respuesta.

    El status HTTP no se interpreta: el broker embebe su propio `statusCode`
    en el JSON. Fallos de red, URLs inválidas y errores de stream se
    traducen a `TransportError`.
    """

    headers = {"Accept": JSON_CONTENT_TYPE}
    content: bytes | None = None
    if body is not None:
        headers["Content-Type"] = JSON_CONTENT_TYPE
        content = json.dumps(body).encode("utf-8")

    logger.debug("%s %s params=%s", method, url, dict(params) if params else {})
    try:
        response = client.request(method, url, content=content, headers=headers, params=params)
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
        raise TransportError(f"{method} {url} failed: {exc}") from exc

    logger.debug("%s %s -> HTTP %s (%d bytes)", method, url, response.status_code, len(response.content))
    return response.content
