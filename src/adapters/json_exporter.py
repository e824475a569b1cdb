"""Exportación JSON de entidades.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Permite volcar un listado del broker sin depender de la CLI.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from core.interfaces.entity import Entity


def entity_to_dict(entity: Entity) -> dict[str, Any]:
    return {
        "type": entity.type,
        "id": entity.id,
        "attributes": {
            name: {"type": attr.type, "value": attr.value}
            for name, attr in entity.attributes().items()
        },
    }


def export_entities_json(*, entities: Iterable[Entity], output_path: Path) -> Path:
    """Exporta entidades a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [entity_to_dict(entity) for entity in entities]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
