from __future__ import annotations

import json

from adapters.json_exporter import export_entities_json
from core.domain.attributes import Attributes, Float32
from core.domain.models import ContextEntity


def test_export_is_stable_and_sorted(tmp_path):
    entities = [
        ContextEntity("Lamp", "lamp1", Attributes.from_mapping({"z": "last", "a": 1})),
        ContextEntity("Lamp", "lamp2", Attributes.from_mapping({"t": Float32(0.5)})),
    ]
    out = export_entities_json(entities=entities, output_path=tmp_path / "out" / "lamps.json")

    text = out.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert text.index('"a"') < text.index('"z"')
    assert json.loads(text) == [
        {
            "attributes": {"a": {"type": "int", "value": "1"}, "z": {"type": "string", "value": "last"}},
            "id": "lamp1",
            "type": "Lamp",
        },
        {"attributes": {"t": {"type": "float", "value": "0.5"}}, "id": "lamp2", "type": "Lamp"},
    ]
