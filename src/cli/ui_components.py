"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.interfaces.entity import Entity


def build_attributes_table(entity: Entity) -> Table:
    """Tabla nombre/tipo/valor para una única entidad."""

    table = Table(title=f"{entity.type} / {entity.id}")
    table.add_column("Attribute", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Value", style="white")
    for name, attr in sorted(entity.attributes().items()):
        table.add_row(name, attr.type, attr.value)
    return table


def build_entities_table(entities: Iterable[Entity], *, title: str = "Entities") -> Table:
    table = Table(title=title)
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Id", style="white")
    table.add_column("Attributes", style="dim")
    for entity in entities:
        attrs = entity.attributes()
        summary = ", ".join(f"{name}={attr.value}" for name, attr in sorted(attrs.items()))
        table.add_row(entity.type, entity.id, summary)
    return table


def build_error_panel(message: str) -> Panel:
    return Panel(Text(message, style="red"), title="Error", border_style="red")
