"""CLI principal (Typer + Rich).

Comandos:
- `get`, `exists`, `list`, `create`, `update`, `delete` contra el broker.
- `doctor` para diagnóstico y configuración.

Los errores de la librería se muestran en rojo y terminan con código 1.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from itertools import islice
from pathlib import Path
from typing import Iterator, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_entities_json
from adapters.orion_client import OrionClient
from cli import doctor
from cli.ui_components import build_attributes_table, build_entities_table, build_error_panel
from core.config import AppSettings
from core.domain.attributes import FLOAT, INT, STRING, Attribute, Attributes, AttributeValue, Float32, parse_float, parse_int
from core.domain.models import ContextEntity, Page
from core.errors import IncompleteListing, OrionError

app = typer.Typer(no_args_is_help=True, help="Client for an NGSI v1 context broker.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def parse_attribute_option(raw: str) -> tuple[str, AttributeValue]:
    """Parsea `NAME[:TAG]=VALUE`.

    Sin etiqueta el valor es texto; `int`/`float` se validan y se guardan como
    nativos; cualquier otra etiqueta se envía tal cual.
    """

    if "=" not in raw:
        raise typer.BadParameter(f"expected NAME[:TAG]=VALUE, got {raw!r}")
    key, value = raw.split("=", 1)
    name, _, tag = key.partition(":")
    if not name:
        raise typer.BadParameter(f"attribute name is empty in {raw!r}")

    tag = tag or STRING
    if tag == STRING:
        return name, value
    if tag == INT:
        parsed_int = parse_int(value)
        if parsed_int is None:
            raise typer.BadParameter(f"{name}: {value!r} is not an int")
        return name, parsed_int
    if tag == FLOAT:
        parsed_float = parse_float(value)
        if parsed_float is None:
            raise typer.BadParameter(f"{name}: {value!r} is not a float")
        return name, Float32(parsed_float)
    return name, Attribute(type=tag, value=value)


def _build_entity(entity_type: str, entity_id: str, raw_attributes: list[str]) -> ContextEntity:
    attributes = Attributes()
    for raw in raw_attributes:
        name, value = parse_attribute_option(raw)
        attributes.add(name, value)
    return ContextEntity(entity_type, entity_id, attributes)


def _open_client(ctx: typer.Context) -> OrionClient:
    settings: AppSettings = ctx.obj
    return OrionClient(settings=settings)


@contextmanager
def _library_errors() -> Iterator[None]:
    try:
        yield
    except OrionError as exc:
        _console.print(build_error_panel(str(exc)))
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    ctx: typer.Context,
    broker_url: Optional[str] = typer.Option(None, "--broker-url", help="Broker base URL (overrides config)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request."),
) -> None:
    settings = AppSettings()
    if broker_url:
        settings = settings.model_copy(update={"broker_url": broker_url})
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@app.command()
def get(ctx: typer.Context, entity_type: str = typer.Argument(..., metavar="TYPE"), entity_id: str = typer.Argument(..., metavar="ID")) -> None:
    """Read one entity and print its attributes."""

    entity = ContextEntity(entity_type, entity_id)
    with _library_errors(), _open_client(ctx) as client:
        client.read(entity)
    _console.print(build_attributes_table(entity))


@app.command()
def exists(ctx: typer.Context, entity_type: str = typer.Argument(..., metavar="TYPE"), entity_id: str = typer.Argument(..., metavar="ID")) -> None:
    """Exit 0 if the entity exists, 1 otherwise."""

    with _open_client(ctx) as client:
        found = client.exists(entity_type, entity_id)
    _console.print("[green]exists[/green]" if found else "[yellow]not found[/yellow]")
    raise typer.Exit(code=0 if found else 1)


@app.command(name="list")
def list_entities(
    ctx: typer.Context,
    entity_type: str = typer.Argument(..., metavar="TYPE"),
    page: Optional[int] = typer.Option(None, "--page", min=0, help="Fetch a single page instead of everything."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Stop after N entities."),
    json_out: Optional[Path] = typer.Option(None, "--json-out", help="Also write the entities as JSON."),
) -> None:
    """List entities of TYPE (all pages unless --page is given)."""

    entities: list[ContextEntity] = []
    failure: OrionError | None = None
    with _open_client(ctx) as client:
        try:
            if page is not None:
                entities = client.list_page(entity_type, Page(page), ContextEntity)
            elif limit is not None:
                for entity in islice(client.iter_entities(entity_type, ContextEntity), limit):
                    entities.append(entity)
            else:
                entities = client.list_all(entity_type, ContextEntity)
        except IncompleteListing as exc:
            entities = exc.entities
            failure = exc
        except OrionError as exc:
            failure = exc

    if limit is not None:
        entities = entities[:limit]
    _console.print(build_entities_table(entities, title=f"{entity_type} ({len(entities)})"))
    if json_out is not None:
        path = export_entities_json(entities=entities, output_path=json_out)
        _console.print(f"[green]JSON written to:[/green] {path}")

    if failure is not None:
        _console.print(build_error_panel(str(failure)))
        raise typer.Exit(code=1)


_ATTRIBUTE_HELP = "Attribute as NAME[:TAG]=VALUE (TAG: string, int, float or custom). Repeatable."


@app.command()
def create(
    ctx: typer.Context,
    entity_type: str = typer.Argument(..., metavar="TYPE"),
    entity_id: str = typer.Argument(..., metavar="ID"),
    attribute: List[str] = typer.Option([], "--attribute", "-a", help=_ATTRIBUTE_HELP),
) -> None:
    """Create an entity with the given attributes."""

    entity = _build_entity(entity_type, entity_id, attribute)
    with _library_errors(), _open_client(ctx) as client:
        client.create(entity)
    _console.print(f"[green]created[/green] {entity_type}/{entity_id}")


@app.command()
def update(
    ctx: typer.Context,
    entity_type: str = typer.Argument(..., metavar="TYPE"),
    entity_id: str = typer.Argument(..., metavar="ID"),
    attribute: List[str] = typer.Option([], "--attribute", "-a", help=_ATTRIBUTE_HELP),
) -> None:
    """Replace the attributes of an entity."""

    entity = _build_entity(entity_type, entity_id, attribute)
    with _library_errors(), _open_client(ctx) as client:
        client.update(entity)
    _console.print(f"[green]updated[/green] {entity_type}/{entity_id}")


@app.command()
def delete(ctx: typer.Context, entity_type: str = typer.Argument(..., metavar="TYPE"), entity_id: str = typer.Argument(..., metavar="ID")) -> None:
    """Delete an entity."""

    entity = ContextEntity(entity_type, entity_id)
    with _library_errors(), _open_client(ctx) as client:
        client.delete(entity)
    _console.print(f"[green]deleted[/green] {entity_type}/{entity_id}")


def run() -> None:
    app()
