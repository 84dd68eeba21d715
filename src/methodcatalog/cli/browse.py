"""mcat entities / list / show commands - read-only views of the catalog."""

import click
from rich.console import Console
from rich.table import Table

from methodcatalog.cli.utils import ENTITY_ARG, get_config, run
from methodcatalog.client.endpoint import CatalogClient
from methodcatalog.models.display import display_string
from methodcatalog.models.entities import CATALOG
from methodcatalog.models.tiers import CatalogModel, FullBase


@click.command()
def entities_command() -> None:
    """List the catalog entities and their relations."""
    table = Table(title="Catalog entities")
    table.add_column("Entity", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Resource", style="dim")
    table.add_column("Relations")
    for tier_set in CATALOG:
        schema = tier_set.schema
        relations = ", ".join(
            rel.name if rel.required else f"{rel.name}?" for rel in schema.relations
        )
        table.add_row(schema.key, schema.label, schema.resource, relations or "-")
    Console().print(table)


@click.command()
@click.argument("entity", type=ENTITY_ARG)
@click.option("--archived/--no-archived", default=True, help="Include archived records")
@click.pass_context
def list_command(ctx: click.Context, entity: str, archived: bool) -> None:
    """List ENTITY records as id and display caption."""
    config = get_config(ctx)

    async def _list() -> list[CatalogModel]:
        async with CatalogClient(config.api) as client:
            endpoint = client.endpoint(entity)
            if archived:
                return await endpoint.get_list() or []
            return [r for r in await endpoint.get_all_simple() or [] if not r.archived]

    records = run(_list())
    schema = CATALOG.schema(entity)
    table = Table(title=schema.label)
    table.add_column("Id", justify="right", style="cyan")
    table.add_column(schema.label)
    for record in records:
        table.add_row(str(record.id), display_string(record))
    console = Console()
    console.print(table)
    if not records:
        console.print("[dim]No records[/dim]")


@click.command()
@click.argument("entity", type=ENTITY_ARG)
@click.argument("item_id", type=int)
@click.pass_context
def show_command(ctx: click.Context, entity: str, item_id: int) -> None:
    """Show one ENTITY record with its related records."""
    config = get_config(ctx)

    async def _show() -> FullBase | None:
        async with CatalogClient(config.api) as client:
            return await client.endpoint(entity).get_by_id(item_id)

    item = run(_show())
    if item is None:
        raise click.ClickException(f"{CATALOG.schema(entity).label} {item_id} was not found")

    table = Table(title=f"{item.entity.label} {item.id}: {display_string(item)}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for name in item.entity.display_fields:
        table.add_row(name, getattr(item, name) or "")
    for rel in item.entity.relations:
        related = getattr(item, rel.name)
        table.add_row(rel.name, f"{related.id}: {display_string(related)}" if related else "-")
    table.add_row("description", item.description_text or "")
    table.add_row("created", str(item.created_date or "-"))
    table.add_row("updated", str(item.last_updated_date or "-"))
    table.add_row("archived", "yes" if item.archived else "no")
    Console().print(table)
