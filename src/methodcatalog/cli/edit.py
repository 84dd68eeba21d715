"""mcat create / delete commands."""

from html import escape

import click
import questionary
from rich.console import Console

from methodcatalog.cli.utils import ENTITY_ARG, get_config, parse_relation, run
from methodcatalog.client.endpoint import CatalogClient
from methodcatalog.models.display import display_string
from methodcatalog.models.entities import CATALOG
from methodcatalog.models.tiers import FullBase
from methodcatalog.richtext import HtmlRichTextConverter


@click.command()
@click.argument("entity", type=ENTITY_ARG)
@click.option("--name", default=None, help="Display name")
@click.option("--keyword", default=None, help="Keyword")
@click.option("--description", default=None, help="Plain-text description")
@click.option(
    "--relation",
    "relations",
    multiple=True,
    metavar="RELATION=ID",
    help="Related record id, e.g. method_family=3 (repeatable)",
)
@click.pass_context
def create_command(
    ctx: click.Context,
    entity: str,
    name: str | None,
    keyword: str | None,
    description: str | None,
    relations: tuple[str, ...],
) -> None:
    """Create an ENTITY record.

    The record is validated locally before anything is sent.
    """
    config = get_config(ctx)
    tier_set = CATALOG.tiers(entity)
    schema = tier_set.schema

    values: dict[str, object] = {}
    for field_name, value in (("name", name), ("keyword", keyword)):
        if value is None:
            continue
        if field_name not in schema.display_fields:
            raise click.UsageError(f"{schema.label} has no {field_name}")
        values[field_name] = value

    if description:
        richtext = HtmlRichTextConverter()
        html_text = f"<p>{escape(description)}</p>"
        values["description_rtf"] = richtext.html_to_rich(html_text)
        values["description_text"] = richtext.html_to_plain_text(html_text)

    for raw in relations:
        rel_name, rel_id = parse_relation(raw)
        try:
            rel = schema.relation(rel_name)
        except KeyError:
            raise click.BadParameter(
                f"{schema.label} has no relation {rel_name!r}", param_hint="--relation"
            ) from None
        values[rel.id_field] = rel_id if rel_id is not None or not rel.required else 0

    item = tier_set.simple(**values)

    async def _create() -> FullBase | None:
        async with CatalogClient(config.api) as client:
            return await client.endpoint(entity).create(item)

    created = run(_create())
    console = Console()
    if created is None:
        console.print(f"[yellow]Created[/yellow] {schema.label} (the service returned no record)")
        return
    console.print(f"[green]✓[/green] Created {schema.label} {created.id}: {display_string(created)}")


@click.command()
@click.argument("entity", type=ENTITY_ARG)
@click.argument("item_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_command(ctx: click.Context, entity: str, item_id: int, yes: bool) -> None:
    """Archive an ENTITY record. Archived records stay retrievable by id."""
    config = get_config(ctx)
    schema = CATALOG.schema(entity)

    if not yes:
        confirmed = questionary.confirm(
            f"Archive {schema.label} {item_id}?",
            default=False,
        ).ask()
        if not confirmed:
            Console().print("[dim]Cancelled[/dim]")
            return

    async def _delete() -> None:
        async with CatalogClient(config.api) as client:
            await client.endpoint(entity).delete(item_id)

    run(_delete())
    Console().print(f"[green]✓[/green] Archived {schema.label} {item_id}")
