"""Method catalog CLI - mcat command."""

from pathlib import Path

import click

from methodcatalog import __version__
from methodcatalog.cli.browse import entities_command, list_command, show_command
from methodcatalog.cli.edit import create_command, delete_command
from methodcatalog.config.loader import load_config
from methodcatalog.core.errors import ConfigError
from methodcatalog.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="mcat")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: .methodcatalog/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Method catalog - browse and edit the computational method catalog."""
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    configure_logging(config.logging, verbose=verbose)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(entities_command, name="entities")
cli.add_command(list_command, name="list")
cli.add_command(show_command, name="show")
cli.add_command(create_command, name="create")
cli.add_command(delete_command, name="delete")


if __name__ == "__main__":
    cli()
