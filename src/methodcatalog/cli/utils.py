"""CLI utilities."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import click

from methodcatalog.config.models import CatalogConfig
from methodcatalog.core.errors import CatalogError, RemoteIOError, ValidationError
from methodcatalog.core.logging import request_scope
from methodcatalog.models.entities import CATALOG

T = TypeVar("T")

ENTITY_ARG = click.Choice(CATALOG.keys(), case_sensitive=False)


def get_config(ctx: click.Context) -> CatalogConfig:
    return ctx.obj["config"]  # type: ignore[no-any-return]


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine under one request id, turning catalog errors into CLI errors.

    Raises:
        click.ClickException: On validation or remote failures
    """
    try:
        with request_scope():
            return asyncio.run(coro)
    except ValidationError as e:
        lines = [f"Invalid {e.details.get('entity')}:"]
        lines.extend(f"  - {issue}" for issue in e.issues)
        raise click.ClickException("\n".join(lines)) from e
    except RemoteIOError as e:
        raise click.ClickException(e.message) from e
    except CatalogError as e:
        raise click.ClickException(str(e)) from e


def parse_relation(value: str) -> tuple[str, int | None]:
    """Parse ``name=id``; an empty id or ``none`` clears an optional relation."""
    name, sep, raw = value.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"expected RELATION=ID, got {value!r}", param_hint="--relation")
    raw = raw.strip()
    if raw.lower() in ("", "none", "null"):
        return name.strip(), None
    try:
        return name.strip(), int(raw)
    except ValueError:
        raise click.BadParameter(f"id must be an integer, got {raw!r}", param_hint="--relation") from None
