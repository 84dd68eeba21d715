"""Presentation strings for list rows and dropdown captions."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from methodcatalog.models.schema import DisplayRule
from methodcatalog.models.tiers import CatalogModel

NONE_OPTION_TEXT = "(none)"


def _text(value: str | None) -> str:
    if value is None:
        return ""
    return value.strip()


def display_string(model: CatalogModel) -> str:
    """Format ``model`` according to its entity's display rule.

    The result is the same for every tier of a given record.
    """
    rule = model.entity.display
    if rule is DisplayRule.NAME:
        return _text(model.name)  # type: ignore[attr-defined]
    if rule is DisplayRule.KEYWORD:
        return _text(model.keyword)  # type: ignore[attr-defined]

    name = _text(model.name)  # type: ignore[attr-defined]
    keyword = _text(model.keyword)  # type: ignore[attr-defined]
    if rule is DisplayRule.NAME_WITH_KEYWORD:
        return f"{name} ({keyword})"
    if not name:
        return keyword
    if not keyword:
        return name
    return f"{name}/{keyword}"


@dataclass(frozen=True, slots=True)
class SelectOption:
    """One dropdown entry. ``value`` is ``None`` for the "no selection" entry."""

    value: int | None
    text: str
    selected: bool = False


def options_for(
    records: Iterable[CatalogModel],
    selected_id: int | None = None,
    optional: bool = False,
) -> list[SelectOption]:
    """Build dropdown options from Records, preserving their order."""
    options: list[SelectOption] = []
    if optional:
        options.append(SelectOption(None, NONE_OPTION_TEXT, selected=selected_id is None))
    for record in records:
        options.append(
            SelectOption(record.id, display_string(record), selected=record.id == selected_id)
        )
    return options
