"""Entity schema descriptors.

A descriptor lists an entity's text fields, its relations and its display rule.
Tier classes, conversions, validation and display formatting are all driven
from these descriptors, so adding an entity means adding one descriptor.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Tier(str, Enum):
    """The four projections of a catalog entity."""

    RECORD = "record"
    SIMPLE = "simple"
    INTERMEDIATE = "intermediate"
    FULL = "full"


class DisplayRule(Enum):
    """How an entity renders in list rows and dropdown captions."""

    NAME_OR_KEYWORD = "name_or_keyword"  # "Name/Keyword", falling back to either
    NAME_WITH_KEYWORD = "name_with_keyword"  # "Name (Keyword)", both mandatory
    NAME = "name"
    KEYWORD = "keyword"


DISPLAY_FIELDS: dict[DisplayRule, tuple[str, ...]] = {
    DisplayRule.NAME_OR_KEYWORD: ("name", "keyword"),
    DisplayRule.NAME_WITH_KEYWORD: ("name", "keyword"),
    DisplayRule.NAME: ("name",),
    DisplayRule.KEYWORD: ("keyword",),
}


def pascal_case(snake: str) -> str:
    return "".join(part.capitalize() for part in snake.split("_"))


def camel_case(snake: str) -> str:
    pascal = pascal_case(snake)
    return pascal[:1].lower() + pascal[1:]


@dataclass(frozen=True, slots=True)
class TextField:
    """A length-limited string field."""

    name: str
    label: str
    max_length: int
    required: bool = False


@dataclass(frozen=True, slots=True)
class RelationSpec:
    """A foreign key from one entity to another."""

    name: str
    target: str
    label: str
    required: bool = True
    route_segment: str | None = None

    @property
    def id_field(self) -> str:
        """Attribute holding the bare foreign key in the Simple tier."""
        return f"{self.name}_id"

    @property
    def segment(self) -> str:
        """Path segment used by the service's relation filter routes."""
        return self.route_segment or pascal_case(self.name)

    @property
    def query_param(self) -> str:
        return f"{camel_case(self.name)}Id"


@dataclass(frozen=True, slots=True)
class EntitySchema:
    """Descriptor for one catalog entity."""

    key: str
    label: str
    resource: str
    display: DisplayRule
    fields: tuple[TextField, ...]
    relations: tuple[RelationSpec, ...] = ()
    # Tiers the service lists on their own sub-route (List, Simple, Intermediate).
    # The others are projected from the Full list at GET {resource}.
    routed_tiers: frozenset[Tier] = frozenset({Tier.RECORD})

    @property
    def display_fields(self) -> tuple[str, ...]:
        return DISPLAY_FIELDS[self.display]

    @property
    def requires_name_or_keyword(self) -> bool:
        return self.display is DisplayRule.NAME_OR_KEYWORD

    @property
    def class_prefix(self) -> str:
        return pascal_case(self.key)

    def field(self, name: str) -> TextField:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"{self.key} has no field {name!r}")

    def relation(self, name: str) -> RelationSpec:
        for spec in self.relations:
            if spec.name == name:
                return spec
        raise KeyError(f"{self.key} has no relation {name!r}")

    def __post_init__(self) -> None:
        names = {f.name for f in self.fields}
        missing = [f for f in self.display_fields if f not in names]
        if missing:
            raise ValueError(f"{self.key}: display fields {missing} have no TextField")
        if "description_text" not in names:
            raise ValueError(f"{self.key}: description_text must be declared")
        if Tier.FULL in self.routed_tiers:
            raise ValueError(f"{self.key}: the Full list is always served at the resource root")
