"""Tier model base classes and the descriptor-driven class builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from methodcatalog.models.schema import EntitySchema, Tier


class CatalogModel(BaseModel):
    """Common base of every generated tier class."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    entity: ClassVar[EntitySchema]
    tier: ClassVar[Tier]
    tier_set: ClassVar[TierSet]

    id: int = 0

    @property
    def is_persisted(self) -> bool:
        return self.id > 0

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the service's camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    def __str__(self) -> str:
        from methodcatalog.models.display import display_string

        return display_string(self)


class RecordBase(CatalogModel):
    """Identity and display fields only."""

    model_config = ConfigDict(frozen=True, validate_assignment=False)

    tier: ClassVar[Tier] = Tier.RECORD


class DetailBase(CatalogModel):
    """Fields shared by the Simple, Intermediate and Full tiers."""

    description_rtf: str | None = None
    description_text: str | None = None
    created_date: datetime | None = None
    last_updated_date: datetime | None = None
    archived: bool = False


class SimpleBase(DetailBase):
    tier: ClassVar[Tier] = Tier.SIMPLE


class IntermediateBase(DetailBase):
    tier: ClassVar[Tier] = Tier.INTERMEDIATE


class FullBase(DetailBase):
    tier: ClassVar[Tier] = Tier.FULL


DETAIL_FIELDS: tuple[str, ...] = (
    "description_rtf",
    "description_text",
    "created_date",
    "last_updated_date",
    "archived",
)


@dataclass(eq=False)
class TierSet:
    """The four generated classes of one entity, plus its relation targets."""

    schema: EntitySchema
    record: type[RecordBase]
    simple: type[SimpleBase]
    intermediate: type[IntermediateBase]
    full: type[FullBase]
    related: dict[str, TierSet] = field(default_factory=dict)

    def by_tier(self, tier: Tier) -> type[CatalogModel]:
        return {
            Tier.RECORD: self.record,
            Tier.SIMPLE: self.simple,
            Tier.INTERMEDIATE: self.intermediate,
            Tier.FULL: self.full,
        }[tier]

    def owns(self, model: object) -> bool:
        return isinstance(model, CatalogModel) and type(model).tier_set is self


def _display_annotations(schema: EntitySchema) -> tuple[dict[str, Any], dict[str, Any]]:
    annotations: dict[str, Any] = {}
    defaults: dict[str, Any] = {}
    for name in schema.display_fields:
        spec = schema.field(name)
        if spec.required:
            annotations[name] = str
            defaults[name] = Field(default="", description=spec.label)
        else:
            annotations[name] = str | None
            defaults[name] = Field(default=None, description=spec.label)
    return annotations, defaults


def _make_class(
    schema: EntitySchema,
    base: type[CatalogModel],
    suffix: str,
    annotations: dict[str, Any],
    defaults: dict[str, Any],
) -> type[Any]:
    name = f"{schema.class_prefix}{suffix}"
    namespace: dict[str, Any] = {
        "__module__": __name__,
        "__qualname__": name,
        "__doc__": f"{schema.label} ({suffix.lower() or 'record'} tier).",
        "__annotations__": annotations,
        "entity": schema,
        **defaults,
    }
    return type(name, (base,), namespace)


def build_tier_set(schema: EntitySchema, related: dict[str, TierSet]) -> TierSet:
    """Generate the four tier classes of ``schema``.

    ``related`` maps each relation name to the already-built tier set of its
    target entity.
    """
    display_ann, display_defaults = _display_annotations(schema)

    simple_ann = dict(display_ann)
    simple_defaults = dict(display_defaults)
    intermediate_ann = dict(display_ann)
    intermediate_defaults = dict(display_defaults)
    full_ann = dict(display_ann)
    full_defaults = dict(display_defaults)

    for rel in schema.relations:
        target = related[rel.name]
        if rel.required:
            simple_ann[rel.id_field] = int
            simple_defaults[rel.id_field] = Field(default=0, description=rel.label)
            intermediate_ann[rel.name] = target.record
            intermediate_defaults[rel.name] = Field(description=rel.label)
            full_ann[rel.name] = target.full
            full_defaults[rel.name] = Field(description=rel.label)
        else:
            simple_ann[rel.id_field] = int | None
            simple_defaults[rel.id_field] = Field(default=None, description=rel.label)
            intermediate_ann[rel.name] = target.record | None
            intermediate_defaults[rel.name] = Field(default=None, description=rel.label)
            full_ann[rel.name] = target.full | None
            full_defaults[rel.name] = Field(default=None, description=rel.label)

    tier_set = TierSet(
        schema=schema,
        record=_make_class(schema, RecordBase, "Record", display_ann, display_defaults),
        simple=_make_class(schema, SimpleBase, "Simple", simple_ann, simple_defaults),
        intermediate=_make_class(
            schema, IntermediateBase, "Intermediate", intermediate_ann, intermediate_defaults
        ),
        full=_make_class(schema, FullBase, "Full", full_ann, full_defaults),
        related=dict(related),
    )
    for tier in Tier:
        tier_set.by_tier(tier).tier_set = tier_set
    return tier_set
