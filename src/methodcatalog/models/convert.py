"""Tier-to-tier conversions.

Every conversion is implemented once against the entity descriptor and works
for every generated tier class. Conversions are pure: the source model is
never mutated and the result is a new instance.

Promotion (Simple or Intermediate to a richer tier) needs the related objects
the source only references by id. The caller passes them as keyword arguments
named after the relation, e.g. ``to_full(simple, method_family=family_full)``.
"""

from __future__ import annotations

from typing import Any

from methodcatalog.core.errors import ConversionError
from methodcatalog.models.schema import Tier
from methodcatalog.models.tiers import (
    DETAIL_FIELDS,
    CatalogModel,
    FullBase,
    IntermediateBase,
    RecordBase,
    SimpleBase,
    TierSet,
)


def _tier_set(model: CatalogModel) -> TierSet:
    return type(model).tier_set


def _shared_values(model: CatalogModel, include_detail: bool) -> dict[str, Any]:
    entity = model.entity
    values: dict[str, Any] = {"id": model.id}
    for name in entity.display_fields:
        values[name] = getattr(model, name)
    if include_detail:
        for name in DETAIL_FIELDS:
            values[name] = getattr(model, name)
    return values


def _relation_ids(model: CatalogModel) -> dict[str, int | None]:
    """Foreign-key ids of ``model`` keyed by relation name, whatever its tier."""
    ids: dict[str, int | None] = {}
    for rel in model.entity.relations:
        if isinstance(model, SimpleBase):
            ids[rel.name] = getattr(model, rel.id_field)
        else:
            related = getattr(model, rel.name)
            ids[rel.name] = related.id if related is not None else None
    return ids


def _resolve(
    model: CatalogModel,
    target: Tier,
    supplied: dict[str, Any],
    fallback: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Match supplied related objects against the source's foreign keys."""
    tier_set = _tier_set(model)
    entity = model.entity
    unknown = [name for name in supplied if name not in {r.name for r in entity.relations}]
    if unknown:
        raise ConversionError.unknown_relation(entity.key, unknown)

    ids = _relation_ids(model)
    resolved: dict[str, Any] = {}
    for rel in entity.relations:
        expected_id = ids[rel.name]
        obj = supplied.get(rel.name)
        if obj is None and fallback is not None:
            obj = fallback.get(rel.name)

        if expected_id is None:
            if obj is not None:
                raise ConversionError.mismatched_relation(entity.key, rel.name, None, obj.id)
            resolved[rel.name] = None
            continue
        if obj is None:
            raise ConversionError.missing_relation(entity.key, rel.name, target.value)

        expected_cls = tier_set.related[rel.name].by_tier(target)
        if type(obj) is not expected_cls:
            raise ConversionError.mismatched_relation(
                entity.key, rel.name, expected_id, type(obj).__name__
            )
        if obj.id != expected_id:
            raise ConversionError.mismatched_relation(entity.key, rel.name, expected_id, obj.id)
        resolved[rel.name] = obj
    return resolved


def to_record(model: CatalogModel) -> RecordBase:
    """Project any tier onto its Record. Lossy and idempotent."""
    tier_set = _tier_set(model)
    if isinstance(model, RecordBase):
        return model
    return tier_set.record(**_shared_values(model, include_detail=False))


def to_simple(model: CatalogModel) -> SimpleBase:
    """Flatten embedded relations into foreign-key ids."""
    tier_set = _tier_set(model)
    if isinstance(model, RecordBase):
        raise ConversionError.unsupported_tier(model.entity.key, Tier.RECORD.value, Tier.SIMPLE.value)
    if isinstance(model, SimpleBase):
        return model.model_copy(deep=True)
    values = _shared_values(model, include_detail=True)
    ids = _relation_ids(model)
    for rel in model.entity.relations:
        values[rel.id_field] = ids[rel.name]
    return tier_set.simple(**values)


def _embedded(model: CatalogModel, as_record: bool) -> dict[str, Any]:
    embedded: dict[str, Any] = {}
    for rel in model.entity.relations:
        obj = getattr(model, rel.name)
        if obj is not None:
            embedded[rel.name] = to_record(obj) if as_record else obj.model_copy(deep=True)
    return embedded


def to_intermediate(model: CatalogModel, **related_records: RecordBase) -> IntermediateBase:
    """Build the Intermediate tier.

    A Simple source needs the related Records. Intermediate and Full sources
    carry their related objects already and need no extra inputs; anything
    supplied for them is checked against what they embed.
    """
    tier_set = _tier_set(model)
    entity = model.entity
    if isinstance(model, RecordBase):
        raise ConversionError.unsupported_tier(
            entity.key, Tier.RECORD.value, Tier.INTERMEDIATE.value
        )
    fallback = None
    if isinstance(model, (IntermediateBase, FullBase)):
        fallback = _embedded(model, as_record=True)
    values = _shared_values(model, include_detail=True)
    values.update(_resolve(model, Tier.RECORD, related_records, fallback))
    return tier_set.intermediate(**values)


def to_full(model: CatalogModel, **related_full: FullBase) -> FullBase:
    """Promote a Simple or Intermediate to Full by attaching related Full objects."""
    tier_set = _tier_set(model)
    entity = model.entity
    if isinstance(model, RecordBase):
        raise ConversionError.unsupported_tier(entity.key, Tier.RECORD.value, Tier.FULL.value)
    fallback = _embedded(model, as_record=False) if isinstance(model, FullBase) else None
    values = _shared_values(model, include_detail=True)
    values.update(_resolve(model, Tier.FULL, related_full, fallback))
    return tier_set.full(**values)


def convert(model: CatalogModel, target: Tier, **related: CatalogModel) -> CatalogModel:
    """Dispatch to the converter for ``target``."""
    if target is Tier.RECORD:
        if related:
            raise ConversionError.unknown_relation(model.entity.key, list(related))
        return to_record(model)
    if target is Tier.SIMPLE:
        if related:
            raise ConversionError.unknown_relation(model.entity.key, list(related))
        return to_simple(model)
    if target is Tier.INTERMEDIATE:
        return to_intermediate(model, **related)  # type: ignore[arg-type]
    return to_full(model, **related)  # type: ignore[arg-type]
