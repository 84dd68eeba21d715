"""Field rules shared by every tier of an entity."""

from __future__ import annotations

from methodcatalog.core.errors import FieldIssue, ValidationError
from methodcatalog.models.tiers import CatalogModel, DetailBase, SimpleBase


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def collect_issues(model: CatalogModel) -> list[FieldIssue]:
    """Return every rule violation of ``model`` without raising."""
    entity = model.entity
    issues: list[FieldIssue] = []

    for spec in entity.fields:
        if spec.name == "description_text" and not isinstance(model, DetailBase):
            continue
        value = getattr(model, spec.name, None)
        if spec.required and _blank(value):
            issues.append(FieldIssue(spec.name, f"{spec.label} is required"))
        elif value is not None and len(value) > spec.max_length:
            issues.append(
                FieldIssue(spec.name, f"{spec.label} must be at most {spec.max_length} characters")
            )

    if entity.requires_name_or_keyword and all(
        _blank(getattr(model, name)) for name in entity.display_fields
    ):
        issues.append(FieldIssue("name", "Either Name or Keyword must be provided"))

    for rel in entity.relations:
        if isinstance(model, SimpleBase):
            rel_id = getattr(model, rel.id_field)
            field_name = rel.id_field
        elif isinstance(model, DetailBase):
            related = getattr(model, rel.name)
            rel_id = related.id if related is not None else None
            field_name = rel.name
        else:
            continue
        if rel_id is None:
            if rel.required:
                issues.append(FieldIssue(field_name, f"{rel.label} is required"))
        elif rel_id <= 0:
            message = f"{rel.label} is required" if rel.required else f"{rel.label} is not a valid selection"
            issues.append(FieldIssue(field_name, message))

    return issues


def validate(model: CatalogModel) -> None:
    """Raise ``ValidationError`` listing every violation of ``model``."""
    issues = collect_issues(model)
    if issues:
        raise ValidationError.from_issues(model.entity.key, issues)


def is_valid(model: CatalogModel) -> bool:
    return not collect_issues(model)
