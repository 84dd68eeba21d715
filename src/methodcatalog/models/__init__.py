"""Entity tier models - descriptors, generated tiers, conversions and validation.

Each catalog entity has four projections of the same record:
- Record: identity and display fields, for lists and dropdowns
- Simple: related entities as bare foreign-key ids
- Intermediate: related entities as their Records
- Full: related entities as their Full forms
"""

from methodcatalog.models.convert import convert, to_full, to_intermediate, to_record, to_simple
from methodcatalog.models.display import SelectOption, display_string, options_for
from methodcatalog.models.entities import CATALOG, SCHEMAS
from methodcatalog.models.registry import CatalogRegistry
from methodcatalog.models.schema import DisplayRule, EntitySchema, RelationSpec, TextField, Tier
from methodcatalog.models.tiers import (
    CatalogModel,
    FullBase,
    IntermediateBase,
    RecordBase,
    SimpleBase,
    TierSet,
)
from methodcatalog.models.validation import collect_issues, is_valid, validate

__all__ = [
    # Descriptors
    "DisplayRule",
    "EntitySchema",
    "RelationSpec",
    "TextField",
    "Tier",
    # Tiers
    "CatalogModel",
    "FullBase",
    "IntermediateBase",
    "RecordBase",
    "SimpleBase",
    "TierSet",
    "CatalogRegistry",
    "CATALOG",
    "SCHEMAS",
    # Conversions
    "convert",
    "to_full",
    "to_intermediate",
    "to_record",
    "to_simple",
    # Validation
    "collect_issues",
    "is_valid",
    "validate",
    # Display
    "SelectOption",
    "display_string",
    "options_for",
]
