"""The method catalog's entity descriptors."""

from methodcatalog.models.registry import CatalogRegistry
from methodcatalog.models.schema import DisplayRule, EntitySchema, RelationSpec, TextField, Tier

ALL_SUB_ROUTES = frozenset({Tier.RECORD, Tier.SIMPLE, Tier.INTERMEDIATE})

SPIN_STATE = EntitySchema(
    key="spin_state",
    label="Spin State",
    resource="SpinStates",
    display=DisplayRule.NAME_OR_KEYWORD,
    fields=(
        TextField("name", "Name", 50),
        TextField("keyword", "Keyword", 20),
        TextField("description_text", "Description", 2000),
    ),
)

ELECTRONIC_STATE = EntitySchema(
    key="electronic_state",
    label="Electronic State",
    resource="ElectronicStates",
    display=DisplayRule.NAME_OR_KEYWORD,
    fields=(
        TextField("name", "Name", 200),
        TextField("keyword", "Keyword", 50),
        TextField("description_text", "Description", 4000),
    ),
)

METHOD_FAMILY = EntitySchema(
    key="method_family",
    label="Method Family",
    resource="MethodFamilies",
    display=DisplayRule.NAME,
    fields=(
        TextField("name", "Name", 200, required=True),
        TextField("description_text", "Description", 2000),
    ),
)

CALCULATION_TYPE = EntitySchema(
    key="calculation_type",
    label="Calculation Type",
    resource="CalculationTypes",
    display=DisplayRule.NAME_WITH_KEYWORD,
    fields=(
        TextField("name", "Name", 200, required=True),
        TextField("keyword", "Keyword", 20, required=True),
        TextField("description_text", "Description", 2000),
    ),
    routed_tiers=frozenset(),
)

BASE_METHOD = EntitySchema(
    key="base_method",
    label="Base Method",
    resource="BaseMethods",
    display=DisplayRule.KEYWORD,
    fields=(
        TextField("keyword", "Keyword", 50, required=True),
        TextField("description_text", "Description", 4000),
    ),
    relations=(
        RelationSpec("method_family", "method_family", "Method Family", route_segment="Family"),
    ),
    routed_tiers=frozenset({Tier.SIMPLE, Tier.INTERMEDIATE}),
)

ELECTRONIC_STATE_METHOD_FAMILY = EntitySchema(
    key="electronic_state_method_family",
    label="Electronic State / Method Family",
    resource="ElectronicStatesMethodFamilies",
    display=DisplayRule.NAME_OR_KEYWORD,
    fields=(
        TextField("name", "Name", 100),
        TextField("keyword", "Keyword", 20),
        TextField("description_text", "Description", 2000),
    ),
    relations=(
        RelationSpec("electronic_state", "electronic_state", "Electronic State"),
        RelationSpec("method_family", "method_family", "Method Family", required=False),
    ),
    routed_tiers=ALL_SUB_ROUTES,
)

SPIN_STATE_ELECTRONIC_STATE_METHOD_FAMILY = EntitySchema(
    key="spin_state_electronic_state_method_family",
    label="Spin State / Electronic State / Method Family",
    resource="SpinStatesElectronicStatesMethodFamilies",
    display=DisplayRule.NAME_OR_KEYWORD,
    fields=(
        TextField("name", "Name", 200),
        TextField("keyword", "Keyword", 50),
        TextField("description_text", "Description", 4000),
    ),
    relations=(
        RelationSpec("spin_state", "spin_state", "Spin State", required=False),
        RelationSpec(
            "electronic_state_method_family",
            "electronic_state_method_family",
            "Electronic State / Method Family",
        ),
    ),
    routed_tiers=ALL_SUB_ROUTES,
)

FULL_METHOD = EntitySchema(
    key="full_method",
    label="Full Method",
    resource="FullMethods",
    display=DisplayRule.KEYWORD,
    fields=(
        TextField("keyword", "Keyword", 50, required=True),
        TextField("description_text", "Description", 4000),
    ),
    relations=(
        RelationSpec(
            "spin_state_electronic_state_method_family",
            "spin_state_electronic_state_method_family",
            "Spin State / Electronic State / Method Family",
        ),
        RelationSpec("base_method", "base_method", "Base Method"),
    ),
    routed_tiers=ALL_SUB_ROUTES,
)

SCHEMAS: tuple[EntitySchema, ...] = (
    SPIN_STATE,
    ELECTRONIC_STATE,
    METHOD_FAMILY,
    CALCULATION_TYPE,
    BASE_METHOD,
    ELECTRONIC_STATE_METHOD_FAMILY,
    SPIN_STATE_ELECTRONIC_STATE_METHOD_FAMILY,
    FULL_METHOD,
)

CATALOG = CatalogRegistry(SCHEMAS)
"""Default registry with every catalog entity."""
