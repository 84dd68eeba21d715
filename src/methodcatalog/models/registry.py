"""Registry resolving entity descriptors into generated tier classes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from methodcatalog.models.schema import EntitySchema
from methodcatalog.models.tiers import TierSet, build_tier_set


class CatalogRegistry:
    """Builds and holds the tier classes of a set of entities.

    Relation targets must be registered in the same registry. Classes are
    generated in dependency order so each relation annotation points at an
    already-built class.
    """

    def __init__(self, schemas: Iterable[EntitySchema]) -> None:
        self._schemas: dict[str, EntitySchema] = {}
        for schema in schemas:
            if schema.key in self._schemas:
                raise ValueError(f"Duplicate entity key: {schema.key}")
            self._schemas[schema.key] = schema
        self._tiers: dict[str, TierSet] = {}
        for key in self._build_order():
            schema = self._schemas[key]
            related = {rel.name: self._tiers[rel.target] for rel in schema.relations}
            self._tiers[key] = build_tier_set(schema, related)

    def _build_order(self) -> list[str]:
        order: list[str] = []
        visiting: set[str] = set()

        def visit(key: str) -> None:
            if key in order:
                return
            if key in visiting:
                raise ValueError(f"Relation cycle through {key}")
            if key not in self._schemas:
                raise ValueError(f"Unknown relation target: {key}")
            visiting.add(key)
            for rel in self._schemas[key].relations:
                visit(rel.target)
            visiting.discard(key)
            order.append(key)

        for key in self._schemas:
            visit(key)
        return order

    def tiers(self, key: str) -> TierSet:
        try:
            return self._tiers[key]
        except KeyError:
            raise KeyError(f"Unknown entity: {key}") from None

    def schema(self, key: str) -> EntitySchema:
        return self.tiers(key).schema

    def keys(self) -> list[str]:
        return list(self._schemas)

    def __contains__(self, key: object) -> bool:
        return key in self._schemas

    def __iter__(self) -> Iterator[TierSet]:
        return (self._tiers[key] for key in self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)
