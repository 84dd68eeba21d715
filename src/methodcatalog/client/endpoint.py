"""Per-entity endpoint operations returning tier models."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import structlog
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from methodcatalog.client.http import ApiClient
from methodcatalog.config.constants import INTERMEDIATE_SEGMENT, LIST_SEGMENT, SIMPLE_SEGMENT
from methodcatalog.config.models import ApiConfig
from methodcatalog.core.errors import FieldIssue, RemoteIOError, ValidationError
from methodcatalog.models.convert import to_intermediate, to_record, to_simple
from methodcatalog.models.entities import CATALOG
from methodcatalog.models.registry import CatalogRegistry
from methodcatalog.models.schema import EntitySchema, Tier
from methodcatalog.models.tiers import (
    CatalogModel,
    FullBase,
    IntermediateBase,
    RecordBase,
    SimpleBase,
    TierSet,
)
from methodcatalog.models.validation import validate

logger = structlog.get_logger()


class EntityEndpoint:
    """Remote operations for one entity, e.g. ``api/v1/BaseMethods``.

    Every call returns ``None`` when the service answers with an empty body.
    """

    def __init__(self, api: ApiClient, tier_set: TierSet) -> None:
        self.api = api
        self.tier_set = tier_set

    @property
    def schema(self) -> EntitySchema:
        return self.tier_set.schema

    def _path(self, *segments: str | int) -> str:
        return self.api.url_for(self.schema.resource, *segments)

    def _parse(self, path: str, payload: Any, model_type: Any) -> Any:
        if payload is None:
            return None
        try:
            return TypeAdapter(model_type).validate_python(payload)
        except PydanticValidationError as e:
            raise RemoteIOError.bad_payload(path, str(e)) from e

    async def _call(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        start = time.perf_counter()
        try:
            return await self.api.request(method, path, params=params, json_body=json_body)
        finally:
            logger.debug(
                "endpoint_called",
                entity=self.schema.key,
                operation=operation,
                path=path,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
            )

    async def get_by_id(self, item_id: int) -> FullBase | None:
        path = self._path(item_id)
        payload = await self._call("get_by_id", "GET", path)
        return self._parse(path, payload, self.tier_set.full)

    async def get_list(self) -> list[RecordBase] | None:
        return await self._get_projection("get_list", Tier.RECORD, LIST_SEGMENT, to_record)

    async def get_all_full(self) -> list[FullBase] | None:
        path = self._path()
        payload = await self._call("get_all_full", "GET", path)
        return self._parse(path, payload, list[self.tier_set.full])

    async def get_all_intermediate(self) -> list[IntermediateBase] | None:
        return await self._get_projection(
            "get_all_intermediate", Tier.INTERMEDIATE, INTERMEDIATE_SEGMENT, to_intermediate
        )

    async def get_all_simple(self) -> list[SimpleBase] | None:
        return await self._get_projection("get_all_simple", Tier.SIMPLE, SIMPLE_SEGMENT, to_simple)

    async def _get_projection(
        self,
        operation: str,
        tier: Tier,
        segment: str,
        project: Callable[[FullBase], Any],
    ) -> list[Any] | None:
        """List ``tier`` from its sub-route, or project the Full list where the service has none."""
        if tier in self.schema.routed_tiers:
            path = self._path(segment)
            payload = await self._call(operation, "GET", path)
            return self._parse(path, payload, list[self.tier_set.by_tier(tier)])
        path = self._path()
        payload = await self._call(operation, "GET", path)
        items = self._parse(path, payload, list[self.tier_set.full])
        if items is None:
            return None
        return [project(item) for item in items]

    async def get_by(self, **relation_ids: int | None) -> list[FullBase] | None:
        """Fetch Full records filtered by one or more relation ids.

        The route concatenates the filtered relations' segments in declaration
        order, e.g. ``FullMethods/SpinStateElectronicStateMethodFamilyBaseMethod``.
        ``None`` for an optional relation matches records without it.
        """
        known = {rel.name for rel in self.schema.relations}
        unknown = sorted(set(relation_ids) - known)
        if unknown:
            raise ValueError(f"{self.schema.key} has no relation(s): {', '.join(unknown)}")
        if not relation_ids:
            raise ValueError("get_by needs at least one relation filter")

        segments: list[str] = []
        params: dict[str, Any] = {}
        for rel in self.schema.relations:
            if rel.name not in relation_ids:
                continue
            value = relation_ids[rel.name]
            if value is None and rel.required:
                raise ValueError(f"{rel.name} is required and cannot be filtered by None")
            segments.append(rel.segment)
            if value is not None:
                params[rel.query_param] = value

        path = self._path("".join(segments))
        payload = await self._call("get_by", "GET", path, params=params)
        return self._parse(path, payload, list[self.tier_set.full])

    async def create(self, item: SimpleBase) -> FullBase | None:
        """Validate locally, then POST. Returns the created Full with server fields."""
        self._check_tier(item)
        validate(item)
        path = self._path()
        payload = await self._call("create", "POST", path, json_body=item.to_wire())
        return self._parse(path, payload, self.tier_set.full)

    async def update(self, item_id: int, item: SimpleBase) -> FullBase | None:
        """Validate locally, then PUT. The payload id must match ``item_id``."""
        self._check_tier(item)
        if item.id != item_id:
            raise ValidationError.from_issues(
                self.schema.key,
                [FieldIssue("id", f"Payload id {item.id} does not match route id {item_id}")],
            )
        validate(item)
        path = self._path(item_id)
        payload = await self._call("update", "PUT", path, json_body=item.to_wire())
        return self._parse(path, payload, self.tier_set.full)

    async def delete(self, item_id: int) -> None:
        """Soft delete: the service flags the record as archived."""
        await self._call("delete", "DELETE", self._path(item_id))

    def _check_tier(self, item: CatalogModel) -> None:
        if type(item) is not self.tier_set.simple:
            raise TypeError(
                f"{self.schema.key} endpoint expects {self.tier_set.simple.__name__}, "
                f"got {type(item).__name__}"
            )


class CatalogClient:
    """Owns the HTTP connection pool and hands out per-entity endpoints.

    Use as an async context manager::

        async with CatalogClient(config.api) as client:
            methods = await client.endpoint("base_method").get_list()
    """

    def __init__(
        self,
        config: ApiConfig | None = None,
        *,
        registry: CatalogRegistry = CATALOG,
        api: ApiClient | None = None,
    ) -> None:
        self.registry = registry
        self.api = api or ApiClient(config)
        self._endpoints: dict[str, EntityEndpoint] = {}

    def endpoint(self, key: str) -> EntityEndpoint:
        if key not in self._endpoints:
            self._endpoints[key] = EntityEndpoint(self.api, self.registry.tiers(key))
        return self._endpoints[key]

    async def aclose(self) -> None:
        await self.api.aclose()

    async def __aenter__(self) -> CatalogClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
