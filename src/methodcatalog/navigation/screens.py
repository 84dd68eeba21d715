"""Headless screen models.

A screen holds the data one view renders and exposes the user's actions as
methods. Actions that complete a flow emit a ``NavigationEvent`` through the
``emit`` callback; the coordinator decides what comes next.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import ClassVar

import structlog

from methodcatalog.client.endpoint import CatalogClient, EntityEndpoint
from methodcatalog.core.errors import FieldIssue, RemoteIOError, ValidationError
from methodcatalog.models.convert import to_simple
from methodcatalog.models.display import SelectOption, display_string, options_for
from methodcatalog.models.schema import EntitySchema
from methodcatalog.models.tiers import FullBase, RecordBase, SimpleBase, TierSet
from methodcatalog.navigation.events import NavAction, NavigationEvent, ScreenKind
from methodcatalog.richtext import HtmlRichTextConverter, RichTextConverter

logger = structlog.get_logger()

EmitFn = Callable[[NavigationEvent], Awaitable[None]]


class Screen:
    """Base for every screen: error banner, inline issues, event emission."""

    kind: ClassVar[ScreenKind]

    def __init__(
        self,
        client: CatalogClient,
        tier_set: TierSet,
        emit: EmitFn,
        item_id: int | None = None,
        richtext: RichTextConverter | None = None,
    ) -> None:
        self.client = client
        self.tier_set = tier_set
        self.item_id = item_id
        self.richtext = richtext or HtmlRichTextConverter()
        self.error: str | None = None
        self.issues: list[FieldIssue] = []
        self._emit = emit

    @property
    def schema(self) -> EntitySchema:
        return self.tier_set.schema

    @property
    def endpoint(self) -> EntityEndpoint:
        return self.client.endpoint(self.schema.key)

    @property
    def title(self) -> str:
        return f"{self.kind.value.capitalize()} {self.schema.label}"

    async def load(self, seed: FullBase | None = None) -> None:
        """Fetch what the screen shows. ``RemoteIOError`` propagates to the coordinator."""

    def show_error(self, error: Exception) -> None:
        self.error = error.message if isinstance(error, RemoteIOError) else str(error)

    def dismiss_error(self) -> None:
        self.error = None

    async def emit(
        self,
        action: NavAction,
        item_id: int | None = None,
        payload: FullBase | None = None,
    ) -> None:
        await self._emit(NavigationEvent(action, item_id, payload))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.schema.key} item_id={self.item_id}>"


class IndexScreen(Screen):
    """All Records of the entity, one row per record."""

    kind = ScreenKind.INDEX
    records: tuple[RecordBase, ...] = ()

    async def load(self, seed: FullBase | None = None) -> None:  # noqa: ARG002
        self.records = tuple(await self.endpoint.get_list() or ())

    @property
    def rows(self) -> list[tuple[int, str]]:
        return [(record.id, display_string(record)) for record in self.records]

    async def request_create(self) -> None:
        await self.emit(NavAction.CREATE)

    async def request_edit(self, item_id: int) -> None:
        await self.emit(NavAction.EDIT, item_id)

    async def request_details(self, item_id: int) -> None:
        await self.emit(NavAction.DETAILS, item_id)

    async def request_delete(self, item_id: int) -> None:
        await self.emit(NavAction.DELETE, item_id)


class _RecordScreen(Screen):
    """Shows one Full record fetched by id, unless seeded with it."""

    item: FullBase | None = None

    async def load(self, seed: FullBase | None = None) -> None:
        if seed is not None and seed.id == self.item_id:
            self.item = seed
        else:
            self.item = await self.endpoint.get_by_id(self.item_id)  # type: ignore[arg-type]
        if self.item is None:
            self.error = f"{self.schema.label} {self.item_id} was not found"

    @property
    def description_html(self) -> str:
        if self.item is None or not self.item.description_rtf:
            return ""
        return self.richtext.rich_to_html(self.item.description_rtf)


class DetailsScreen(_RecordScreen):
    kind = ScreenKind.DETAILS

    async def request_edit(self) -> None:
        await self.emit(NavAction.EDIT, self.item_id)

    async def back(self) -> None:
        await self.emit(NavAction.INDEX)


class DeleteScreen(_RecordScreen):
    kind = ScreenKind.DELETE

    async def confirm(self) -> None:
        """Soft-delete the record, then return to the index."""
        try:
            await self.endpoint.delete(self.item_id)  # type: ignore[arg-type]
        except RemoteIOError as e:
            logger.warning("delete_failed", entity=self.schema.key, item_id=self.item_id, error=str(e))
            self.show_error(e)
            return
        await self.emit(NavAction.DELETE)

    async def cancel(self) -> None:
        await self.emit(NavAction.INDEX)


class _FormScreen(Screen, ABC):
    """Edits a Simple form with a dropdown per relation."""

    saved: FullBase | None = None

    def __init__(
        self,
        client: CatalogClient,
        tier_set: TierSet,
        emit: EmitFn,
        item_id: int | None = None,
        richtext: RichTextConverter | None = None,
    ) -> None:
        super().__init__(client, tier_set, emit, item_id, richtext)
        self.form: SimpleBase = tier_set.simple()
        self.lookups: dict[str, list[RecordBase]] = {}

    async def _load_lookups(self) -> None:
        for rel in self.schema.relations:
            records = await self.client.endpoint(rel.target).get_list()
            self.lookups[rel.name] = records or []

    def options(self, relation: str) -> list[SelectOption]:
        rel = self.schema.relation(relation)
        return options_for(
            self.lookups.get(relation, []),
            selected_id=getattr(self.form, rel.id_field),
            optional=not rel.required,
        )

    def select(self, relation: str, item_id: int | None) -> None:
        rel = self.schema.relation(relation)
        if item_id is None and rel.required:
            item_id = 0
        setattr(self.form, rel.id_field, item_id)

    def set_description_html(self, html_text: str) -> None:
        """Store the rich form and its plain text together."""
        self.form.description_rtf = self.richtext.html_to_rich(html_text) or None
        self.form.description_text = self.richtext.html_to_plain_text(html_text) or None

    @property
    def description_html(self) -> str:
        return self.richtext.rich_to_html(self.form.description_rtf or "")

    @abstractmethod
    async def _persist(self) -> FullBase | None:
        """Send the form to the service and return the stored record."""

    async def _submit(self) -> bool:
        self.issues = []
        try:
            self.saved = await self._persist()
        except ValidationError as e:
            self.issues = e.issues
            return False
        except RemoteIOError as e:
            logger.warning("submit_failed", entity=self.schema.key, item_id=self.item_id, error=str(e))
            self.show_error(e)
            return False
        return True

    async def cancel(self) -> None:
        await self.emit(NavAction.INDEX)


class CreateScreen(_FormScreen):
    kind = ScreenKind.CREATE

    async def load(self, seed: FullBase | None = None) -> None:  # noqa: ARG002
        await self._load_lookups()

    async def _persist(self) -> FullBase | None:
        return await self.endpoint.create(self.form)

    async def submit(self) -> None:
        """Validate and create, then move to the new record's details."""
        if not await self._submit():
            return
        if self.saved is None:
            self.error = f"The service did not return the new {self.schema.label}"
            return
        await self.emit(NavAction.CREATE, self.saved.id, self.saved)


class EditScreen(_FormScreen):
    kind = ScreenKind.EDIT

    async def load(self, seed: FullBase | None = None) -> None:  # noqa: ARG002
        item = await self.endpoint.get_by_id(self.item_id)  # type: ignore[arg-type]
        if item is None:
            self.error = f"{self.schema.label} {self.item_id} was not found"
        else:
            self.form = to_simple(item)
        await self._load_lookups()

    async def _persist(self) -> FullBase | None:
        return await self.endpoint.update(self.item_id, self.form)  # type: ignore[arg-type]

    async def submit(self) -> None:
        """Validate and update, then move to the details of the saved record."""
        if not await self._submit():
            return
        await self.emit(NavAction.SAVE, self.item_id, self.saved)


SCREEN_TYPES: dict[ScreenKind, type[Screen]] = {
    ScreenKind.INDEX: IndexScreen,
    ScreenKind.CREATE: CreateScreen,
    ScreenKind.EDIT: EditScreen,
    ScreenKind.DETAILS: DetailsScreen,
    ScreenKind.DELETE: DeleteScreen,
}
