"""Screen construction."""

from __future__ import annotations

from typing import Protocol

from methodcatalog.client.endpoint import CatalogClient
from methodcatalog.models.tiers import TierSet
from methodcatalog.navigation.events import ScreenKind
from methodcatalog.navigation.screens import SCREEN_TYPES, EmitFn, Screen
from methodcatalog.richtext import RichTextConverter


class ScreenFactory(Protocol):
    """Builds the screen for ``kind``, wired to report events through ``emit``."""

    def create(self, kind: ScreenKind, item_id: int | None, emit: EmitFn) -> Screen: ...


class DefaultScreenFactory:
    """Builds the headless screens from ``navigation.screens``."""

    def __init__(
        self,
        client: CatalogClient,
        tier_set: TierSet,
        richtext: RichTextConverter | None = None,
    ) -> None:
        self.client = client
        self.tier_set = tier_set
        self.richtext = richtext

    def create(self, kind: ScreenKind, item_id: int | None, emit: EmitFn) -> Screen:
        screen_cls = SCREEN_TYPES[kind]
        return screen_cls(self.client, self.tier_set, emit, item_id, self.richtext)
