"""Per-entity navigation state machine.

The coordinator owns the current screen. Screens report completed actions as
``NavigationEvent``s; the coordinator looks the event up in the transition
table, builds the next screen, lets it load, and only then swaps it in. A
failed load leaves the current screen in place with an error banner.

Loads are sequenced: each navigation takes a ticket, and with
``discard_stale_loads`` enabled a screen whose load finishes after a newer
navigation started is dropped. Nothing cancels the in-flight request itself.
"""

from __future__ import annotations

import structlog

from methodcatalog.client.endpoint import CatalogClient
from methodcatalog.config.models import NavigationConfig
from methodcatalog.core.errors import NullParameterError, RemoteIOError
from methodcatalog.models.tiers import FullBase, TierSet
from methodcatalog.navigation.events import NavAction, NavigationEvent, ScreenKind
from methodcatalog.navigation.factory import DefaultScreenFactory, ScreenFactory
from methodcatalog.navigation.screens import Screen
from methodcatalog.richtext import RichTextConverter

logger = structlog.get_logger()

TRANSITIONS: dict[tuple[ScreenKind, NavAction], ScreenKind] = {
    (ScreenKind.INDEX, NavAction.CREATE): ScreenKind.CREATE,
    (ScreenKind.INDEX, NavAction.EDIT): ScreenKind.EDIT,
    (ScreenKind.INDEX, NavAction.DETAILS): ScreenKind.DETAILS,
    (ScreenKind.INDEX, NavAction.DELETE): ScreenKind.DELETE,
    (ScreenKind.CREATE, NavAction.CREATE): ScreenKind.DETAILS,
    (ScreenKind.CREATE, NavAction.INDEX): ScreenKind.INDEX,
    (ScreenKind.EDIT, NavAction.SAVE): ScreenKind.DETAILS,
    (ScreenKind.EDIT, NavAction.INDEX): ScreenKind.INDEX,
    (ScreenKind.DETAILS, NavAction.EDIT): ScreenKind.EDIT,
    (ScreenKind.DETAILS, NavAction.INDEX): ScreenKind.INDEX,
    (ScreenKind.DELETE, NavAction.DELETE): ScreenKind.INDEX,
    (ScreenKind.DELETE, NavAction.INDEX): ScreenKind.INDEX,
}


class NavigationCoordinator:
    """Holds one entity's current screen and reacts to its events."""

    def __init__(
        self,
        client: CatalogClient,
        entity: str,
        *,
        factory: ScreenFactory | None = None,
        config: NavigationConfig | None = None,
        richtext: RichTextConverter | None = None,
    ) -> None:
        self.client = client
        self.tier_set: TierSet = client.registry.tiers(entity)
        self.factory = factory or DefaultScreenFactory(client, self.tier_set, richtext)
        self.config = config or NavigationConfig()
        self.state = ScreenKind.INDEX
        self.item_id: int | None = None
        self.screen: Screen | None = None
        self._ticket = 0

    @property
    def entity(self) -> str:
        return self.tier_set.schema.key

    async def start(self) -> Screen | None:
        """Open the index screen."""
        await self._navigate(ScreenKind.INDEX, None, None)
        return self.screen

    async def dispatch(self, action: str, item_id: int | None = None) -> None:
        """Parse an action name such as ``"edit"`` and handle it."""
        await self.handle(NavigationEvent.parse(action, item_id))

    async def handle(self, event: NavigationEvent) -> None:
        target = TRANSITIONS.get((self.state, event.action))
        if target is None:
            logger.info(
                "navigation_event_ignored",
                entity=self.entity,
                state=self.state.value,
                navigation_event=str(event),
            )
            return
        if target.needs_item_id and event.item_id is None:
            raise NullParameterError.missing_item_id(event.action.value, target.value)

        item_id = event.item_id if target.needs_item_id else None
        await self._navigate(target, item_id, event.payload)

    def _is_stale(self, ticket: int) -> bool:
        return self.config.discard_stale_loads and ticket != self._ticket

    async def _navigate(self, kind: ScreenKind, item_id: int | None, seed: FullBase | None) -> None:
        self._ticket += 1
        ticket = self._ticket
        screen = self.factory.create(kind, item_id, self.handle)

        try:
            await screen.load(seed)
        except RemoteIOError as e:
            if self._is_stale(ticket):
                logger.info("stale_screen_discarded", entity=self.entity, screen=kind.value, item_id=item_id)
                return
            logger.warning(
                "screen_load_failed",
                entity=self.entity,
                screen=kind.value,
                item_id=item_id,
                error=str(e),
            )
            if self.screen is not None:
                self.screen.show_error(e)
                return
            # Nothing on display yet: show the failed screen with its banner
            screen.show_error(e)

        if self._is_stale(ticket):
            logger.info("stale_screen_discarded", entity=self.entity, screen=kind.value, item_id=item_id)
            return

        logger.debug(
            "navigation_transition",
            entity=self.entity,
            from_screen=self.state.value if self.screen is not None else None,
            to_screen=kind.value,
            item_id=item_id,
        )
        self.state = kind
        self.item_id = item_id
        self.screen = screen
