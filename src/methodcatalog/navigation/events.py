"""Navigation events emitted by screens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from methodcatalog.core.errors import NavigationError

if TYPE_CHECKING:
    from methodcatalog.models.tiers import FullBase


class NavAction(str, Enum):
    CREATE = "create"
    EDIT = "edit"
    DETAILS = "details"
    DELETE = "delete"
    SAVE = "save"
    INDEX = "index"


class ScreenKind(str, Enum):
    INDEX = "index"
    CREATE = "create"
    EDIT = "edit"
    DETAILS = "details"
    DELETE = "delete"

    @property
    def needs_item_id(self) -> bool:
        return self in (ScreenKind.EDIT, ScreenKind.DETAILS, ScreenKind.DELETE)


@dataclass(frozen=True, slots=True)
class NavigationEvent:
    """A completion event such as ``edit(7)`` or ``index``.

    ``payload`` carries the Full record a create or update call returned, so
    the next screen can show it without fetching again.
    """

    action: NavAction
    item_id: int | None = None
    payload: FullBase | None = None

    @classmethod
    def parse(cls, action: str, item_id: int | None = None) -> NavigationEvent:
        try:
            nav_action = NavAction(action.strip().lower())
        except ValueError:
            raise NavigationError.unknown_action(action) from None
        return cls(nav_action, item_id)

    def __str__(self) -> str:
        if self.item_id is None:
            return self.action.value
        return f"{self.action.value}({self.item_id})"
