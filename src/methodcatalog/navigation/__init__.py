"""Navigation - per-entity screen state machine and headless screens."""

from methodcatalog.navigation.coordinator import TRANSITIONS, NavigationCoordinator
from methodcatalog.navigation.events import NavAction, NavigationEvent, ScreenKind
from methodcatalog.navigation.factory import DefaultScreenFactory, ScreenFactory
from methodcatalog.navigation.screens import (
    CreateScreen,
    DeleteScreen,
    DetailsScreen,
    EditScreen,
    IndexScreen,
    Screen,
)

__all__ = [
    "NavigationCoordinator",
    "TRANSITIONS",
    "NavAction",
    "NavigationEvent",
    "ScreenKind",
    "ScreenFactory",
    "DefaultScreenFactory",
    "Screen",
    "IndexScreen",
    "CreateScreen",
    "EditScreen",
    "DetailsScreen",
    "DeleteScreen",
]
