"""Tests for the navigation coordinator state machine."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import pytest

from methodcatalog.config.models import NavigationConfig
from methodcatalog.core.errors import ErrorCode, NavigationError, NullParameterError
from methodcatalog.navigation.coordinator import TRANSITIONS, NavigationCoordinator
from methodcatalog.navigation.events import NavAction, NavigationEvent, ScreenKind
from methodcatalog.navigation.screens import (
    CreateScreen,
    DeleteScreen,
    DetailsScreen,
    EditScreen,
    IndexScreen,
)

if TYPE_CHECKING:
    from conftest import FakeService


def _coordinator(service: FakeService, **kwargs: Any) -> NavigationCoordinator:
    return NavigationCoordinator(service.client(), "base_method", **kwargs)


@pytest.fixture
def base_service(service: FakeService, base_method_payload: dict[str, Any]) -> FakeService:
    """Service with BaseMethod 7, its list and the family dropdown."""
    service.add("GET", "BaseMethods", [base_method_payload])
    service.add("GET", "BaseMethods/7", base_method_payload)
    service.add("GET", "MethodFamilies/List", [{"id": 3, "name": "DFT"}, {"id": 4, "name": "HF"}])
    return service


class TestStart:
    @pytest.mark.asyncio
    async def test_start_opens_index(self, base_service: FakeService) -> None:
        coordinator = _coordinator(base_service)

        screen = await coordinator.start()

        assert isinstance(screen, IndexScreen)
        assert coordinator.state is ScreenKind.INDEX
        assert screen.rows == [(7, "B3LYP")]

    @pytest.mark.asyncio
    async def test_given_entity_without_list_route_then_index_from_full_list(
        self, service: FakeService
    ) -> None:
        service.add("GET", "CalculationTypes", [{"id": 1, "name": "Optimization", "keyword": "Opt"}])
        coordinator = NavigationCoordinator(service.client(), "calculation_type")

        screen = await coordinator.start()

        assert isinstance(screen, IndexScreen)
        assert screen.error is None
        assert screen.rows == [(1, "Optimization (Opt)")]
        assert [r.url.path for r in service.requests] == ["/api/v1/CalculationTypes"]

    @pytest.mark.asyncio
    async def test_given_initial_failure_then_index_with_banner(self, service: FakeService) -> None:
        service.add("GET", "BaseMethods", {"title": "down"}, status=503)
        coordinator = _coordinator(service)

        screen = await coordinator.start()

        assert isinstance(screen, IndexScreen)
        assert screen.error is not None
        assert "503" in screen.error

    def test_unknown_entity_rejected(self, service: FakeService) -> None:
        with pytest.raises(KeyError):
            NavigationCoordinator(service.client(), "basis_set")


class TestTransitions:
    """Each listed event opens its target screen."""

    @pytest.mark.asyncio
    async def test_given_edit_from_index_then_edit_screen_with_one_fetch(
        self, base_service: FakeService
    ) -> None:
        # Given
        coordinator = _coordinator(base_service)
        await coordinator.start()

        # When
        await coordinator.dispatch("edit", 7)

        # Then
        assert coordinator.state is ScreenKind.EDIT
        assert coordinator.item_id == 7
        assert isinstance(coordinator.screen, EditScreen)
        assert coordinator.screen.form.method_family_id == 3
        assert base_service.calls("GET", "BaseMethods/7") == 1
        assert base_service.calls("GET", "MethodFamilies/List") == 1

    @pytest.mark.asyncio
    async def test_given_save_then_details_shows_returned_record_without_fetch(
        self, base_service: FakeService, base_method_payload: dict[str, Any]
    ) -> None:
        # Given
        saved = {**base_method_payload, "lastUpdatedDate": "2024-09-10T11:12:13"}
        base_service.add("PUT", "BaseMethods/7", saved)
        coordinator = _coordinator(base_service)
        await coordinator.start()
        await coordinator.dispatch("edit", 7)
        edit = coordinator.screen
        assert isinstance(edit, EditScreen)

        # When
        edit.form.keyword = "B3LYP"
        await edit.submit()

        # Then
        assert coordinator.state is ScreenKind.DETAILS
        details = coordinator.screen
        assert isinstance(details, DetailsScreen)
        assert details.item is not None
        assert details.item.last_updated_date.isoformat() == "2024-09-10T11:12:13"
        assert base_service.calls("GET", "BaseMethods/7") == 1

    @pytest.mark.asyncio
    async def test_create_flow_ends_on_new_details(
        self, base_service: FakeService, base_method_payload: dict[str, Any]
    ) -> None:
        created = {**base_method_payload, "id": 8, "keyword": "PBE0"}
        base_service.add("POST", "BaseMethods", created, status=201)
        coordinator = _coordinator(base_service)
        await coordinator.start()

        await coordinator.dispatch("create")
        create = coordinator.screen
        assert isinstance(create, CreateScreen)
        create.form.keyword = "PBE0"
        create.select("method_family", 3)
        await create.submit()

        assert coordinator.state is ScreenKind.DETAILS
        assert coordinator.item_id == 8
        assert base_service.calls("GET", "BaseMethods/8") == 0

    @pytest.mark.asyncio
    async def test_delete_flow_returns_to_refreshed_index(self, base_service: FakeService) -> None:
        base_service.add("DELETE", "BaseMethods/7", None, status=204)
        coordinator = _coordinator(base_service)
        await coordinator.start()

        await coordinator.dispatch("delete", 7)
        delete = coordinator.screen
        assert isinstance(delete, DeleteScreen)
        await delete.confirm()

        assert coordinator.state is ScreenKind.INDEX
        assert coordinator.item_id is None
        assert base_service.calls("GET", "BaseMethods") == 2

    @pytest.mark.asyncio
    async def test_details_then_edit_then_cancel(self, base_service: FakeService) -> None:
        coordinator = _coordinator(base_service)
        await coordinator.start()

        await coordinator.dispatch("details", 7)
        assert coordinator.state is ScreenKind.DETAILS
        await coordinator.dispatch("edit", 7)
        assert coordinator.state is ScreenKind.EDIT
        await coordinator.dispatch("index")

        assert coordinator.state is ScreenKind.INDEX

    def test_table_covers_every_screen(self) -> None:
        sources = {source for source, _ in TRANSITIONS}

        assert sources == set(ScreenKind)
        assert TRANSITIONS[(ScreenKind.EDIT, NavAction.SAVE)] is ScreenKind.DETAILS


class TestFailures:
    @pytest.mark.asyncio
    async def test_given_load_failure_then_state_kept_with_banner(
        self, base_service: FakeService
    ) -> None:
        base_service.add("GET", "BaseMethods/9", {"title": "boom"}, status=500)
        coordinator = _coordinator(base_service)
        index = await coordinator.start()
        assert index is not None

        await coordinator.dispatch("details", 9)

        assert coordinator.state is ScreenKind.INDEX
        assert coordinator.screen is index
        assert index.error is not None
        assert "500" in index.error

        index.dismiss_error()
        assert index.error is None

    @pytest.mark.asyncio
    async def test_given_missing_item_id_then_null_parameter_error(
        self, base_service: FakeService
    ) -> None:
        coordinator = _coordinator(base_service)
        await coordinator.start()

        with pytest.raises(NullParameterError) as exc_info:
            await coordinator.handle(NavigationEvent(NavAction.EDIT))

        assert exc_info.value.code == ErrorCode.NAVIGATION_MISSING_ITEM_ID
        assert coordinator.state is ScreenKind.INDEX

    @pytest.mark.asyncio
    async def test_given_unknown_action_then_navigation_error(self, base_service: FakeService) -> None:
        coordinator = _coordinator(base_service)

        with pytest.raises(NavigationError):
            await coordinator.dispatch("archive", 7)

    @pytest.mark.asyncio
    async def test_given_unlisted_event_then_ignored(self, base_service: FakeService) -> None:
        coordinator = _coordinator(base_service)
        index = await coordinator.start()

        await coordinator.dispatch("save", 7)

        assert coordinator.state is ScreenKind.INDEX
        assert coordinator.screen is index


class TestStaleLoads:
    """A slow load finishing after a newer navigation."""

    @pytest.mark.asyncio
    async def test_given_newer_navigation_then_late_screen_discarded(
        self, base_service: FakeService, base_method_payload: dict[str, Any]
    ) -> None:
        base_service.add("GET", "BaseMethods/7", base_method_payload, delay=0.05)
        base_service.add("GET", "BaseMethods/8", {**base_method_payload, "id": 8})
        coordinator = _coordinator(base_service)
        await coordinator.start()

        await asyncio.gather(
            coordinator.dispatch("edit", 7),
            coordinator.dispatch("details", 8),
        )

        assert coordinator.state is ScreenKind.DETAILS
        assert coordinator.item_id == 8

    @pytest.mark.asyncio
    async def test_given_discard_disabled_then_last_writer_wins(
        self, base_service: FakeService, base_method_payload: dict[str, Any]
    ) -> None:
        base_service.add("GET", "BaseMethods/7", base_method_payload, delay=0.05)
        base_service.add("GET", "BaseMethods/8", {**base_method_payload, "id": 8})
        coordinator = _coordinator(
            base_service, config=NavigationConfig(discard_stale_loads=False)
        )
        await coordinator.start()

        await asyncio.gather(
            coordinator.dispatch("edit", 7),
            coordinator.dispatch("details", 8),
        )

        assert coordinator.state is ScreenKind.EDIT
        assert coordinator.item_id == 7
