"""Tests for the mcat command line."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from methodcatalog import __version__
from methodcatalog.cli.main import cli

if TYPE_CHECKING:
    from conftest import FakeService


@pytest.fixture
def runner(
    service: FakeService, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[CliRunner]:
    """Runner in an empty directory, with every command talking to the fake service."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("METHODCATALOG__"):
            monkeypatch.delenv(key)
    monkeypatch.setattr("methodcatalog.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml")

    def fake_client(*args: Any, **kwargs: Any) -> Any:
        return service.client()

    monkeypatch.setattr("methodcatalog.cli.browse.CatalogClient", fake_client)
    monkeypatch.setattr("methodcatalog.cli.edit.CatalogClient", fake_client)
    yield CliRunner()
    # Handlers installed by the group callback point at the runner's closed streams
    logging.getLogger().handlers.clear()


class TestGroup:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_explicit_config_fails(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["--config", str(tmp_path / "missing.yaml"), "entities"])

        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_unknown_entity_is_usage_error(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["list", "basis_set"])

        assert result.exit_code == 2


class TestBrowse:
    def test_entities_lists_every_entity(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["entities"])

        assert result.exit_code == 0
        assert "spin_state" in result.output
        assert "full_method" in result.output

    def test_list_shows_captions(self, runner: CliRunner, service: FakeService) -> None:
        service.add("GET", "SpinStates/List", [{"id": 2, "name": "Triplet", "keyword": "T"}])

        result = runner.invoke(cli, ["list", "spin_state"])

        assert result.exit_code == 0
        assert "Triplet/T" in result.output

    def test_list_without_archived_filters_full_list(
        self, runner: CliRunner, service: FakeService
    ) -> None:
        service.add(
            "GET",
            "MethodFamilies",
            [
                {"id": 3, "name": "DFT", "archived": False},
                {"id": 5, "name": "Semiempirical", "archived": True},
            ],
        )

        result = runner.invoke(cli, ["list", "method_family", "--no-archived"])

        assert result.exit_code == 0
        assert "DFT" in result.output
        assert "Semiempirical" not in result.output

    def test_list_empty(self, runner: CliRunner, service: FakeService) -> None:
        service.add("GET", "SpinStates/List", [])

        result = runner.invoke(cli, ["list", "spin_state"])

        assert result.exit_code == 0
        assert "No records" in result.output

    def test_show_renders_related_record(
        self, runner: CliRunner, service: FakeService, base_method_payload: dict[str, Any]
    ) -> None:
        service.add("GET", "BaseMethods/7", base_method_payload)

        result = runner.invoke(cli, ["show", "base_method", "7"])

        assert result.exit_code == 0
        assert "B3LYP" in result.output
        assert "3: DFT" in result.output
        assert "Hybrid functional" in result.output

    def test_show_not_found(self, runner: CliRunner, service: FakeService) -> None:
        service.add("GET", "BaseMethods/9")

        result = runner.invoke(cli, ["show", "base_method", "9"])

        assert result.exit_code == 1
        assert "Base Method 9 was not found" in result.output

    def test_remote_failure_reported(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["show", "base_method", "9"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error: GET api/v1/BaseMethods/9 failed with 404 Not Found" in result.output

    def test_list_server_error_reported(self, runner: CliRunner, service: FakeService) -> None:
        service.add("GET", "SpinStates/List", {"title": "boom"}, status=500)

        result = runner.invoke(cli, ["list", "spin_state"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "failed with 500 Internal Server Error" in result.output

    def test_list_calculation_types_from_full_list(
        self, runner: CliRunner, service: FakeService
    ) -> None:
        service.add("GET", "CalculationTypes", [{"id": 1, "name": "Optimization", "keyword": "Opt"}])

        result = runner.invoke(cli, ["list", "calculation_type"])

        assert result.exit_code == 0, result.output
        assert "Optimization (Opt)" in result.output


class TestCreate:
    def test_valid_record_is_posted(
        self, runner: CliRunner, service: FakeService, base_method_payload: dict[str, Any]
    ) -> None:
        service.add("POST", "BaseMethods", base_method_payload, status=201)

        result = runner.invoke(
            cli,
            [
                "create",
                "base_method",
                "--keyword",
                "B3LYP",
                "--relation",
                "method_family=3",
                "--description",
                "Hybrid & fast",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Created Base Method 7: B3LYP" in result.output
        body = service.body()
        assert body["methodFamilyId"] == 3
        assert body["descriptionRtf"] == "<p>Hybrid &amp; fast</p>"
        assert body["descriptionText"] == "Hybrid & fast"

    def test_invalid_record_is_not_sent(self, runner: CliRunner, service: FakeService) -> None:
        result = runner.invoke(cli, ["create", "base_method", "--keyword", "B3LYP"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid base_method:" in result.output
        assert "method_family_id" in result.output
        assert service.requests == []

    def test_field_not_on_entity(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["create", "base_method", "--name", "B3LYP"])

        assert result.exit_code == 2
        assert "has no name" in result.output

    def test_unknown_relation(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["create", "base_method", "--relation", "spin_state=1"])

        assert result.exit_code == 2

    def test_cleared_optional_relation_sent_as_null(
        self, runner: CliRunner, service: FakeService
    ) -> None:
        service.add("POST", "ElectronicStatesMethodFamilies", None, status=204)

        result = runner.invoke(
            cli,
            [
                "create",
                "electronic_state_method_family",
                "--name",
                "GS",
                "--relation",
                "electronic_state=2",
                "--relation",
                "method_family=none",
            ],
        )

        assert result.exit_code == 0, result.output
        assert service.body()["methodFamilyId"] is None


class TestDelete:
    def test_yes_skips_prompt(self, runner: CliRunner, service: FakeService) -> None:
        service.add("DELETE", "SpinStates/2", None, status=204)

        result = runner.invoke(cli, ["delete", "spin_state", "2", "--yes"])

        assert result.exit_code == 0
        assert "Archived Spin State 2" in result.output
        assert service.calls("DELETE", "SpinStates/2") == 1

    def test_declined_prompt_sends_nothing(
        self, runner: CliRunner, service: FakeService, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        prompt = MagicMock()
        prompt.ask.return_value = False
        monkeypatch.setattr("methodcatalog.cli.edit.questionary.confirm", MagicMock(return_value=prompt))

        result = runner.invoke(cli, ["delete", "spin_state", "2"])

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert service.requests == []
