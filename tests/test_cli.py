"""Tests for the command-line scrape runner."""

import pytest

from catalog_i18n import cli
from catalog_i18n.core import ModuleRegistry, ReconciliationEngine, TranslationStore
from catalog_i18n.models.schemas import ScrapeOutcome
from helpers import FakeSource, LANGUAGES, SOURCE_LANGUAGE, make_module


@pytest.fixture
def cli_engine(tmp_path) -> ReconciliationEngine:
    registry = ModuleRegistry(
        [
            make_module("tags", "", FakeSource([("1", "猫")]), priority=1),
            make_module("origins", "origin_", FakeSource([("2", "原作")]), priority=2),
        ]
    )
    store = TranslationStore(tmp_path / "i18n", SOURCE_LANGUAGE)
    return ReconciliationEngine(registry, store, LANGUAGES, SOURCE_LANGUAGE)


def test_format_outcome_success() -> None:
    line = cli.format_outcome(
        ScrapeOutcome(
            module_name="tags", items_processed=5, new_items=2, updated_items=1,
            duration=40, success=True,
        )
    )
    assert line == "  OK    tags: 5 items, 2 new, 1 updated (40ms)"


def test_format_outcome_failure() -> None:
    line = cli.format_outcome(
        ScrapeOutcome(module_name="tags", duration=7, success=False, error="HTTP 503")
    )
    assert line == "  FAIL  tags: HTTP 503 (7ms)"


@pytest.mark.asyncio
async def test_run_scrape_all(cli_engine, capsys) -> None:
    exit_code = await cli.run_scrape(cli_engine, [])

    assert exit_code == 0
    assert "2/2 modules succeeded" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_scrape_reports_failed_modules(cli_engine, capsys) -> None:
    cli_engine.registry.get("origins").fetch_items.error = RuntimeError("boom")

    exit_code = await cli.run_scrape(cli_engine, [])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "1/2 modules succeeded" in out
    assert "Retry failed modules with: -m origins" in out


@pytest.mark.asyncio
async def test_run_scrape_selected_modules(cli_engine) -> None:
    exit_code = await cli.run_scrape(cli_engine, ["tags"])

    assert exit_code == 0
    assert cli_engine.store.read_entries("tags", "ja") == {"1": "猫"}
    assert cli_engine.store.read_entries("origins", "ja") == {}


def test_print_stats(cli_engine, capsys) -> None:
    cli.print_stats(cli_engine)

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("tags")
    assert "en 0/0 (0%)" in lines[0]


def test_main_list(monkeypatch, cli_engine, capsys) -> None:
    monkeypatch.setattr(cli, "build_engine", lambda: cli_engine)

    assert cli.main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "tags" in out
    assert "origin_" in out


def test_main_unknown_module(monkeypatch, cli_engine, capsys) -> None:
    monkeypatch.setattr(cli, "build_engine", lambda: cli_engine)

    assert cli.main(["-m", "authors"]) == 2
    assert "Module config not found: authors" in capsys.readouterr().err


def test_main_runs_scrape(monkeypatch, cli_engine) -> None:
    monkeypatch.setattr(cli, "build_engine", lambda: cli_engine)

    assert cli.main(["-m", "origins"]) == 0
    assert cli_engine.store.read_entries("origins", "ja") == {"origin_2": "原作"}
