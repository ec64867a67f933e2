"""Tests for translation completion statistics."""

import pytest

from catalog_i18n.core import (
    ConfigError,
    ModuleRegistry,
    TranslationStore,
    compute_module_stats,
    compute_overview,
    round_percent,
)
from catalog_i18n.models.schemas import TranslationUpdateRequest
from helpers import LANGUAGES, SOURCE_LANGUAGE, make_module


def _seed(store: TranslationStore, module: str, total: int, translated: dict[str, int]) -> None:
    keys = [f"k{i}" for i in range(total)]
    store.write_entries(module, "ja", {k: f"text {k}" for k in keys})
    for lang, count in translated.items():
        store.write_entries(
            module,
            lang,
            {k: {"value": k, "translated": i < count} for i, k in enumerate(keys)},
        )


class TestRoundPercent:
    """Integer percentages rounded half-up."""

    @pytest.mark.parametrize(
        "numerator,denominator,expected",
        [
            (1, 2, 50),
            (1, 8, 13),  # 12.5 rounds up
            (1, 3, 33),
            (2, 3, 67),
            (5, 200, 3),  # 2.5 rounds up, not to even
            (0, 0, 0),
            (3, 0, 0),
        ],
    )
    def test_round_percent(self, numerator, denominator, expected) -> None:
        assert round_percent(numerator, denominator) == expected


class TestModuleStats:
    """Tests for per-module statistics."""

    def test_three_of_ten_translated(self, engine, store) -> None:
        _seed(store, "tags", 10, {"en": 3})

        stats = engine.get_module_stats("tags")

        assert stats.total_items == 10
        en = stats.language_stats["en"]
        assert (en.total, en.translated, en.progress) == (10, 3, 30)

    def test_missing_target_file_counts_as_untranslated(self, engine, store) -> None:
        _seed(store, "tags", 4, {"en": 4})

        stats = engine.get_module_stats("tags")

        assert stats.language_stats["en"].progress == 100
        assert stats.language_stats["zh-CN"].translated == 0
        assert stats.language_stats["zh-TW"].progress == 0

    def test_source_language_is_complete(self, engine, store) -> None:
        _seed(store, "tags", 5, {})

        ja = engine.get_module_stats("tags").language_stats["ja"]

        assert (ja.total, ja.translated, ja.progress) == (5, 5, 100)

    def test_overall_progress(self, engine, store) -> None:
        # 10 items x 3 target languages = 30 slots, 10 + 5 + 0 translated
        _seed(store, "tags", 10, {"en": 10, "zh-CN": 5, "zh-TW": 0})

        stats = engine.get_module_stats("tags")

        assert stats.progress == 50

    def test_only_true_flags_count(self, engine, store) -> None:
        store.write_entries("tags", "ja", {"a": "A", "b": "B", "c": "C", "d": "D", "e": "E"})
        store.write_entries(
            "tags",
            "en",
            {
                "a": {"value": "A", "translated": True},
                "b": {"value": "B", "translated": "yes"},
                "c": "plain string",
                "d": {"value": "D"},
                "e": {"value": None, "translated": True},
            },
        )

        assert engine.get_module_stats("tags").language_stats["en"].translated == 1

    def test_entries_outside_source_keys_are_ignored(self, engine, store) -> None:
        store.write_entries("tags", "ja", {"a": "A"})
        store.write_entries(
            "tags",
            "en",
            {
                "a": {"value": "A", "translated": True},
                "stale": {"value": "S", "translated": True},
            },
        )

        en = engine.get_module_stats("tags").language_stats["en"]

        assert (en.translated, en.progress) == (1, 100)

    def test_empty_module_reports_zero_without_division_error(self, engine) -> None:
        stats = engine.get_module_stats("tags")

        assert stats.total_items == 0
        assert stats.progress == 0
        for lang in LANGUAGES:
            assert stats.language_stats[lang].progress == 0

    def test_single_language_is_always_complete(self, store) -> None:
        module = make_module("tags")
        store.write_entries("tags", "ja", {"a": "A"})

        stats = compute_module_stats(module, store, ["ja"], "ja")

        assert stats.progress == 100
        assert list(stats.language_stats) == ["ja"]

    def test_stats_carry_module_metadata(self, store) -> None:
        module = make_module(
            "origins", "origin_", display_name="Origins", icon="Globe", priority=10
        )

        stats = compute_module_stats(module, store, LANGUAGES, SOURCE_LANGUAGE)

        assert stats.module_name == "origins"
        assert stats.display_name == "Origins"
        assert stats.icon == "Globe"
        assert stats.priority == 10

    def test_unknown_module(self, engine) -> None:
        with pytest.raises(ConfigError):
            engine.get_module_stats("missing")

    @pytest.mark.asyncio
    async def test_stats_after_reconciliation_and_edit(self, engine) -> None:
        await engine.reconcile_module("tags")

        engine.update_translation(
            "tags", TranslationUpdateRequest(key="1", lang="en", value="Cat")
        )

        stats = engine.get_module_stats("tags")

        assert stats.language_stats["en"].translated == 1
        assert stats.language_stats["en"].progress == 33
        assert stats.progress == 11  # 1 of 9 slots


class TestOverview:
    """Tests for totals across modules."""

    def test_overview_totals(self, store) -> None:
        registry = ModuleRegistry([make_module("tags"), make_module("origins", "origin_")])
        _seed(store, "tags", 10, {"en": 10, "zh-CN": 0, "zh-TW": 0})
        _seed(store, "origins", 10, {"en": 0, "zh-CN": 10, "zh-TW": 0})
        stats = [
            compute_module_stats(m, store, LANGUAGES, SOURCE_LANGUAGE) for m in registry
        ]

        overview = compute_overview(stats, SOURCE_LANGUAGE)

        assert overview.total_modules == 2
        assert overview.total_items == 20
        assert overview.total_translated == 20
        assert overview.translation_progress == 33  # 20 of 60 slots
        assert overview.language_stats["en"].translated == 10
        assert overview.language_stats["en"].progress == 50
        assert overview.language_stats["ja"].progress == 100

    def test_overview_of_nothing(self) -> None:
        overview = compute_overview([], SOURCE_LANGUAGE)

        assert overview.total_modules == 0
        assert overview.translation_progress == 0
        assert overview.language_stats == {}
