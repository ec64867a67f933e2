"""Translation completion statistics, derived from the store on demand."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from catalog_i18n.models.schemas import LanguageStats, ModuleStats, OverviewStats
from .registry import ModuleDefinition
from .storage import TranslationStore


def round_percent(numerator: int, denominator: int) -> int:
    """Percentage rounded half-up to an integer; 0 when denominator is 0."""
    if denominator <= 0:
        return 0
    ratio = Decimal(numerator) * 100 / Decimal(denominator)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def is_translated(entry) -> bool:
    """A target entry counts only with a string value and a literal True flag."""
    return (
        isinstance(entry, dict)
        and isinstance(entry.get("value"), str)
        and entry.get("translated") is True
    )


def compute_module_stats(
    module: ModuleDefinition,
    store: TranslationStore,
    languages: list[str],
    source_language: str,
) -> ModuleStats:
    """Compute per-language and overall completion for a module.

    The source file defines the universe of keys. A target entry counts as
    translated only when it holds a string value and its ``translated`` flag
    is literally True; keys
    missing from a target file count as untranslated.

    Args:
        module: Module to report on
        store: Translation store to read from
        languages: All configured languages, source language included
        source_language: Language whose file defines the keys

    Returns:
        ModuleStats for the module
    """
    source_entries = store.read_entries(module.name, source_language)
    total_items = len(source_entries)

    language_stats: dict[str, LanguageStats] = {}
    total_translated = 0

    for language in languages:
        if language == source_language:
            language_stats[language] = LanguageStats(
                total=total_items,
                translated=total_items,
                progress=100 if total_items > 0 else 0,
            )
            continue

        entries = store.read_entries(module.name, language)
        translated = sum(1 for key in source_entries if is_translated(entries.get(key)))
        language_stats[language] = LanguageStats(
            total=total_items,
            translated=translated,
            progress=round_percent(translated, total_items),
        )
        total_translated += translated

    target_count = len(languages) - 1
    if target_count > 0:
        progress = round_percent(total_translated, total_items * target_count)
    else:
        progress = 100

    return ModuleStats(
        module_name=module.name,
        display_name=module.display_name,
        description=module.description,
        icon=module.icon,
        priority=module.priority,
        estimated_time=module.estimated_time,
        total_items=total_items,
        progress=progress,
        language_stats=language_stats,
    )


def compute_overview(
    stats_list: Iterable[ModuleStats],
    source_language: str,
) -> OverviewStats:
    """Aggregate module statistics into totals across every module.

    ``total_translated`` and ``translation_progress`` only count target
    languages; the source language is reported per language like the rest.
    """
    stats_list = list(stats_list)
    total_items = sum(s.total_items for s in stats_list)

    per_language: dict[str, list[int]] = {}
    for stats in stats_list:
        for language, lang_stats in stats.language_stats.items():
            totals = per_language.setdefault(language, [0, 0])
            totals[0] += lang_stats.total
            totals[1] += lang_stats.translated

    language_stats = {
        language: LanguageStats(
            total=total,
            translated=translated,
            progress=round_percent(translated, total),
        )
        for language, (total, translated) in per_language.items()
    }

    target_totals = [v for k, v in per_language.items() if k != source_language]
    total_translated = sum(translated for _, translated in target_totals)
    total_slots = sum(total for total, _ in target_totals)

    return OverviewStats(
        total_modules=len(stats_list),
        total_items=total_items,
        total_translated=total_translated,
        translation_progress=round_percent(total_translated, total_slots),
        language_stats=language_stats,
    )
