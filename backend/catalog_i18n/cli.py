"""Command-line scrape runner.

Usage:
    catalog-i18n-scrape                     # reconcile every module
    catalog-i18n-scrape -m tags -m origins  # reconcile selected modules
    catalog-i18n-scrape --list              # list registered modules
    catalog-i18n-scrape --stats             # print translation progress
"""

import argparse
import asyncio
import sys
from typing import Optional

from catalog_i18n.config import settings
from catalog_i18n.core import ConfigError, ReconciliationEngine, TranslationStore
from catalog_i18n.core.scraping import build_default_registry
from catalog_i18n.main import configure_logging
from catalog_i18n.models.schemas import ScrapeOutcome


def build_engine() -> ReconciliationEngine:
    return ReconciliationEngine(
        registry=build_default_registry(settings),
        store=TranslationStore(settings.i18n_root, settings.source_language),
        languages=settings.languages,
        source_language=settings.source_language,
    )


def format_outcome(outcome: ScrapeOutcome) -> str:
    if outcome.success:
        return (
            f"  OK    {outcome.module_name}: {outcome.items_processed} items, "
            f"{outcome.new_items} new, {outcome.updated_items} updated "
            f"({outcome.duration}ms)"
        )
    return f"  FAIL  {outcome.module_name}: {outcome.error} ({outcome.duration}ms)"


async def run_scrape(engine: ReconciliationEngine, module_names: list[str]) -> int:
    """Reconcile the given modules (all when empty). Returns the exit code."""
    if not module_names:
        batch = await engine.reconcile_all()
        for outcome in batch.results:
            print(format_outcome(outcome))
        print(
            f"{batch.successful_modules}/{batch.total_modules} modules succeeded "
            f"in {batch.total_duration}ms"
        )
        if batch.failed_modules:
            print("Retry failed modules with: " + " ".join(
                f"-m {name}" for name in batch.failed_module_names()
            ))
        return 1 if batch.failed_modules else 0

    failed = 0
    for name in module_names:
        outcome = await engine.reconcile_module(name)
        print(format_outcome(outcome))
        if not outcome.success:
            failed += 1
    return 1 if failed else 0


def print_stats(engine: ReconciliationEngine) -> None:
    for module in engine.registry.by_priority():
        stats = engine.get_module_stats(module.name)
        languages = ", ".join(
            f"{lang} {ls.translated}/{ls.total} ({ls.progress}%)"
            for lang, ls in stats.language_stats.items()
        )
        print(f"{module.name:<14} {stats.progress:>3}%  {languages}")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Scrape catalog modules and merge them into the translation files."
    )
    parser.add_argument(
        "-m", "--module", action="append", default=[], dest="modules",
        help="Module to scrape (repeatable). Defaults to all modules.",
    )
    parser.add_argument("--list", action="store_true", help="List registered modules and exit")
    parser.add_argument("--stats", action="store_true", help="Print translation progress and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else settings.log_level)
    engine = build_engine()

    if args.list:
        for module in engine.registry:
            print(f"{module.name:<14} prefix={module.key_prefix!r:<16} {module.description}")
        return 0

    if args.stats:
        print_stats(engine)
        return 0

    try:
        for name in args.modules:
            engine.registry.get(name)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return asyncio.run(run_scrape(engine, args.modules))


if __name__ == "__main__":
    sys.exit(main())
