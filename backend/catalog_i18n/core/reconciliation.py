"""Reconciliation engine - merges fresh scrapes into the translation store.

For every module the engine:
1. Fetches the current items from the module's item source
2. Rebuilds the source-language file from scratch
3. Rebuilds each target-language file from the scraped items, copying
   existing entries verbatim and seeding new keys as untranslated
4. Reports how many keys were new or had changed source text

Modules are processed one at a time. Nothing here locks the store, so
callers must not run two reconciliations of the same module concurrently,
nor race one against a manual edit.
"""

import logging
import time

from catalog_i18n.models.schemas import (
    BatchOutcome,
    ModuleRow,
    ModuleStats,
    ScrapedItem,
    ScrapeOutcome,
    TranslationUpdateRequest,
    TranslationValue,
)
from .exceptions import (
    CatalogI18nError,
    UpstreamFetchError,
    ValidationError,
)
from .registry import ModuleDefinition, ModuleRegistry
from .statistics import compute_module_stats
from .storage import TranslationStore

logger = logging.getLogger(__name__)


def _elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)


def _failed_outcome(module_name: str, start_time: float, error: Exception) -> ScrapeOutcome:
    return ScrapeOutcome(
        module_name=module_name,
        duration=_elapsed_ms(start_time),
        success=False,
        error=str(error) or error.__class__.__name__,
    )


def _as_text(value) -> str:
    """Coerce a hand-edited source value to display text."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class ReconciliationEngine:
    """Keep per-language translation files in step with the scraped catalog."""

    def __init__(
        self,
        registry: ModuleRegistry,
        store: TranslationStore,
        languages: list[str],
        source_language: str,
    ):
        """Initialize the engine.

        Args:
            registry: Modules to reconcile, in run order
            store: Translation store to read and write
            languages: All tracked languages, source language included
            source_language: Language the scraped text is in
        """
        if source_language not in languages:
            raise ValueError(
                f"source_language '{source_language}' must be one of {languages}"
            )
        self.registry = registry
        self.store = store
        self.languages = list(languages)
        self.source_language = source_language

    @property
    def target_languages(self) -> list[str]:
        return [lang for lang in self.languages if lang != self.source_language]

    # =========================================================================
    # Scraping
    # =========================================================================

    async def reconcile_module(self, module_name: str) -> ScrapeOutcome:
        """Scrape one module and merge the result into its language files.

        Item source and storage failures are captured in the returned
        outcome so a batch run can move on to the next module.

        Args:
            module_name: Registry name of the module

        Returns:
            ScrapeOutcome with counts on success, or the error on failure

        Raises:
            ConfigError: If the module is not registered (before any I/O)
        """
        module = self.registry.get(module_name)
        start_time = time.monotonic()

        logger.info(f"[Scraper] Starting to process module: {module_name}")

        try:
            items = await self._fetch_items(module)
            logger.info(f"[Scraper] {module_name} scraped {len(items)} items")

            new_items, updated_items = self._write_source_language(module, items)
            for language in self.target_languages:
                self._write_target_language(module, language, items)

        except (CatalogI18nError, OSError) as e:
            logger.error(f"[Scraper] {module_name} processing failed: {e}")
            return _failed_outcome(module_name, start_time, e)
        except Exception as e:
            logger.exception(f"[Scraper] {module_name} processing failed unexpectedly")
            return _failed_outcome(module_name, start_time, e)

        outcome = ScrapeOutcome(
            module_name=module_name,
            items_processed=len(items),
            new_items=new_items,
            updated_items=updated_items,
            duration=_elapsed_ms(start_time),
            success=True,
        )
        logger.info(
            f"[Scraper] {module_name} processing completed: "
            f"items={outcome.items_processed}, new={outcome.new_items}, "
            f"updated={outcome.updated_items}, duration={outcome.duration}ms"
        )
        return outcome

    async def reconcile_all(self) -> BatchOutcome:
        """Reconcile every registered module, sequentially.

        A failing module never stops the batch; its outcome is recorded with
        success=False and the run continues with the next module.
        """
        start_time = time.monotonic()
        results: list[ScrapeOutcome] = []

        logger.info(f"[Scraper] Starting batch scraping of {len(self.registry)} modules")

        for module in self.registry:
            results.append(await self.reconcile_module(module.name))

        successful = sum(1 for r in results if r.success)
        batch = BatchOutcome(
            total_modules=len(results),
            successful_modules=successful,
            failed_modules=len(results) - successful,
            results=results,
            total_duration=_elapsed_ms(start_time),
        )

        if batch.failed_modules:
            logger.warning(
                "[Scraper] Batch scraping completed with %d failed module(s): %s",
                batch.failed_modules,
                batch.failed_module_names(),
            )
        else:
            logger.info(
                "[Scraper] Batch scraping completed: %d modules in %dms",
                batch.total_modules,
                batch.total_duration,
            )
        return batch

    async def _fetch_items(self, module: ModuleDefinition) -> list[ScrapedItem]:
        """Call the module's item source, normalizing any failure."""
        try:
            items = await module.fetch_items()
            return [
                item if isinstance(item, ScrapedItem) else ScrapedItem.model_validate(item)
                for item in items
            ]
        except UpstreamFetchError:
            raise
        except Exception as e:
            raise UpstreamFetchError(f"{module.name} scraping failed: {e}") from e

    def _write_source_language(
        self, module: ModuleDefinition, items: list[ScrapedItem]
    ) -> tuple[int, int]:
        """Rebuild the source-language file; return (new, updated) counts."""
        existing = self.store.read_entries(module.name, self.source_language)

        # Duplicate ids within one scrape: last write wins
        fresh: dict[str, str] = {}
        for item in items:
            fresh[module.key_for(item.id)] = item.name

        new_items = sum(1 for key in fresh if key not in existing)
        updated_items = sum(
            1 for key, name in fresh.items() if key in existing and existing[key] != name
        )

        self.store.write_entries(module.name, self.source_language, fresh)
        return new_items, updated_items

    def _write_target_language(
        self, module: ModuleDefinition, language: str, items: list[ScrapedItem]
    ) -> None:
        """Rebuild a target-language file, preserving existing entries."""
        existing = self.store.read_entries(module.name, language)
        fresh: dict[str, dict] = {}

        for item in items:
            key = module.key_for(item.id)
            if key in existing:
                fresh[key] = existing[key]
            else:
                fresh[key] = {"value": item.name, "translated": False}

        self.store.write_entries(module.name, language, fresh)

    # =========================================================================
    # Reading and editing
    # =========================================================================

    def get_aggregated_module_data(self, module_name: str) -> list[ModuleRow]:
        """Merge all language files of a module into one row per key.

        Raises:
            ConfigError: If the module is not registered
        """
        self.registry.get(module_name)

        source_entries = self.store.read_entries(module_name, self.source_language)
        target_entries = {
            language: self.store.read_entries(module_name, language)
            for language in self.target_languages
        }

        rows = []
        for key, raw_source in source_entries.items():
            source_text = _as_text(raw_source)
            translations: dict[str, TranslationValue | str] = {}
            for language in self.languages:
                if language == self.source_language:
                    translations[language] = source_text
                    continue
                stored = target_entries[language].get(key)
                # Entries without a string value read as missing
                if isinstance(stored, dict) and isinstance(stored.get("value"), str):
                    translations[language] = TranslationValue(
                        value=stored["value"],
                        translated=stored.get("translated") is True,
                    )
                else:
                    translations[language] = TranslationValue(
                        value=source_text, translated=False
                    )
            rows.append(ModuleRow(key=key, translations=translations))
        return rows

    def update_translation(
        self, module_name: str, request: TranslationUpdateRequest
    ) -> TranslationValue:
        """Replace a single translation entry.

        Raises:
            ConfigError: If the module is not registered
            ValidationError: If the language is the source language or unknown
            StorageError: If the file could not be written
        """
        self.registry.get(module_name)

        if request.lang == self.source_language:
            raise ValidationError(
                "Cannot directly modify source language file", language=request.lang
            )
        if request.lang not in self.languages:
            raise ValidationError(
                f"Invalid language code: {request.lang}", language=request.lang
            )

        entry = self.store.update_single_translation(
            module_name,
            request.key,
            request.lang,
            request.value,
            request.translated,
        )
        logger.info(
            f'[Scraper] Updated translation: {module_name}.{request.key}.{request.lang}, '
            f'value: "{request.value}", translated: {entry["translated"]}'
        )
        return TranslationValue(**entry)

    def get_module_stats(self, module_name: str) -> ModuleStats:
        """Compute completion statistics for a module.

        Raises:
            ConfigError: If the module is not registered
        """
        module = self.registry.get(module_name)
        return compute_module_stats(
            module, self.store, self.languages, self.source_language
        )
