"""API dependencies for engine access and module validation."""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Path

from catalog_i18n.config import settings
from catalog_i18n.core import ReconciliationEngine, TranslationStore
from catalog_i18n.core.scraping import build_default_registry

logger = logging.getLogger(__name__)


@lru_cache
def get_engine() -> ReconciliationEngine:
    """Build the application-wide reconciliation engine from settings.

    Tests replace this dependency through ``app.dependency_overrides``.
    """
    store = TranslationStore(settings.i18n_root, settings.source_language)
    registry = build_default_registry(settings)
    logger.info(
        "[API] Engine ready: %d modules, languages=%s, store=%s",
        len(registry),
        settings.languages,
        settings.i18n_root,
    )
    return ReconciliationEngine(
        registry=registry,
        store=store,
        languages=settings.languages,
        source_language=settings.source_language,
    )


Engine = Annotated[ReconciliationEngine, Depends(get_engine)]


async def get_validated_module_name(
    module_name: Annotated[str, Path(description="Module name")],
    engine: Engine,
) -> str:
    """Ensure the path's module name is registered.

    Raises:
        HTTPException: 400 if the module is unknown
    """
    if not engine.registry.is_valid(module_name):
        raise HTTPException(status_code=400, detail=f"Invalid module name: {module_name}")
    return module_name


# Type alias for cleaner dependency injection
ValidatedModuleName = Annotated[str, Depends(get_validated_module_name)]
