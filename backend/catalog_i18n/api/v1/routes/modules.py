"""Module data, statistics and translation editing routes."""

import logging
from typing import Literal

from fastapi import APIRouter, Query

from catalog_i18n.core import CatalogI18nError, compute_overview
from catalog_i18n.models.schemas import (
    ApiResponse,
    ModuleInfo,
    ModuleStats,
    TranslationUpdateRequest,
)
from catalog_i18n.api.dependencies import Engine, ValidatedModuleName

logger = logging.getLogger(__name__)

router = APIRouter()


def _collect_stats(engine) -> list[ModuleStats]:
    """Stats for every module; a module that fails reports zeros."""
    all_stats = []
    for module in engine.registry:
        try:
            all_stats.append(engine.get_module_stats(module.name))
        except CatalogI18nError as e:
            logger.error(f"[API] Failed to fetch statistics for module {module.name}: {e}")
            all_stats.append(
                ModuleStats(
                    module_name=module.name,
                    display_name=module.display_name,
                    description=module.description,
                    icon=module.icon,
                    priority=module.priority,
                    estimated_time=module.estimated_time,
                    total_items=0,
                    progress=0,
                )
            )
    return all_stats


@router.get("/modules")
async def list_modules(engine: Engine) -> ApiResponse:
    """Get summary information for all modules, sorted by priority."""
    logger.info("[API] Fetching statistics for all modules")

    module_infos = [
        ModuleInfo(
            name=stats.module_name,
            display_name=stats.display_name,
            description=stats.description,
            icon=stats.icon,
            priority=stats.priority,
            total_items=stats.total_items,
            progress=stats.progress,
            estimated_time=stats.estimated_time,
        )
        for stats in _collect_stats(engine)
    ]
    module_infos.sort(key=lambda m: m.priority)

    return ApiResponse(
        success=True,
        data=module_infos,
        message=f"Successfully retrieved information for {len(module_infos)} modules",
    )


@router.get("/modules/overview")
async def get_overview(engine: Engine) -> ApiResponse:
    """Get translation totals across every module."""
    overview = compute_overview(_collect_stats(engine), engine.source_language)
    return ApiResponse(success=True, data=overview)


@router.get("/modules/{module_name}")
async def get_module(
    module_name: ValidatedModuleName,
    engine: Engine,
    type: Literal["data", "stats"] = Query(default="data"),
) -> ApiResponse:
    """Get a module's aggregated rows (type=data) or its statistics (type=stats)."""
    logger.info(f"[API] Fetching module data: {module_name}, type: {type}")

    if type == "stats":
        return ApiResponse(success=True, data=engine.get_module_stats(module_name))

    rows = engine.get_aggregated_module_data(module_name)
    return ApiResponse(
        success=True,
        data=rows,
        message=f"Retrieved module {module_name} data, {len(rows)} records total",
    )


@router.patch("/modules/{module_name}")
async def update_module_translation(
    module_name: ValidatedModuleName,
    request: TranslationUpdateRequest,
    engine: Engine,
) -> ApiResponse:
    """Replace one translation of a module.

    The entry is replaced as a whole: send the current value when only
    toggling the translated flag.
    """
    logger.info(
        f'[API] Updating translation: {module_name}.{request.key}.{request.lang} = '
        f'"{request.value}", translated: {request.translated}'
    )

    entry = engine.update_translation(module_name, request)

    return ApiResponse(
        success=True,
        data=entry,
        message=f"Translation updated: {request.key} ({request.lang})",
    )
