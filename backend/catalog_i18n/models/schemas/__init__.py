"""Shared Pydantic schemas for the core and the API."""

from .translation import (
    ScrapedItem,
    TranslationValue,
    ScrapeOutcome,
    BatchOutcome,
    ModuleRow,
    TranslationUpdateRequest,
)
from .stats import (
    LanguageStats,
    ModuleStats,
    ModuleInfo,
    OverviewStats,
)
from .api import ApiResponse

__all__ = [
    "ScrapedItem",
    "TranslationValue",
    "ScrapeOutcome",
    "BatchOutcome",
    "ModuleRow",
    "TranslationUpdateRequest",
    "LanguageStats",
    "ModuleStats",
    "ModuleInfo",
    "OverviewStats",
    "ApiResponse",
]
