"""Catalog translation core.

This package provides:
- TranslationStore: per-module, per-language JSON files
- ModuleRegistry: the modules to scrape and how their keys are namespaced
- ReconciliationEngine: merges fresh scrapes without losing translations
- Statistics helpers for per-language and per-module completion
"""

from .exceptions import (
    CatalogI18nError,
    ConfigError,
    ValidationError,
    UpstreamFetchError,
    StorageError,
)
from .registry import ModuleDefinition, ModuleRegistry, ItemSource
from .storage import TranslationStore
from .statistics import compute_module_stats, compute_overview, round_percent
from .reconciliation import ReconciliationEngine

__all__ = [
    "CatalogI18nError",
    "ConfigError",
    "ValidationError",
    "UpstreamFetchError",
    "StorageError",
    "ModuleDefinition",
    "ModuleRegistry",
    "ItemSource",
    "TranslationStore",
    "compute_module_stats",
    "compute_overview",
    "round_percent",
    "ReconciliationEngine",
]
