"""Exception hierarchy for the catalog translation core.

ConfigError and ValidationError are raised straight to the caller.
UpstreamFetchError and StorageError raised during reconciliation are
captured into a failed ScrapeOutcome instead of propagating.
"""

from __future__ import annotations

from typing import Any


class CatalogI18nError(Exception):
    """Base exception for all catalog translation errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary of additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(CatalogI18nError):
    """Unknown module name (or other registry misconfiguration)."""

    def __init__(self, message: str, module_name: str | None = None):
        super().__init__(message, {"module_name": module_name} if module_name else None)
        self.module_name = module_name


class ValidationError(CatalogI18nError):
    """Rejected translation edit, e.g. a write to the source language."""

    def __init__(self, message: str, language: str | None = None):
        super().__init__(message, {"language": language} if language else None)
        self.language = language


class UpstreamFetchError(CatalogI18nError):
    """The item source failed: network, parse or unexpected site structure.

    Attributes:
        url: The page being fetched when the failure happened, if known
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, {"url": url} if url else None)
        self.url = url


class StorageError(CatalogI18nError):
    """A translation file could not be written.

    Attributes:
        path: The file that failed
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message, {"path": path} if path else None)
        self.path = path
