"""Translation store and reconciliation schemas.

These models describe what flows through the reconciliation engine:
raw scraped items in, per-language entries on disk, and the outcome
records returned to the API and CLI.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class ScrapedItem(BaseModel):
    """Raw record produced by an item source."""

    id: str = Field(..., description="Opaque identifier from the source site")
    name: str = Field(..., description="Source-language display text")


class TranslationValue(BaseModel):
    """Stored value of one key in a target-language file."""

    value: str
    translated: bool = False


class ScrapeOutcome(BaseModel):
    """Result of reconciling a single module."""

    module_name: str
    items_processed: int = 0
    new_items: int = 0
    updated_items: int = 0
    duration: int = Field(default=0, description="Elapsed time in milliseconds")
    success: bool
    error: Optional[str] = None


class BatchOutcome(BaseModel):
    """Result of reconciling every registered module."""

    total_modules: int
    successful_modules: int
    failed_modules: int
    results: list[ScrapeOutcome] = Field(default_factory=list)
    total_duration: int = Field(default=0, description="Elapsed time in milliseconds")

    def failed_module_names(self) -> list[str]:
        """Names of modules that failed, in run order (for targeted retries)."""
        return [r.module_name for r in self.results if not r.success]


class ModuleRow(BaseModel):
    """One key of a module with its value in every configured language.

    The source language column holds the plain source string; every
    other column holds a TranslationValue.
    """

    key: str
    translations: dict[str, Union[TranslationValue, str]]


class TranslationUpdateRequest(BaseModel):
    """Targeted edit of a single translation."""

    key: str = Field(..., min_length=1)
    lang: str = Field(..., min_length=1)
    value: str
    translated: Optional[bool] = None
