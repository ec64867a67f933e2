"""Derived statistics schemas. Nothing here is persisted."""

from pydantic import BaseModel, Field


class LanguageStats(BaseModel):
    """Completion of one language within a module."""

    total: int
    translated: int
    progress: int = Field(..., ge=0, le=100, description="Rounded percentage")


class ModuleStats(BaseModel):
    """Completion of a module across all configured languages."""

    module_name: str
    display_name: str = ""
    description: str = ""
    icon: str = ""
    priority: int = 0
    estimated_time: int = 0
    total_items: int
    progress: int
    language_stats: dict[str, LanguageStats] = Field(default_factory=dict)


class ModuleInfo(BaseModel):
    """Dashboard list entry for a module."""

    name: str
    display_name: str
    description: str
    icon: str
    priority: int
    total_items: int
    progress: int
    estimated_time: int


class OverviewStats(BaseModel):
    """Totals across every module."""

    total_modules: int
    total_items: int
    total_translated: int
    translation_progress: int
    language_stats: dict[str, LanguageStats] = Field(default_factory=dict)
