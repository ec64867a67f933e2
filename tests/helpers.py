"""Shared helpers for catalog-i18n tests."""

from typing import Optional

from catalog_i18n.core import ModuleDefinition
from catalog_i18n.models.schemas import ScrapedItem

LANGUAGES = ["ja", "en", "zh-CN", "zh-TW"]
SOURCE_LANGUAGE = "ja"
TARGET_LANGUAGES = ["en", "zh-CN", "zh-TW"]


class FakeSource:
    """Item source whose items (or failure) can be changed between runs."""

    def __init__(self, items: Optional[list[tuple[str, str]]] = None):
        self.items = items or []
        self.error: Optional[Exception] = None
        self.calls = 0

    async def __call__(self) -> list[ScrapedItem]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [ScrapedItem(id=item_id, name=name) for item_id, name in self.items]


def make_module(
    name: str,
    key_prefix: str = "",
    source: Optional[FakeSource] = None,
    **kwargs,
) -> ModuleDefinition:
    return ModuleDefinition(
        name=name,
        key_prefix=key_prefix,
        fetch_items=source or FakeSource(),
        display_name=kwargs.pop("display_name", name.title()),
        **kwargs,
    )
