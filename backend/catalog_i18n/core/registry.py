"""Module registry.

A module is a content category (tags, origins, a tag group...) scraped and
translated independently. The registry is an explicit, ordered value handed
to the reconciliation engine, so tests can supply fake modules and item
sources without touching global state.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Iterator

from catalog_i18n.models.schemas import ScrapedItem
from .exceptions import ConfigError

# Capability attached to every module: fetch the current items of the section.
ItemSource = Callable[[], Awaitable[list[ScrapedItem]]]


@dataclass(frozen=True)
class ModuleDefinition:
    """Static description of one module."""

    name: str
    key_prefix: str
    fetch_items: ItemSource

    # Dashboard metadata
    display_name: str = ""
    description: str = ""
    icon: str = "Tag"
    priority: int = 0
    estimated_time: int = 30  # seconds

    def key_for(self, item_id: str) -> str:
        """Build the storage key of a scraped item."""
        return f"{self.key_prefix}{item_id}"


class ModuleRegistry:
    """Ordered collection of modules, looked up by name."""

    def __init__(self, modules: Iterable[ModuleDefinition] = ()):
        self._modules: dict[str, ModuleDefinition] = {}
        for module in modules:
            self.register(module)

    def register(self, module: ModuleDefinition) -> None:
        """Add a module.

        Raises:
            ConfigError: If a module with the same name is already registered
        """
        if module.name in self._modules:
            raise ConfigError(
                f"Module already registered: {module.name}", module_name=module.name
            )
        self._modules[module.name] = module

    def get(self, module_name: str) -> ModuleDefinition:
        """Resolve a module by name.

        Raises:
            ConfigError: If no module has that name
        """
        try:
            return self._modules[module_name]
        except KeyError:
            raise ConfigError(
                f"Module config not found: {module_name}", module_name=module_name
            ) from None

    def is_valid(self, module_name: str) -> bool:
        return module_name in self._modules

    def names(self) -> list[str]:
        return list(self._modules)

    def by_priority(self) -> list[ModuleDefinition]:
        """Modules sorted by dashboard priority (registration order breaks ties)."""
        return sorted(self._modules.values(), key=lambda m: m.priority)

    def total_estimated_time(self) -> int:
        return sum(m.estimated_time for m in self._modules.values())

    def __iter__(self) -> Iterator[ModuleDefinition]:
        return iter(self._modules.values())

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module_name: object) -> bool:
        return module_name in self._modules
