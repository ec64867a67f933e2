"""Default module registry for the upstream catalog site."""

from catalog_i18n.config import Settings
from catalog_i18n.core.registry import ModuleDefinition, ModuleRegistry
from .page_walker import PageWalker

TAG_GROUP_COUNT = 8


def _listing_source(url: str, settings: Settings):
    """Bind a page walker to a listing URL as a module item source."""

    async def fetch_items():
        return await PageWalker(url, settings).fetch()

    return fetch_items


def build_default_registry(settings: Settings) -> ModuleRegistry:
    """Build the registry of every scraped section.

    Args:
        settings: Application settings (base URL and scraper tuning)

    Returns:
        Registry with tags, origins and each tag group
    """
    base_url = settings.scrape_base_url.rstrip("/")
    modules = [
        ModuleDefinition(
            name="tags",
            key_prefix="",
            fetch_items=_listing_source(f"{base_url}/tags", settings),
            display_name="Tags",
            description=f"All tags [{base_url}/tags]",
            icon="Tag",
            priority=1,
            estimated_time=30,
        ),
        ModuleDefinition(
            name="origins",
            key_prefix="origin_",
            fetch_items=_listing_source(f"{base_url}/origins", settings),
            display_name="Origins",
            description=f"All origins [{base_url}/origins]",
            icon="Globe",
            priority=TAG_GROUP_COUNT + 2,
            estimated_time=30,
        ),
    ]

    for group in range(1, TAG_GROUP_COUNT + 1):
        url = f"{base_url}/tag-groups/{group}"
        modules.append(
            ModuleDefinition(
                name=f"tag_group_{group}",
                key_prefix=f"tag_group_{group}_",
                fetch_items=_listing_source(url, settings),
                display_name=f"Tag Group {group}",
                description=f"Tags in group {group} [{url}]",
                icon="Tag",
                priority=1 + group,
                estimated_time=15,
            )
        )

    return ModuleRegistry(modules)
