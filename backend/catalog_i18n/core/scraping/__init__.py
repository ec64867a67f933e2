"""Item sources for the upstream catalog site."""

from .page_walker import PageWalker, parse_listing_page
from .modules import build_default_registry

__all__ = ["PageWalker", "parse_listing_page", "build_default_registry"]
