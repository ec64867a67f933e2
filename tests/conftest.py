"""
Pytest configuration file for catalog-i18n tests.
"""

import sys
from pathlib import Path

import pytest

# Add backend directory to Python path for test imports
backend_path = Path(__file__).parent.parent / "backend"
sys.path.insert(0, str(backend_path))

from catalog_i18n.core import (  # noqa: E402
    ModuleRegistry,
    ReconciliationEngine,
    TranslationStore,
)
from helpers import FakeSource, LANGUAGES, SOURCE_LANGUAGE, make_module  # noqa: E402


@pytest.fixture
def store(tmp_path: Path) -> TranslationStore:
    """Translation store rooted in a temporary directory."""
    return TranslationStore(tmp_path / "i18n", SOURCE_LANGUAGE)


@pytest.fixture
def tags_source() -> FakeSource:
    return FakeSource([("1", "猫"), ("2", "犬"), ("3", "鳥")])


@pytest.fixture
def registry(tags_source: FakeSource) -> ModuleRegistry:
    return ModuleRegistry([make_module("tags", "", tags_source, priority=1)])


@pytest.fixture
def engine(registry: ModuleRegistry, store: TranslationStore) -> ReconciliationEngine:
    return ReconciliationEngine(
        registry=registry,
        store=store,
        languages=LANGUAGES,
        source_language=SOURCE_LANGUAGE,
    )
