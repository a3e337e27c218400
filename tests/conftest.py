"""
Pytest configuration and shared fixtures.

This module provides common fixtures for the promo curator test suite.
"""

import logging
from pathlib import Path
import tempfile

import pytest
import yaml

from promo_curator.models.promo import PromoCategory, PromoEntry, PromoTag
from promo_curator.utils import error_handling
from promo_curator.utils import logging as curator_logging


def make_entry(**overrides) -> PromoEntry:
    """Build a PromoEntry with sensible defaults."""
    values = dict(
        id="sample",
        title="Sample Promo",
        url="https://example.com/free",
        description="Sample description",
        category=PromoCategory.MODELS,
        tags=[PromoTag.FREE_TIER],
        expiry_date="Ongoing",
        added_date="2025-01-01",
        source="Example",
        source_url="https://example.com/free",
    )
    values.update(overrides)
    return PromoEntry(**values)


@pytest.fixture
def entry_factory():
    """Factory fixture for PromoEntry objects."""
    return make_entry


@pytest.fixture
def clean_catalog():
    """A catalog without duplicate URLs or similar titles."""
    return [
        make_entry(id="gemini", title="Gemini API Free Tier", url="https://ai.google.dev/pricing"),
        make_entry(id="pinecone", title="Pinecone Starter Plan", url="https://www.pinecone.io/pricing"),
        make_entry(id="cohere", title="Cohere Trial API Key", url="https://cohere.com/pricing"),
    ]


@pytest.fixture
def catalog_with_issues():
    """A catalog with one duplicate URL pair and one similar title pair."""
    return [
        make_entry(id="one", title="Deepgram Free Credit", url="https://deepgram.com/pricing"),
        make_entry(id="two", title="Deepgram Speech Credits", url="https://www.deepgram.com/pricing/"),
        make_entry(id="three", title="AI Promo Offer", url="https://example.com/offer"),
        make_entry(id="four", title="AI Promo", url="https://example.com/promo"),
    ]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_catalog(temp_dir):
    """Write catalog entries (as dicts) to a YAML file and return its path."""

    def _write(entries, name="promos.yaml"):
        path = temp_dir / name
        path.write_text(yaml.safe_dump({"promos": entries}), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture(autouse=True)
def reset_global_state():
    """Drop global logging handlers and tracked errors between tests."""
    yield
    root_logger = logging.getLogger(curator_logging.ROOT_LOGGER_NAME)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.NOTSET)
    curator_logging._logging_manager = None
    error_handling._error_tracker = None


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to every test not marked as integration."""
    for item in items:
        if not any(marker.name == "integration" for marker in item.iter_markers()):
            item.add_marker(pytest.mark.unit)
