"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- A provider registry with the counting test providers
- A persistence delegate double
- A fresh processor cache and selector per test
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from billing_processors.models import ProcessorConfig  # noqa: E402
from billing_processors.persistence import PersistenceMechanism  # noqa: E402
from billing_processors.processors import ProcessorCache, ProcessorSelector  # noqa: E402
from billing_processors.providers import ProviderFactory  # noqa: E402
from tests.fixtures import CountingProvider, IdOnlyProvider, SequenceRandom  # noqa: E402


@pytest.fixture(autouse=True)
def reset_counting_provider():
    """Reset the construction counter between tests."""
    CountingProvider.constructions = 0
    yield
    CountingProvider.constructions = 0


@pytest.fixture
def provider_factory():
    """Registry with the test providers registered."""
    factory = ProviderFactory()
    factory.register_provider("counting", CountingProvider)
    factory.register_provider("id_only", IdOnlyProvider)
    return factory


@pytest.fixture
def persistence():
    """Persistence delegate double."""
    return MagicMock(spec=PersistenceMechanism)


@pytest.fixture
def processor_cache(provider_factory, persistence):
    """Fresh, empty processor cache."""
    return ProcessorCache(provider_factory, persistence)


@pytest.fixture
def selector(processor_cache):
    """Selector whose default random source has no draws queued."""
    return ProcessorSelector(processor_cache, SequenceRandom())


@pytest.fixture
def make_config():
    """Factory for counting-provider configs."""

    def _make_config(provider_id="primary", weight=1, enabled=True, class_name="counting", **params):
        return ProcessorConfig(
            provider_id=provider_id,
            class_name=class_name,
            enabled=enabled,
            weight=weight,
            **params,
        )

    return _make_config
