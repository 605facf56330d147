"""
Pytest configuration and fixtures.

Shared fakes live in tests/mocks/embedding_mocks.py.
"""

import pytest

from core.cache.profile_embedding_cache import ProfileEmbeddingCache
from core.config_loader import RankingConfig
from core.matcher.embedding_store import InMemoryEmbeddingStore
from core.scorer.service import RecommendationService
from tests.mocks.embedding_mocks import FakeClock, FakeEmbeddingProvider


@pytest.fixture
def fake_provider():
    """Provider returning [1, 0] for every text."""
    return FakeEmbeddingProvider(vector=[1.0, 0.0])


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def memory_store():
    return InMemoryEmbeddingStore()


@pytest.fixture
def profile_cache(fake_provider, fake_clock):
    return ProfileEmbeddingCache(fake_provider, clock=fake_clock)


@pytest.fixture
def recommendation_service(profile_cache, memory_store):
    return RecommendationService(profile_cache, memory_store, RankingConfig())
