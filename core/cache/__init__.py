"""Cache Module - Caching services."""
from core.cache.profile_embedding_cache import (
    ProfileEmbeddingCache,
    CACHE_TTL_SECONDS,
    CACHE_MAX_ENTRIES
)

__all__ = [
    'ProfileEmbeddingCache',
    'CACHE_TTL_SECONDS',
    'CACHE_MAX_ENTRIES'
]
