"""Profile Embedding Cache - in-process TTL cache for profile vectors."""
import logging
import threading
import time
from typing import Callable, List, Optional

from cachetools import TTLCache

from core.llm.interfaces import EmbeddingProvider
from core.matcher.models import StudentProfile
from core.matcher.profile_text import profile_cache_key, profile_to_text

logger = logging.getLogger(__name__)

# 30 minutes in seconds
CACHE_TTL_SECONDS = 30 * 60
CACHE_MAX_ENTRIES = 10000

# Fixed pool of locks; profiles whose keys hash to the same slot serialize
LOCK_STRIPES = 64


class ProfileEmbeddingCache:
    """
    Cache of profile embeddings keyed by profile_cache_key.

    Backed by ``cachetools.TTLCache``: an entry is served while its age is
    below the TTL and is replaced on the next miss after that. The least
    recently used entries are evicted once ``max_entries`` is reached. Concurrent misses
    for the same profile make a single provider call.
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = CACHE_MAX_ENTRIES
    ):
        self.provider = provider
        self.ttl_seconds = ttl_seconds
        self._entries: TTLCache = TTLCache(maxsize=max_entries, ttl=ttl_seconds, timer=clock)
        self._key_locks = [threading.Lock() for _ in range(LOCK_STRIPES)]
        # TTLCache is not thread-safe
        self._lock = threading.Lock()

    def _cached(self, key: str) -> Optional[List[float]]:
        with self._lock:
            return self._entries.get(key)

    def _lock_for(self, key: str) -> threading.Lock:
        return self._key_locks[hash(key) % LOCK_STRIPES]

    def get_or_compute(self, profile: StudentProfile) -> List[float]:
        """
        Return the profile's embedding, calling the provider on a miss.

        Raises:
            ProviderUnavailableError: if the provider fails on a miss
            MalformedInputError: if the profile cannot be rendered
        """
        key = profile_cache_key(profile)

        vector = self._cached(key)
        if vector is not None:
            logger.debug("Profile embedding cache hit")
            return vector

        with self._lock_for(key):
            # Another thread may have filled the entry while we waited
            vector = self._cached(key)
            if vector is not None:
                return vector

            logger.debug("Profile embedding cache miss, calling provider")
            vector = self.provider.generate_embedding(profile_to_text(profile))

            with self._lock:
                self._entries[key] = vector
            return vector

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)
