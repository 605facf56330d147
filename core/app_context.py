from dataclasses import dataclass
from typing import Optional

from core.cache.profile_embedding_cache import ProfileEmbeddingCache
from core.config_loader import AppConfig
from core.llm.interfaces import EmbeddingProvider
from core.llm.openai_service import OpenAIEmbeddingService
from core.matcher.embedding_store import EmbeddingStore, InMemoryEmbeddingStore, JsonFileEmbeddingStore
from core.scorer.service import RecommendationService
from database.catalog import JsonScholarshipCatalog
from etl.embedding_lifecycle import EmbeddingLifecycleManager
from etl.embedding_worker import EmbeddingSyncWorker


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Each context owns its own profile cache, store handle and worker, so
    separate contexts (e.g. in tests) never share mutable state.
    """
    config: AppConfig
    provider: EmbeddingProvider
    store: EmbeddingStore
    catalog: JsonScholarshipCatalog  # or any catalog with list_approved/get/subscribe
    profile_cache: ProfileEmbeddingCache
    recommendation_service: RecommendationService
    lifecycle: EmbeddingLifecycleManager
    worker: Optional[EmbeddingSyncWorker] = None

    @classmethod
    def build(
        cls,
        config: AppConfig,
        provider: Optional[EmbeddingProvider] = None,
        store: Optional[EmbeddingStore] = None,
        catalog=None
    ) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            provider: Override for the embedding provider
            store: Override for the embedding store
            catalog: Override for the scholarship catalog

        Returns:
            Fully wired AppContext instance (worker not started)
        """
        provider = provider or OpenAIEmbeddingService(config.embedding)
        store = store or cls._build_store(config)
        catalog = catalog or JsonScholarshipCatalog(config.catalog.data_dir)

        profile_cache = ProfileEmbeddingCache(
            provider,
            ttl_seconds=config.profile_cache.ttl_seconds,
            max_entries=config.profile_cache.max_entries
        )
        recommendation_service = RecommendationService(
            profile_cache=profile_cache,
            store=store,
            config=config.ranking,
            provider=provider
        )
        lifecycle = EmbeddingLifecycleManager(provider, store)
        worker = EmbeddingSyncWorker(
            lifecycle,
            max_queue_size=config.worker.max_queue_size,
            failure_history_size=config.worker.failure_history_size
        )
        # Catalog writes reach the embedding store through the worker
        catalog.subscribe(worker.submit)

        return cls(
            config=config,
            provider=provider,
            store=store,
            catalog=catalog,
            profile_cache=profile_cache,
            recommendation_service=recommendation_service,
            lifecycle=lifecycle,
            worker=worker
        )

    @staticmethod
    def _build_store(config: AppConfig) -> EmbeddingStore:
        """Build the embedding store for the configured backend."""
        backend = config.store.backend
        if backend == "memory":
            return InMemoryEmbeddingStore()
        if backend == "json":
            return JsonFileEmbeddingStore(config.store.embeddings_file)

        from database.database import build_session_factory
        from database.repositories.embedding import SqlEmbeddingStore

        return SqlEmbeddingStore(build_session_factory(config.database.url))

    def shutdown(self) -> None:
        if self.worker is not None:
            self.worker.stop()
