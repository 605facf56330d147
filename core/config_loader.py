import yaml
import os
from typing import Optional, Literal
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: Optional[str] = None


class EmbeddingConfig(BaseModel):
    """Embedding provider settings (OpenAI or Azure OpenAI)."""
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    azure_endpoint: Optional[str] = None  # Switches to AzureOpenAI when set
    api_version: str = "2024-04-01-preview"
    model: str = "text-embedding-ada-002"  # Deployment name on Azure
    dimensions: Optional[int] = None  # None = model default
    timeout_seconds: float = 30.0
    max_attempts: int = 3


class EligibilityWeights(BaseModel):
    """Per-dimension weights for rule-based eligibility scoring (max 110)."""
    state_specific: int = 25
    state_universal: int = 10
    category: int = 20
    income: int = 15
    education_level: int = 15
    gender: int = 10
    disability: int = 5
    religion: int = 5
    area: int = 5
    course: int = 10


class RankingConfig(BaseModel):
    """
    Configuration for the hybrid ranker.

    final = round(eligibility_weight * eligibility + semantic_weight * semantic)
    when semantic matching contributed, otherwise final = eligibility.
    """
    eligibility_weight: float = 0.7
    semantic_weight: float = 0.3

    # Thresholds
    min_recommendation_score: int = 20
    min_semantic_suggestion_score: int = 40
    strong_semantic_match: int = 60
    good_semantic_match: int = 40

    # Limits
    max_recommendations: int = 20
    max_semantic_suggestions: int = 5
    search_top_k: int = 5

    eligibility_weights: EligibilityWeights = Field(default_factory=EligibilityWeights)


class ProfileCacheConfig(BaseModel):
    ttl_seconds: float = 30 * 60
    max_entries: int = 10000


class StoreConfig(BaseModel):
    backend: Literal["memory", "json", "postgres"] = "json"
    embeddings_file: str = "data/embeddings.json"


class CatalogConfig(BaseModel):
    data_dir: str = "data"


class WorkerConfig(BaseModel):
    """Background embedding worker settings."""
    max_queue_size: int = 1000  # 0 = unbounded
    failure_history_size: int = 100


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    profile_cache: ProfileCacheConfig = Field(default_factory=ProfileCacheConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    worker: WorkerConfig = Field(default_factory=WorkerConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from root), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        if data.get('database') is None:
            data['database'] = {}
        data['database']['url'] = env_db_url

    # Allow env var overrides for the embedding provider
    embedding_overrides = {
        'azure_endpoint': os.environ.get("AZURE_OPENAI_ENDPOINT"),
        'api_key': os.environ.get("AZURE_OPENAI_KEY") or os.environ.get("OPENAI_API_KEY"),
        'model': os.environ.get("AZURE_OPENAI_EMBEDDING_DEPLOYMENT"),
        'base_url': os.environ.get("OPENAI_BASE_URL"),
    }
    for key, value in embedding_overrides.items():
        if value:
            if data.get('embedding') is None:
                data['embedding'] = {}
            data['embedding'][key] = value

    # Allow env var override for the scholarship data directory
    env_data_dir = os.environ.get("SCHOLARSHIP_DATA_DIR")
    if env_data_dir:
        if data.get('catalog') is None:
            data['catalog'] = {}
        data['catalog']['data_dir'] = env_data_dir

    return AppConfig(**data)
