"""Matcher Module - Domain models, text encoders, vector math and embedding stores."""
from core.matcher.models import (
    StudentProfile, Scholarship, Eligibility, EmbeddingRecord,
    Universal, RestrictedTo, Restriction, UNIVERSAL, parse_restriction, parse_income
)
from core.matcher.similarity import SimilarityCalculator, cosine_similarity, top_k
from core.matcher.profile_text import profile_to_text, profile_cache_key
from core.matcher.scholarship_text import (
    scholarship_to_text, generate_text_hash, scholarship_text_hash, EMBEDDING_VERSION
)
from core.matcher.embedding_store import EmbeddingStore, InMemoryEmbeddingStore, JsonFileEmbeddingStore

__all__ = [
    'StudentProfile', 'Scholarship', 'Eligibility', 'EmbeddingRecord',
    'Universal', 'RestrictedTo', 'Restriction', 'UNIVERSAL', 'parse_restriction', 'parse_income',
    'SimilarityCalculator', 'cosine_similarity', 'top_k',
    'profile_to_text', 'profile_cache_key',
    'scholarship_to_text', 'generate_text_hash', 'scholarship_text_hash', 'EMBEDDING_VERSION',
    'EmbeddingStore', 'InMemoryEmbeddingStore', 'JsonFileEmbeddingStore',
]
