from .base import Base
from .scholarship import ScholarshipEmbedding, EMBEDDING_DIMENSIONS

__all__ = [
    'Base',
    'ScholarshipEmbedding',
    'EMBEDDING_DIMENSIONS',
]
