from database.repositories.base import BaseRepository
from database.repositories.embedding import EmbeddingRepository, SqlEmbeddingStore

__all__ = [
    'BaseRepository',
    'EmbeddingRepository',
    'SqlEmbeddingStore',
]
