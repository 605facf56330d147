from sqlalchemy import Column, Text, TIMESTAMP, Index
from sqlalchemy.sql import text as sql_text
from pgvector.sqlalchemy import Vector

from core.matcher.models import EmbeddingRecord
from .base import Base

# text-embedding-ada-002 output size
EMBEDDING_DIMENSIONS = 1536


class ScholarshipEmbedding(Base):
    """
    One embedding per scholarship, keyed by the catalog id.

    Regeneration replaces the row in place; deleting or un-approving a
    scholarship deletes it.
    """
    __tablename__ = 'scholarship_embedding'

    scholarship_id = Column(Text, primary_key=True)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS), nullable=False)

    model = Column(Text, nullable=False)
    version = Column(Text, nullable=False)
    text_hash = Column(Text, nullable=True)  # NULL for rows written before hash tracking
    generated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))

    __table_args__ = (
        Index('idx_se_embedding_hnsw', 'embedding', postgresql_using='hnsw', postgresql_with={'m': 16, 'ef_construction': 64}, postgresql_ops={'embedding': 'vector_cosine_ops'}),
    )

    def to_record(self) -> EmbeddingRecord:
        return EmbeddingRecord(
            id=self.scholarship_id,
            embedding=[float(x) for x in self.embedding],
            model=self.model,
            version=self.version,
            generated_at=self.generated_at,
            text_hash=self.text_hash
        )

    @classmethod
    def from_record(cls, record: EmbeddingRecord) -> "ScholarshipEmbedding":
        return cls(
            scholarship_id=record.id,
            embedding=list(record.embedding),
            model=record.model,
            version=record.version,
            generated_at=record.generated_at,
            text_hash=record.text_hash
        )
