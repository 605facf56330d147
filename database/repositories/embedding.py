import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from core.exceptions import StoreUnavailableError
from core.matcher.models import EmbeddingRecord
from database.database import db_session_scope
from database.models import ScholarshipEmbedding
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class EmbeddingRepository(BaseRepository):
    def get(self, scholarship_id: str) -> Optional[ScholarshipEmbedding]:
        return self.db.get(ScholarshipEmbedding, scholarship_id)

    def upsert(self, record: EmbeddingRecord) -> ScholarshipEmbedding:
        return self.db.merge(ScholarshipEmbedding.from_record(record))

    def delete(self, scholarship_id: str) -> bool:
        row = self.get(scholarship_id)
        if row is None:
            return False
        self.db.delete(row)
        return True

    def list_all(self) -> List[ScholarshipEmbedding]:
        stmt = select(ScholarshipEmbedding).order_by(ScholarshipEmbedding.scholarship_id)
        return list(self.db.execute(stmt).scalars().all())


class SqlEmbeddingStore:
    """EmbeddingStore backed by the scholarship_embedding table."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, scholarship_id: str) -> Optional[EmbeddingRecord]:
        try:
            with db_session_scope(self.session_factory) as session:
                row = EmbeddingRepository(session).get(scholarship_id)
                return row.to_record() if row is not None else None
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to read embedding {scholarship_id}: {e}") from e

    def put(self, record: EmbeddingRecord) -> None:
        try:
            with db_session_scope(self.session_factory) as session:
                EmbeddingRepository(session).upsert(record)
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to write embedding {record.id}: {e}") from e

    def delete(self, scholarship_id: str) -> bool:
        try:
            with db_session_scope(self.session_factory) as session:
                return EmbeddingRepository(session).delete(scholarship_id)
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to delete embedding {scholarship_id}: {e}") from e

    def list_all(self) -> List[EmbeddingRecord]:
        try:
            with db_session_scope(self.session_factory) as session:
                rows = EmbeddingRepository(session).list_all()
                records = [row.to_record() for row in rows]
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to list embeddings: {e}") from e
        logger.debug(f"Loaded {len(records)} embeddings from database")
        return records
