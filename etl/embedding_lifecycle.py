#!/usr/bin/env python3
"""
Embedding Lifecycle - generate, store, refresh and delete scholarship embeddings.

An embedding is current when its schema version equals EMBEDDING_VERSION
and, if the record carries a text hash, that hash matches the hash of the
scholarship's current rendered text. Records without a hash predate hash
tracking and are trusted.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence
import logging

from core.exceptions import ProviderUnavailableError
from core.llm.interfaces import EmbeddingProvider
from core.matcher.embedding_store import EmbeddingStore
from core.matcher.models import EmbeddingRecord, Scholarship
from core.matcher.scholarship_text import EMBEDDING_VERSION, generate_text_hash, scholarship_to_text
from etl.events import CatalogEvent, CatalogEventKind

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_embedding_up_to_date(
    scholarship: Scholarship,
    record: Optional[EmbeddingRecord],
    version: str = EMBEDDING_VERSION
) -> bool:
    """Check a stored record against the scholarship's current content."""
    if record is None:
        return False

    if record.version != version:
        return False

    if record.text_hash:
        current_hash = generate_text_hash(scholarship_to_text(scholarship))
        if record.text_hash != current_hash:
            return False

    return True


def scholarships_needing_embeddings(
    scholarships: Sequence[Scholarship],
    records: Sequence[EmbeddingRecord],
    version: str = EMBEDDING_VERSION
) -> List[Scholarship]:
    """Scholarships whose embedding is missing or stale."""
    by_id = {r.id: r for r in records}
    return [s for s in scholarships if not is_embedding_up_to_date(s, by_id.get(s.id), version)]


@dataclass
class SyncSummary:
    """Outcome of a batch sync."""
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    removed: int = 0
    failed: int = 0

    @property
    def total_written(self) -> int:
        return self.created + self.updated


class EmbeddingLifecycleManager:
    """
    Keeps the embedding store aligned with the approved scholarship set.

    ``generate`` never retries and never raises for provider failures; it
    returns None so the caller decides what a failure means. Store errors
    from ``upsert``/``remove`` propagate as StoreUnavailableError.
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        store: EmbeddingStore,
        version: str = EMBEDDING_VERSION,
        clock: Callable[[], datetime] = _utcnow
    ):
        self.provider = provider
        self.store = store
        self.version = version
        self._clock = clock

    def generate(self, scholarship: Scholarship) -> Optional[EmbeddingRecord]:
        """Render and embed a scholarship. Returns None if the provider fails."""
        text = scholarship_to_text(scholarship)
        try:
            embedding = self.provider.generate_embedding(text)
        except ProviderUnavailableError as e:
            logger.error(f"Failed to generate embedding for scholarship {scholarship.id}: {e}")
            return None

        return EmbeddingRecord(
            id=scholarship.id,
            embedding=embedding,
            model=self.provider.model_name,
            version=self.version,
            generated_at=self._clock(),
            text_hash=generate_text_hash(text)
        )

    def upsert(self, scholarship: Scholarship) -> Optional[EmbeddingRecord]:
        """Generate and store (replacing any existing record for the same id)."""
        record = self.generate(scholarship)
        if record is None:
            return None
        self.store.put(record)
        logger.info(f"Stored embedding for scholarship {scholarship.id} (version {self.version})")
        return record

    def remove(self, scholarship_id: str) -> bool:
        """Delete the record for a scholarship. No-op if absent."""
        removed = self.store.delete(scholarship_id)
        if removed:
            logger.info(f"Removed embedding for scholarship {scholarship_id}")
        return removed

    def is_up_to_date(self, scholarship: Scholarship, record: Optional[EmbeddingRecord]) -> bool:
        return is_embedding_up_to_date(scholarship, record, self.version)

    def handle_event(self, event: CatalogEvent) -> bool:
        """
        Apply a catalog write to the store.

        - deleted: remove
        - created/updated/status_changed while approved: upsert
        - any other non-deleted event (not approved): remove

        Returns:
            False if an embedding had to be generated and the provider failed
        """
        if event.kind == CatalogEventKind.DELETED:
            self.remove(event.scholarship_id)
            return True

        scholarship = event.scholarship
        if scholarship is None:
            raise ValueError(f"{event.kind.value} event for {event.scholarship_id} carries no scholarship")

        if scholarship.is_approved:
            return self.upsert(scholarship) is not None

        # Not approved: make sure no record is left behind; no-op if absent
        self.remove(scholarship.id)
        return True

    def sync(self, scholarships: Sequence[Scholarship], force: bool = False) -> SyncSummary:
        """
        Bring the store in line with the given approved scholarships.

        Incremental by default: only missing or stale records are regenerated.
        ``force`` regenerates every record. Records whose scholarship is not
        in the set are deleted.
        """
        summary = SyncSummary()
        approved = [s for s in scholarships if s.is_approved]
        existing: Dict[str, EmbeddingRecord] = {r.id: r for r in self.store.list_all()}

        for scholarship in approved:
            record = existing.get(scholarship.id)
            if not force and self.is_up_to_date(scholarship, record):
                summary.unchanged += 1
                continue

            action = "Updating" if record is not None else "Generating"
            logger.info(f"  {action}: {scholarship.name}")
            if self.upsert(scholarship) is None:
                summary.failed += 1
            elif record is not None:
                summary.updated += 1
            else:
                summary.created += 1

        current_ids = {s.id for s in approved}
        for orphan_id in existing.keys() - current_ids:
            if self.remove(orphan_id):
                summary.removed += 1

        logger.info(
            f"Embedding sync complete: {summary.created} new, {summary.updated} updated, "
            f"{summary.unchanged} unchanged, {summary.removed} removed, {summary.failed} failed"
        )
        return summary
