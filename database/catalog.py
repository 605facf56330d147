"""
Scholarship catalog readers.

The public catalog lives in ``scholarships.json``; donor-submitted
scholarships live in ``private-scholarships.json`` and only the approved
ones are served.

Catalogs publish a CatalogEvent for every change they observe to the
callbacks registered with ``subscribe``. The app wires the embedding sync
worker there so the embedding store follows the approved set.
"""
import json
import logging
import os
import threading
from typing import Callable, Dict, List, Optional, Sequence

from core.exceptions import CatalogUnavailableError
from core.matcher.models import Scholarship, STATUS_APPROVED, STATUS_PENDING
from etl.events import CatalogEvent

logger = logging.getLogger(__name__)

PUBLIC_CATALOG_FILE = "scholarships.json"
PRIVATE_CATALOG_FILE = "private-scholarships.json"

CatalogListener = Callable[[CatalogEvent], object]


def catalog_changes(
    previous: Sequence[Scholarship],
    current: Sequence[Scholarship]
) -> List[CatalogEvent]:
    """Events that turn ``previous`` into ``current``, matched by id."""
    before = {s.id: s for s in previous}
    after = {s.id: s for s in current}

    events = []
    for scholarship in current:
        old = before.get(scholarship.id)
        if old is None:
            events.append(CatalogEvent.created(scholarship))
        elif old.status != scholarship.status:
            events.append(CatalogEvent.status_changed(scholarship, previous_status=old.status))
        elif old != scholarship:
            events.append(CatalogEvent.updated(scholarship, previous_status=old.status))
    for scholarship_id in before.keys() - after.keys():
        events.append(CatalogEvent.deleted(scholarship_id))
    return events


class _ChangePublisher:
    def __init__(self):
        self._listeners: List[CatalogListener] = []

    def subscribe(self, listener: CatalogListener) -> None:
        """Register a callback invoked with each CatalogEvent."""
        self._listeners.append(listener)

    def _publish(self, events: Sequence[CatalogEvent]) -> None:
        for event in events:
            logger.debug(f"Catalog {event.kind.value}: {event.scholarship_id}")
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    logger.exception(f"Catalog listener failed on {event.kind.value} {event.scholarship_id}")


class InMemoryScholarshipCatalog(_ChangePublisher):
    def __init__(self, scholarships: Optional[Sequence[Scholarship]] = None):
        super().__init__()
        self._scholarships: Dict[str, Scholarship] = {s.id: s for s in scholarships or []}
        self._lock = threading.Lock()

    def list_approved(self) -> List[Scholarship]:
        with self._lock:
            return [s for s in self._scholarships.values() if s.is_approved]

    def get(self, scholarship_id: str) -> Optional[Scholarship]:
        with self._lock:
            return self._scholarships.get(scholarship_id)

    def save(self, scholarship: Scholarship) -> None:
        """Insert or replace a scholarship and notify subscribers."""
        with self._lock:
            previous = self._scholarships.get(scholarship.id)
            self._scholarships[scholarship.id] = scholarship
        self._publish(catalog_changes([previous] if previous else [], [scholarship]))

    def delete(self, scholarship_id: str) -> bool:
        with self._lock:
            removed = self._scholarships.pop(scholarship_id, None)
        if removed is None:
            return False
        self._publish([CatalogEvent.deleted(scholarship_id)])
        return True


class JsonScholarshipCatalog(_ChangePublisher):
    """Lazily loaded, per-instance snapshot of the JSON catalog files."""

    def __init__(self, data_dir: str):
        super().__init__()
        self.data_dir = data_dir
        self._snapshot: Optional[List[Scholarship]] = None
        self._lock = threading.Lock()

    def _read_file(self, filename: str, default_status: str, required: bool) -> List[Scholarship]:
        path = os.path.join(self.data_dir, filename)
        if not os.path.exists(path):
            if required:
                raise CatalogUnavailableError(f"Scholarship catalog not found: {path}")
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            return [Scholarship.from_dict(item, default_status=default_status) for item in raw]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise CatalogUnavailableError(f"Cannot read scholarship catalog {path}: {e}") from e

    def _read_all(self) -> List[Scholarship]:
        public = self._read_file(PUBLIC_CATALOG_FILE, STATUS_APPROVED, required=True)
        private = [
            s for s in self._read_file(PRIVATE_CATALOG_FILE, STATUS_PENDING, required=False)
            if s.status == STATUS_APPROVED
        ]
        logger.info(
            f"Loaded {len(public)} public and {len(private)} approved private scholarships "
            f"from {self.data_dir}"
        )
        return public + private

    def _load(self) -> List[Scholarship]:
        with self._lock:
            if self._snapshot is None:
                self._snapshot = self._read_all()
            return self._snapshot

    def list_approved(self) -> List[Scholarship]:
        return [s for s in self._load() if s.is_approved]

    def get(self, scholarship_id: str) -> Optional[Scholarship]:
        by_id: Dict[str, Scholarship] = {s.id: s for s in self._load()}
        return by_id.get(scholarship_id)

    def reload(self) -> List[CatalogEvent]:
        """
        Re-read the catalog files and notify subscribers of what changed.

        Nothing is published on the first load. On a read error the current
        snapshot is kept and CatalogUnavailableError propagates.
        """
        with self._lock:
            previous = self._snapshot
            self._snapshot = self._read_all()
            current = self._snapshot

        if previous is None:
            return []
        events = catalog_changes(previous, current)
        if events:
            logger.info(f"Catalog reload found {len(events)} changes")
        self._publish(events)
        return events
