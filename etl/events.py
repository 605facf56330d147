"""Catalog change events consumed by the embedding lifecycle."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.matcher.models import Scholarship


class CatalogEventKind(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    STATUS_CHANGED = "status_changed"
    DELETED = "deleted"


@dataclass(frozen=True)
class CatalogEvent:
    """A write to the scholarship catalog.

    ``scholarship`` carries the state after the write (None for deletes);
    ``previous_status`` is the status before the write, when known.
    """
    kind: CatalogEventKind
    scholarship_id: str
    scholarship: Optional[Scholarship] = None
    previous_status: Optional[str] = None

    @classmethod
    def created(cls, scholarship: Scholarship) -> "CatalogEvent":
        return cls(CatalogEventKind.CREATED, scholarship.id, scholarship)

    @classmethod
    def updated(cls, scholarship: Scholarship, previous_status: Optional[str] = None) -> "CatalogEvent":
        return cls(CatalogEventKind.UPDATED, scholarship.id, scholarship, previous_status)

    @classmethod
    def status_changed(cls, scholarship: Scholarship, previous_status: Optional[str] = None) -> "CatalogEvent":
        return cls(CatalogEventKind.STATUS_CHANGED, scholarship.id, scholarship, previous_status)

    @classmethod
    def deleted(cls, scholarship_id: str) -> "CatalogEvent":
        return cls(CatalogEventKind.DELETED, scholarship_id)
