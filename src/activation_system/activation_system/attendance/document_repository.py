from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..core.constants import COLLECTION_ATTENDANCE
from ..core.enums import ClockKind
from ..database.store import DocumentStore
from .model import AttendanceEvent
from .repository import AttendanceEventRepository

logger = logging.getLogger(__name__)


def _first(doc: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = doc.get(key)
        if value is not None and value != "":
            return value
    return default


def event_from_document(doc: dict) -> Optional[AttendanceEvent]:
    """Map an attendance document to an event.

    The admin, leader and BA pages wrote slightly different field names, so
    each field is looked up under every spelling. Returns None for documents
    without a subject or with an unknown clock type.
    """
    subject_id = _first(doc, "userId", "staff_id", "subject_id", "user_id")
    if subject_id is None:
        logger.warning("Dropping attendance document %s without a subject", doc.get("id"))
        return None

    try:
        kind = ClockKind.parse(_first(doc, "type", "kind"))
    except ValueError:
        logger.warning("Dropping attendance document %s with clock type %r", doc.get("id"), doc.get("type"))
        return None

    campaign_id = _first(doc, "campaignId", "campaign_id")
    return AttendanceEvent(
        subject_id=str(subject_id),
        subject_name=str(_first(doc, "userName", "staff_name", "subject_name", default="")),
        kind=kind,
        timestamp=doc.get("timestamp"),
        campaign_id=str(campaign_id) if campaign_id is not None else None,
        location=_first(doc, "location"),
        gps_verified=bool(_first(doc, "gps_verified", "gpsVerified", default=False)),
        photo_ref=_first(doc, "photo", "photoRef", "photo_ref"),
        event_id=str(doc["id"]) if doc.get("id") is not None else None,
    )


class DocumentAttendanceRepository(AttendanceEventRepository):
    def __init__(self, store: DocumentStore, *, collection: str = COLLECTION_ATTENDANCE):
        self._store = store
        self._collection = collection

    def list_events(self) -> Sequence[AttendanceEvent]:
        events = []
        for doc in self._store.get_all(self._collection):
            event = event_from_document(doc)
            if event is not None:
                events.append(event)
        return events

    def add_event(
        self,
        *,
        subject_id: str,
        subject_name: str,
        kind: ClockKind,
        timestamp: Any,
        campaign_id: Optional[str] = None,
        location: Optional[str] = None,
        gps_verified: bool = False,
        photo_ref: Optional[str] = None,
    ) -> str:
        return self._store.add(
            self._collection,
            {
                "userId": subject_id,
                "userName": subject_name,
                "campaignId": campaign_id,
                "type": kind.value,
                "timestamp": timestamp,
                "location": location,
                "gps_verified": bool(gps_verified),
                "photo": photo_ref,
            },
        )
