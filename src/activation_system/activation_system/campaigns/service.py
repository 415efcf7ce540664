from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import align, now_local, parse_timestamp
from ..common.validators import require_non_empty
from ..core.constants import COLLECTION_CAMPAIGNS
from ..database.store import DocumentStore
from .model import Campaign

logger = logging.getLogger(__name__)


def _to_campaign(doc: dict) -> Campaign:
    return Campaign(
        campaign_id=str(doc["id"]),
        name=str(doc.get("name") or ""),
        location=doc.get("location"),
        status=str(doc.get("status") or "active"),
        created_at=parse_timestamp(doc.get("createdAt", doc.get("created_at"))),
    )


class CampaignService:
    def __init__(self, store: DocumentStore, *, collection: str = COLLECTION_CAMPAIGNS):
        self._store = store
        self._collection = collection

    def list_campaigns(self) -> Sequence[Campaign]:
        return [_to_campaign(doc) for doc in self._store.get_all(self._collection)]

    def create_campaign(self, *, name: str, location: Optional[str] = None, now: Optional[datetime] = None) -> str:
        name = require_non_empty(name, "Campaign name")
        now = now or now_local()
        campaign_id = self._store.add(
            self._collection,
            {
                "name": name,
                "location": (location or "").strip() or None,
                "status": "active",
                "createdAt": now.isoformat(),
            },
        )
        logger.info("Campaign %s created (%s)", campaign_id, name)
        return campaign_id

    def name_lookup(self) -> dict[str, str]:
        return {c.campaign_id: c.name for c in self.list_campaigns()}

    def count_created_since(self, since: datetime) -> int:
        count = 0
        for c in self.list_campaigns():
            if c.created_at is None:
                continue
            created, bound = align(c.created_at, since, None)
            if created >= bound:
                count += 1
        return count
