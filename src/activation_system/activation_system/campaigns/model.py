from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Campaign:
    """Domain entity: a marketing activation campaign."""

    campaign_id: str
    name: str
    location: Optional[str] = None
    status: str = "active"
    created_at: Optional[datetime] = None
