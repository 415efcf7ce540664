from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..core.enums import ClockKind
from .model import AttendanceEvent


class AttendanceEventRepository(Protocol):
    def list_events(self) -> Sequence[AttendanceEvent]:
        """Every stored event; callers filter in memory."""

        raise NotImplementedError

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
        raise NotImplementedError
