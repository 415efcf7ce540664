from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..core.enums import ClockKind, Role
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from ..users.service import require_role
from .repository import AttendanceEventRepository

logger = logging.getLogger(__name__)


class ClockService:
    """Use case: brand ambassadors and leaders record clock actions.

    Every action appends a new event; stored events are never edited.
    """

    def __init__(self, attendance: AttendanceEventRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def clock_in(
        self,
        subject_id: str,
        *,
        campaign_id: Optional[str],
        location: Optional[str] = None,
        gps_verified: bool = False,
        photo_ref: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        if not campaign_id:
            raise ValidationError("Select a campaign before clocking in")
        return self._record(
            subject_id,
            ClockKind.CHECK_IN,
            campaign_id=campaign_id,
            location=location,
            gps_verified=gps_verified,
            photo_ref=photo_ref,
            now=now,
        )

    def clock_out(
        self,
        subject_id: str,
        *,
        campaign_id: Optional[str] = None,
        location: Optional[str] = None,
        gps_verified: bool = False,
        photo_ref: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        return self._record(
            subject_id,
            ClockKind.CHECK_OUT,
            campaign_id=campaign_id,
            location=location,
            gps_verified=gps_verified,
            photo_ref=photo_ref,
            now=now,
        )

    def _record(self, subject_id: str, kind: ClockKind, *, campaign_id, location, gps_verified, photo_ref, now) -> str:
        user = self._users.get_by_id(subject_id)
        if not user or not user.is_active:
            raise ValidationError("User does not exist")
        require_role(user.role, Role.BA, Role.LEADER)

        now = now or datetime.now()
        event_id = self._attendance.add_event(
            subject_id=user.user_id,
            subject_name=user.name,
            kind=kind,
            timestamp=now.isoformat(),
            campaign_id=campaign_id,
            location=(location or "").strip() or None,
            gps_verified=bool(gps_verified),
            photo_ref=photo_ref,
        )
        logger.info("Recorded %s for %s (event %s)", kind.value, user.user_id, event_id)
        return event_id
