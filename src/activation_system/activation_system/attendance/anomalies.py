from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AnomalyType, AttendanceStatus
from ..shifts.model import ShiftPolicy
from .model import Anomaly, AttendanceSummary


def detect_anomalies(
    summaries: Sequence[AttendanceSummary],
    *,
    shift: Optional[ShiftPolicy] = None,
    work_date: Optional[date] = None,
) -> list[Anomaly]:
    """Flag late arrivals, missing check-outs and unverified GPS check-ins.

    Rows keep the order of ``summaries``; each row can raise several flags.
    """
    shift = shift or ShiftPolicy()
    found: list[Anomaly] = []

    for s in summaries:
        if work_date is not None and s.work_date != work_date:
            continue
        if s.status != AttendanceStatus.PRESENT or s.first_check_in is None:
            continue

        suffix = f"{s.subject_id}_{s.work_date.isoformat()}"

        if s.is_late:
            found.append(
                Anomaly(
                    anomaly_id=f"late_{suffix}",
                    type=AnomalyType.LATE_ARRIVAL,
                    subject_id=s.subject_id,
                    subject_name=s.subject_name,
                    details=f"Arrived {shift.minutes_late(s.first_check_in)} minutes after shift start",
                    timestamp=s.first_check_in,
                    severity="warning",
                )
            )

        if s.last_check_out is None:
            found.append(
                Anomaly(
                    anomaly_id=f"nocheckout_{suffix}",
                    type=AnomalyType.MISSING_CHECK_OUT,
                    subject_id=s.subject_id,
                    subject_name=s.subject_name,
                    details=f"No check-out recorded. Last seen at {s.first_check_in.strftime('%H:%M:%S')}",
                    timestamp=s.first_check_in,
                    severity="alert",
                )
            )

        if not s.gps_verified:
            found.append(
                Anomaly(
                    anomaly_id=f"nogps_{suffix}",
                    type=AnomalyType.GPS_NOT_VERIFIED,
                    subject_id=s.subject_id,
                    subject_name=s.subject_name,
                    details=f"GPS verification failed at {s.location or 'unknown location'}",
                    timestamp=s.first_check_in,
                    severity="info",
                )
            )

    return found
