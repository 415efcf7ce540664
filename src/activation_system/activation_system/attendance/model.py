from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Any, Optional

from ..common.datetime_utils import align, end_of_day, start_of_day
from ..core.enums import AnomalyType, AttendanceStatus, ClockKind
from ..core.exceptions import InvalidWindowError


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one recorded clock action.

    ``timestamp`` is kept as stored (datetime, ISO string, epoch millis or a
    ``{"seconds": ...}`` mapping); the aggregator normalizes it.
    """

    subject_id: str
    subject_name: str
    kind: ClockKind
    timestamp: Any
    campaign_id: Optional[str] = None
    location: Optional[str] = None
    gps_verified: bool = False
    photo_ref: Optional[str] = None
    event_id: Optional[str] = None


@dataclass(frozen=True)
class ReportWindow:
    """Inclusive instant range; a missing bound is unbounded on that side.

    Plain ``date`` bounds cover whole days: the start from 00:00:00, the end
    up to 23:59:59.
    """

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self):
        if isinstance(self.start, date) and not isinstance(self.start, datetime):
            object.__setattr__(self, "start", start_of_day(self.start))
        if isinstance(self.end, date) and not isinstance(self.end, datetime):
            object.__setattr__(self, "end", end_of_day(self.end))
        self.validate()

    def validate(self) -> None:
        if self.start is None or self.end is None:
            return
        start, end = align(self.start, self.end, None)
        if start > end:
            raise InvalidWindowError("Report window start is after its end")

    def contains(self, instant: datetime, tz: Optional[tzinfo] = None) -> bool:
        if self.start is not None:
            start, value = align(self.start, instant, tz)
            if value < start:
                return False
        if self.end is not None:
            end, value = align(self.end, instant, tz)
            if value > end:
                return False
        return True

    @classmethod
    def for_dates(cls, start: Optional[date] = None, end: Optional[date] = None) -> "ReportWindow":
        """Window over whole calendar days.

        The end date is inclusive up to 23:59:59; with only a start date the
        window covers that single day.
        """
        if start is not None and end is not None and start > end:
            raise InvalidWindowError("Report window start is after its end")
        if start is not None and end is None:
            end = start
        return cls(
            start=start_of_day(start) if start is not None else None,
            end=end_of_day(end) if end is not None else None,
        )


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model: one row per (subject, day) inside a report window."""

    subject_id: str
    subject_name: str
    campaign_id: Optional[str]
    work_date: date
    first_check_in: Optional[datetime]
    last_check_out: Optional[datetime]
    hours_worked: Optional[float]
    status: AttendanceStatus
    is_late: bool
    location: Optional[str] = None
    gps_verified: bool = False


@dataclass(frozen=True)
class SummaryResult:
    summaries: list[AttendanceSummary] = field(default_factory=list)
    skipped_events: int = 0


@dataclass(frozen=True)
class Rollup:
    total_subject_days: int
    present_count: int
    absent_count: int
    late_count: int
    attendance_rate_percent: int

    def as_dict(self) -> dict:
        return {
            "totalSubjectDays": self.total_subject_days,
            "presentCount": self.present_count,
            "absentCount": self.absent_count,
            "lateCount": self.late_count,
            "attendanceRatePercent": self.attendance_rate_percent,
        }


@dataclass(frozen=True)
class TrendPoint:
    work_date: date
    label: str
    count: int


@dataclass(frozen=True)
class Anomaly:
    anomaly_id: str
    type: AnomalyType
    subject_id: str
    subject_name: str
    details: str
    timestamp: Optional[datetime]
    severity: str
