from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for the dashboard role check."""

    ADMIN = "admin"
    LEADER = "leader"
    BA = "ba"


class ClockKind(str, Enum):
    """Kind of a recorded clock action."""

    CHECK_IN = "checkin"
    CHECK_OUT = "checkout"

    @classmethod
    def parse(cls, value) -> "ClockKind":
        """Accept the spellings written by the different dashboards.

        A missing value counts as a check-in, like the reports page does.
        """
        if value is None or value == "":
            return cls.CHECK_IN
        if isinstance(value, ClockKind):
            return value
        key = str(value).strip().lower().replace("_", "").replace("-", "")
        if key in {"in", "checkin", "clockin"}:
            return cls.CHECK_IN
        if key in {"out", "checkout", "clockout"}:
            return cls.CHECK_OUT
        raise ValueError(f"Unknown clock kind: {value!r}")


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"


class AnomalyType(str, Enum):
    LATE_ARRIVAL = "Late Arrival"
    MISSING_CHECK_OUT = "Missing Check-Out"
    GPS_NOT_VERIFIED = "GPS Not Verified"
