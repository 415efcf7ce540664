from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time

from ..common.datetime_utils import minutes_past_midnight, parse_time_of_day
from ..core.constants import DEFAULT_LATE_THRESHOLD_MINUTES, DEFAULT_SHIFT_START


@dataclass(frozen=True)
class ShiftPolicy:
    """Expected start of work plus the grace period before an arrival is late."""

    shift_start: time = field(default_factory=lambda: parse_time_of_day(DEFAULT_SHIFT_START))
    late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES

    @classmethod
    def from_settings(cls, shift_start: str | time, late_threshold_minutes: int) -> "ShiftPolicy":
        return cls(shift_start=parse_time_of_day(shift_start), late_threshold_minutes=int(late_threshold_minutes))

    def minutes_late(self, arrival: datetime) -> int:
        """Whole minutes between shift start and ``arrival`` on the same day (seconds ignored)."""
        return minutes_past_midnight(arrival) - minutes_past_midnight(self.shift_start)

    def is_late(self, arrival: datetime) -> bool:
        return self.minutes_late(arrival) > self.late_threshold_minutes
