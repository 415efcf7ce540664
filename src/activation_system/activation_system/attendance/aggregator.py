from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import (
    align,
    calendar_date,
    date_range_ending,
    localize,
    parse_timestamp,
    short_label,
    to_naive,
    today_local,
)
from ..core.constants import DEFAULT_TREND_DAYS
from ..core.enums import AttendanceStatus, ClockKind
from ..core.exceptions import ValidationError
from ..shifts.model import ShiftPolicy
from .model import AttendanceEvent, AttendanceSummary, ReportWindow, Rollup, SummaryResult, TrendPoint

logger = logging.getLogger(__name__)


def percent(part: int, total: int) -> int:
    """Whole percentage rounded half up (Math.round), 0 for an empty total."""
    if not total:
        return 0
    return int(math.floor(part * 100 / total + 0.5))


@dataclass(frozen=True)
class _Stamped:
    event: AttendanceEvent
    instant: datetime


class AttendanceAggregator:
    """Turns raw clock events into per-subject-per-day rows and window statistics.

    Every operation is a pure function of its arguments: inputs are never
    mutated and no state is kept between calls.

    ``tz`` is the timezone policy for calendar days and time-of-day. ``None``
    keeps each timestamp in the zone it is expressed in (no cross-timezone
    normalization); a ``tzinfo`` converts aware timestamps into that zone
    first. Naive timestamps are always taken as-is.
    """

    def __init__(self, *, shift: Optional[ShiftPolicy] = None, tz: Optional[tzinfo] = None):
        self._shift = shift or ShiftPolicy()
        self._tz = tz

    @property
    def shift(self) -> ShiftPolicy:
        return self._shift

    @property
    def tz(self) -> Optional[tzinfo]:
        return self._tz

    def summarize(
        self,
        events: Iterable[AttendanceEvent],
        window: Optional[ReportWindow] = None,
        shift_start: Optional[time] = None,
        late_threshold_minutes: Optional[int] = None,
    ) -> SummaryResult:
        if window is not None:
            window.validate()

        shift = ShiftPolicy(
            shift_start=shift_start if shift_start is not None else self._shift.shift_start,
            late_threshold_minutes=(
                int(late_threshold_minutes)
                if late_threshold_minutes is not None
                else self._shift.late_threshold_minutes
            ),
        )

        stamped, skipped = self._normalize(events)

        groups: dict[tuple[str, date], list[_Stamped]] = {}
        for item in stamped:
            if window is not None and not window.contains(item.instant, self._tz):
                continue
            key = (item.event.subject_id, calendar_date(item.instant, self._tz))
            groups.setdefault(key, []).append(item)

        summaries = [self._summarize_group(work_date, items, shift) for (_, work_date), items in groups.items()]
        summaries.sort(key=lambda s: (s.work_date, s.subject_name, s.subject_id))

        if skipped:
            logger.debug("Skipped %d attendance events with unreadable timestamps", skipped)
        return SummaryResult(summaries=summaries, skipped_events=skipped)

    def rollup(self, summaries: Sequence[AttendanceSummary]) -> Rollup:
        total = len(summaries)
        present = sum(1 for s in summaries if s.status == AttendanceStatus.PRESENT)
        late = sum(1 for s in summaries if s.is_late)
        rate = percent(present, total)
        return Rollup(
            total_subject_days=total,
            present_count=present,
            absent_count=total - present,
            late_count=late,
            attendance_rate_percent=rate,
        )

    def trend(
        self,
        events: Iterable[AttendanceEvent],
        days: int = DEFAULT_TREND_DAYS,
        reference_date: Optional[date] = None,
    ) -> list[TrendPoint]:
        """Dense daily check-in counts for ``days`` days ending on ``reference_date``."""
        if int(days) < 1:
            raise ValidationError("Trend needs at least one day")

        reference_date = reference_date or today_local()
        slots = date_range_ending(reference_date, int(days))
        counts = {d: 0 for d in slots}

        stamped, _ = self._normalize(events)
        for item in stamped:
            if item.event.kind != ClockKind.CHECK_IN:
                continue
            day = calendar_date(item.instant, self._tz)
            if day in counts:
                counts[day] += 1

        return [TrendPoint(work_date=d, label=short_label(d), count=counts[d]) for d in slots]

    def _normalize(self, events: Iterable[AttendanceEvent]) -> tuple[list[_Stamped], int]:
        stamped: list[_Stamped] = []
        skipped = 0
        for event in events:
            instant = parse_timestamp(event.timestamp)
            if instant is None:
                skipped += 1
                continue
            stamped.append(_Stamped(event=event, instant=instant))
        return stamped, skipped

    def _summarize_group(self, work_date: date, items: list[_Stamped], shift: ShiftPolicy) -> AttendanceSummary:
        ordered = sorted(
            items,
            key=lambda i: (
                to_naive(i.instant, self._tz),
                i.event.kind.value,
                i.event.event_id or "",
                i.event.campaign_id or "",
            ),
        )
        first = ordered[0].event

        check_ins = [i for i in ordered if i.event.kind == ClockKind.CHECK_IN]
        check_outs = [i for i in ordered if i.event.kind == ClockKind.CHECK_OUT]
        first_in = check_ins[0] if check_ins else None
        last_out = check_outs[-1] if check_outs else None

        hours_worked = None
        if first_in is not None and last_out is not None:
            start, end = align(first_in.instant, last_out.instant, self._tz)
            # Negative values (out before in) are reported as-is.
            hours_worked = (end - start).total_seconds() / 3600.0

        first_in_at = localize(first_in.instant, self._tz) if first_in else None
        last_out_at = localize(last_out.instant, self._tz) if last_out else None

        return AttendanceSummary(
            subject_id=first.subject_id,
            subject_name=first.subject_name,
            campaign_id=first.campaign_id,
            work_date=work_date,
            first_check_in=first_in_at,
            last_check_out=last_out_at,
            hours_worked=hours_worked,
            status=AttendanceStatus.PRESENT if first_in else AttendanceStatus.ABSENT,
            is_late=bool(first_in_at and shift.is_late(first_in_at)),
            location=first_in.event.location if first_in else None,
            gps_verified=bool(first_in.event.gps_verified) if first_in else False,
        )
