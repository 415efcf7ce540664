from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from ..attendance.aggregator import AttendanceAggregator, percent
from ..attendance.anomalies import detect_anomalies
from ..attendance.model import Anomaly, AttendanceSummary, ReportWindow, Rollup, TrendPoint
from ..attendance.repository import AttendanceEventRepository
from ..campaigns.service import CampaignService
from ..common.datetime_utils import calendar_date, parse_timestamp, start_of_day, today_local
from ..core.constants import DEFAULT_TREND_DAYS, RECENT_CAMPAIGN_DAYS
from ..core.enums import ClockKind, Role
from ..shifts.model import ShiftPolicy
from ..users.repository import UserRepository
from .export import summaries_to_csv


@dataclass(frozen=True)
class AttendanceReport:
    rows: list[AttendanceSummary]
    rollup: Rollup
    skipped_events: int
    campaign_names: dict[str, str] = field(default_factory=dict)

    def to_csv(self) -> str:
        return summaries_to_csv(self.rows, self.campaign_names)


@dataclass(frozen=True)
class DashboardStats:
    total_campaigns: int
    total_users: int
    leader_count: int
    ba_count: int
    clocked_in_today: int
    attendance_rate_percent: int
    recent_campaigns: int
    trend: list[TrendPoint]


class ReportService:
    """Use case: attendance reports for the admin and leader dashboards.

    Events are fetched in full and filtered in memory; the store is not
    expected to support range queries.
    """

    def __init__(
        self,
        attendance: AttendanceEventRepository,
        campaigns: CampaignService,
        users: UserRepository,
        *,
        aggregator: Optional[AttendanceAggregator] = None,
    ):
        self._attendance = attendance
        self._campaigns = campaigns
        self._users = users
        self._aggregator = aggregator or AttendanceAggregator()

    def build_attendance_report(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        campaign_id: Optional[str] = None,
        subject_id: Optional[str] = None,
        shift: Optional[ShiftPolicy] = None,
        tz: Optional[tzinfo] = None,
    ) -> AttendanceReport:
        """Rows and rollup for the window; ``shift`` and ``tz`` override the configured policy."""
        window = ReportWindow.for_dates(start, end)
        events = [
            e
            for e in self._attendance.list_events()
            if (not campaign_id or e.campaign_id == campaign_id) and (not subject_id or e.subject_id == subject_id)
        ]

        aggregator = self._aggregator
        if shift is not None or tz is not None:
            aggregator = AttendanceAggregator(
                shift=shift or aggregator.shift,
                tz=tz if tz is not None else aggregator.tz,
            )

        result = aggregator.summarize(events, window)
        return AttendanceReport(
            rows=result.summaries,
            rollup=aggregator.rollup(result.summaries),
            skipped_events=result.skipped_events,
            campaign_names=self._campaigns.name_lookup(),
        )

    def build_trend(self, *, days: int = DEFAULT_TREND_DAYS, reference_date: Optional[date] = None) -> list[TrendPoint]:
        return self._aggregator.trend(self._attendance.list_events(), days, reference_date)

    def detect_anomalies(self, *, work_date: Optional[date] = None) -> list[Anomaly]:
        work_date = work_date or today_local()
        result = self._aggregator.summarize(self._attendance.list_events(), ReportWindow.for_dates(work_date))
        return detect_anomalies(result.summaries, shift=self._aggregator.shift, work_date=work_date)

    def dashboard_stats(self, *, today: Optional[date] = None) -> DashboardStats:
        today = today or today_local()
        users = self._users.list_users()
        leaders = sum(1 for u in users if u.role == Role.LEADER)
        ambassadors = sum(1 for u in users if u.role == Role.BA)

        events = self._attendance.list_events()
        clocked_in = set()
        for e in events:
            if e.kind != ClockKind.CHECK_IN:
                continue
            instant = parse_timestamp(e.timestamp)
            if instant is not None and calendar_date(instant, self._aggregator.tz) == today:
                clocked_in.add(e.subject_id)

        since: datetime = start_of_day(today) - timedelta(days=RECENT_CAMPAIGN_DAYS)

        return DashboardStats(
            total_campaigns=len(self._campaigns.list_campaigns()),
            total_users=len(users),
            leader_count=leaders,
            ba_count=ambassadors,
            clocked_in_today=len(clocked_in),
            attendance_rate_percent=percent(len(clocked_in), ambassadors),
            recent_campaigns=self._campaigns.count_created_since(since),
            trend=self._aggregator.trend(events, DEFAULT_TREND_DAYS, today),
        )
