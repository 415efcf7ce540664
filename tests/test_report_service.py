from __future__ import annotations

from datetime import date, time, timezone

import pytest

from src.activation_system.activation_system.attendance.document_repository import DocumentAttendanceRepository
from src.activation_system.activation_system.campaigns.service import CampaignService
from src.activation_system.activation_system.core.enums import AnomalyType
from src.activation_system.activation_system.core.exceptions import InvalidWindowError
from src.activation_system.activation_system.reports.export import CSV_HEADER
from src.activation_system.activation_system.reports.service import ReportService
from src.activation_system.activation_system.shifts.model import ShiftPolicy
from src.activation_system.activation_system.users.document_user_repository import DocumentUserRepository


@pytest.fixture
def svc(seeded_store):
    return ReportService(
        DocumentAttendanceRepository(seeded_store),
        CampaignService(seeded_store),
        DocumentUserRepository(seeded_store),
    )


def test_report_for_one_day(svc):
    report = svc.build_attendance_report(start=date(2024, 1, 7), end=date(2024, 1, 7))

    assert [(r.subject_name, r.is_late) for r in report.rows] == [("Alice", False), ("Bob", True)]
    assert report.rows[0].hours_worked == 8.0
    assert report.rows[1].hours_worked is None
    assert report.skipped_events == 1
    assert report.rollup.as_dict() == {
        "totalSubjectDays": 2,
        "presentCount": 2,
        "absentCount": 0,
        "lateCount": 1,
        "attendanceRatePercent": 100,
    }


def test_report_filters_by_campaign_and_user(svc):
    by_campaign = svc.build_attendance_report(campaign_id="c2")
    by_user = svc.build_attendance_report(subject_id="ba1")

    assert {r.subject_id for r in by_campaign.rows} == {"ba2"}
    assert [r.work_date for r in by_user.rows] == [date(2024, 1, 6), date(2024, 1, 7)]


def test_report_rejects_inverted_dates(svc):
    with pytest.raises(InvalidWindowError):
        svc.build_attendance_report(start=date(2024, 1, 2), end=date(2024, 1, 1))


def test_report_csv(svc):
    report = svc.build_attendance_report(start=date(2024, 1, 7))

    lines = report.to_csv().splitlines()

    assert lines[0] == ",".join(CSV_HEADER)
    assert lines[1] == "Alice,Summer Launch,2024-01-07,09:00:00,17:00:00,8.00,Present,No"
    assert lines[2] == "Bob,Mall Tour,2024-01-07,09:45:00,-,-,Present,Yes"


def test_anomalies_for_a_day(svc):
    found = svc.detect_anomalies(work_date=date(2024, 1, 7))

    assert [(a.subject_id, a.type) for a in found] == [
        ("ba2", AnomalyType.LATE_ARRIVAL),
        ("ba2", AnomalyType.MISSING_CHECK_OUT),
        ("ba2", AnomalyType.GPS_NOT_VERIFIED),
    ]


def test_trend(svc):
    points = svc.build_trend(days=3, reference_date=date(2024, 1, 7))

    assert [(p.label, p.count) for p in points] == [("Jan 5", 0), ("Jan 6", 1), ("Jan 7", 2)]


def test_dashboard_stats(svc):
    stats = svc.dashboard_stats(today=date(2024, 1, 7))

    assert stats.total_campaigns == 2
    assert stats.total_users == 4
    assert stats.leader_count == 1
    assert stats.ba_count == 2
    assert stats.clocked_in_today == 2
    assert stats.attendance_rate_percent == 100
    assert stats.recent_campaigns == 1
    assert len(stats.trend) == 7


def test_report_shift_and_timezone_override_only_that_call(svc):
    relaxed = svc.build_attendance_report(
        start=date(2024, 1, 7),
        shift=ShiftPolicy(shift_start=time(9, 30), late_threshold_minutes=30),
        tz=timezone.utc,
    )
    default = svc.build_attendance_report(start=date(2024, 1, 7))

    assert [(r.subject_name, r.is_late) for r in relaxed.rows] == [("Alice", False), ("Bob", False)]
    assert [r.work_date for r in relaxed.rows] == [date(2024, 1, 7), date(2024, 1, 7)]
    assert default.rollup.late_count == 1
