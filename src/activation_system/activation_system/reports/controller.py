from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..attendance.model import Anomaly, AttendanceSummary, TrendPoint
from ..common.web import json_error, query_date, roles_required, status_for
from ..core.constants import DEFAULT_TREND_DAYS
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def _iso(value):
    return value.isoformat() if value is not None else None


def summary_to_dict(s: AttendanceSummary, campaign_names: dict[str, str]) -> dict:
    return {
        "subjectId": s.subject_id,
        "subjectName": s.subject_name,
        "campaignId": s.campaign_id,
        "campaignName": campaign_names.get(s.campaign_id or "", "Unknown"),
        "date": s.work_date.isoformat(),
        "firstCheckIn": _iso(s.first_check_in),
        "lastCheckOut": _iso(s.last_check_out),
        "hoursWorked": s.hours_worked,
        "status": s.status.value,
        "isLate": s.is_late,
        "location": s.location,
        "gpsVerified": s.gps_verified,
    }


def trend_to_dict(p: TrendPoint) -> dict:
    return {"date": p.work_date.isoformat(), "label": p.label, "count": p.count}


def anomaly_to_dict(a: Anomaly) -> dict:
    return {
        "id": a.anomaly_id,
        "type": a.type.value,
        "subjectId": a.subject_id,
        "subjectName": a.subject_name,
        "details": a.details,
        "timestamp": _iso(a.timestamp),
        "severity": a.severity,
    }


def register(app: Flask, container: Container) -> None:
    def _report():
        return container.report_service.build_attendance_report(
            start=query_date("start"),
            end=query_date("end"),
            campaign_id=(request.args.get("campaign") or "").strip() or None,
            subject_id=(request.args.get("user") or "").strip() or None,
        )

    @app.route("/api/reports/attendance", endpoint="api_report_attendance")
    @roles_required(Role.ADMIN, Role.LEADER)
    def attendance_report():
        try:
            report = _report()
        except ValueError:
            return json_error("Dates must use YYYY-MM-DD", 400)
        except DomainError as e:
            return json_error(str(e), status_for(e))

        return jsonify(
            {
                "success": True,
                "rows": [summary_to_dict(r, report.campaign_names) for r in report.rows],
                "rollup": report.rollup.as_dict(),
                "skippedEvents": report.skipped_events,
            }
        )

    @app.route("/api/reports/attendance.csv", endpoint="api_report_attendance_csv")
    @roles_required(Role.ADMIN, Role.LEADER)
    def attendance_report_csv():
        try:
            report = _report()
        except ValueError:
            return json_error("Dates must use YYYY-MM-DD", 400)
        except DomainError as e:
            return json_error(str(e), status_for(e))

        start = request.args.get("start") or "all"
        end = request.args.get("end") or start
        return Response(
            report.to_csv(),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=attendance_report_{start}_to_{end}.csv"},
        )

    @app.route("/api/reports/trend", endpoint="api_report_trend")
    @roles_required(Role.ADMIN, Role.LEADER)
    def trend():
        try:
            days = int(request.args.get("days", DEFAULT_TREND_DAYS))
            points = container.report_service.build_trend(days=days, reference_date=query_date("date"))
        except ValueError:
            return json_error("Invalid trend parameters", 400)
        except DomainError as e:
            return json_error(str(e), status_for(e))
        return jsonify({"success": True, "trend": [trend_to_dict(p) for p in points]})

    @app.route("/api/reports/anomalies", endpoint="api_report_anomalies")
    @roles_required(Role.ADMIN, Role.LEADER)
    def anomalies():
        try:
            found = container.report_service.detect_anomalies(work_date=query_date("date"))
        except ValueError:
            return json_error("Dates must use YYYY-MM-DD", 400)
        return jsonify({"success": True, "anomalies": [anomaly_to_dict(a) for a in found]})

    @app.route("/api/dashboard", endpoint="api_dashboard")
    @roles_required(Role.ADMIN)
    def dashboard():
        stats = container.report_service.dashboard_stats()
        return jsonify(
            {
                "success": True,
                "totalCampaigns": stats.total_campaigns,
                "totalUsers": stats.total_users,
                "leaderCount": stats.leader_count,
                "baCount": stats.ba_count,
                "clockedInToday": stats.clocked_in_today,
                "attendanceRatePercent": stats.attendance_rate_percent,
                "recentCampaigns": stats.recent_campaigns,
                "trend": [trend_to_dict(p) for p in stats.trend],
            }
        )
