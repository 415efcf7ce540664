from __future__ import annotations

import csv
import io
from typing import Mapping, Sequence

from ..attendance.model import AttendanceSummary

CSV_HEADER = ["Staff", "Campaign", "Date", "Check-In", "Check-Out", "Hours Worked", "Status", "Late"]


def summaries_to_csv(rows: Sequence[AttendanceSummary], campaign_names: Mapping[str, str]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in rows:
        writer.writerow(
            [
                r.subject_name,
                campaign_names.get(r.campaign_id or "", "Unknown"),
                r.work_date.isoformat(),
                r.first_check_in.strftime("%H:%M:%S") if r.first_check_in else "-",
                r.last_check_out.strftime("%H:%M:%S") if r.last_check_out else "-",
                f"{r.hours_worked:.2f}" if r.hours_worked is not None else "-",
                r.status.value,
                "Yes" if r.is_late else "No",
            ]
        )
    return buf.getvalue()
