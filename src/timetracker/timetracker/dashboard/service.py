from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_choice
from ..core.enums import RequestStatus, ToastLevel
from ..core.exceptions import ValidationError
from .model import LeaveRequest, Report, ReportStat, TeamMember, TimesheetRow
from .sample_data import LEAVE_TYPES, TEAM_MEMBERS, TIMESHEET
from .session import DashboardSession

logger = logging.getLogger(__name__)

REPORT_KINDS = ("attendance", "timesheet", "leave")

_STATUS_CLASSES = {
    "approved": "success",
    "present": "success",
    "pending": "warning",
    "in progress": "warning",
    "rejected": "error",
    "on leave": "info",
}


def status_class(status: str) -> str:
    """CSS status modifier for a timesheet/leave/team status label."""
    return _STATUS_CLASSES.get((status or "").strip().lower(), "info")


def _parse_date(value: str | date, field_name: str) -> date:
    if isinstance(value, date):
        return value
    v = (value or "").strip()
    if not v:
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")


class DashboardService:
    """Dashboard use cases backed by the demo data set."""

    def __init__(
        self,
        *,
        timesheet: Sequence[TimesheetRow] = TIMESHEET,
        team: Sequence[TeamMember] = TEAM_MEMBERS,
    ):
        self._timesheet = tuple(timesheet)
        self._team = tuple(team)

    def list_timesheet(self) -> Sequence[TimesheetRow]:
        return self._timesheet

    def list_team(self) -> Sequence[TeamMember]:
        return self._team

    def submit_leave_request(
        self,
        session: DashboardSession,
        *,
        leave_type: str,
        start_date: str | date,
        end_date: str | date,
        reason: Optional[str] = None,
    ) -> LeaveRequest:
        if not (leave_type or "").strip() or not start_date or not end_date:
            raise ValidationError("Please fill in all required fields")
        kind = require_choice(leave_type, "Leave type", LEAVE_TYPES)
        start = _parse_date(start_date, "Start date")
        end = _parse_date(end_date, "End date")

        # Inclusive of both ends, whichever order the dates came in.
        days = abs((end - start).days) + 1
        request = LeaveRequest(
            leave_type=kind.capitalize(),
            start_date=start,
            end_date=end,
            days=days,
            status=RequestStatus.PENDING,
            reason=(reason or "").strip() or None,
        )
        session.leave_requests.insert(0, request)
        session.show_toast("Leave request submitted successfully", ToastLevel.SUCCESS)
        session.on_achievement("leave-requester")
        logger.info("Leave request submitted: %s, %d day(s)", request.leave_type, days)
        return request

    def generate_report(
        self,
        session: DashboardSession,
        *,
        kind: str,
        start_date: str | date,
        end_date: str | date,
    ) -> Report:
        if not start_date or not end_date:
            raise ValidationError("Please select date range")
        kind = require_choice(kind, "Report type", REPORT_KINDS)
        start = _parse_date(start_date, "Start date")
        end = _parse_date(end_date, "End date")

        if kind == "attendance":
            report = Report(
                kind=kind,
                title="Attendance Summary Report",
                start_date=start,
                end_date=end,
                stats=(
                    ReportStat("Total Working Days", "22"),
                    ReportStat("Days Present", "20"),
                    ReportStat("Days Absent", "2"),
                    ReportStat("Attendance Rate", "90.9%"),
                ),
            )
        elif kind == "timesheet":
            report = Report(
                kind=kind,
                title="Timesheet Report",
                start_date=start,
                end_date=end,
                stats=(
                    ReportStat("Total Hours", "160.5h"),
                    ReportStat("Regular Hours", "160h"),
                    ReportStat("Overtime", "0.5h"),
                    ReportStat("Average Daily Hours", "8.0h"),
                ),
            )
        else:
            used = {"Vacation": 0, "Sick": 0, "Personal": 0}
            for req in session.leave_requests:
                key = "Sick" if req.leave_type.lower().startswith("sick") else req.leave_type
                if key in used and req.status != RequestStatus.REJECTED:
                    used[key] += req.days
            report = Report(
                kind=kind,
                title="Leave Summary Report",
                start_date=start,
                end_date=end,
                stats=(
                    ReportStat("Vacation Days Used", str(used["Vacation"])),
                    ReportStat("Sick Days Used", str(used["Sick"])),
                    ReportStat("Personal Days Used", str(used["Personal"])),
                    ReportStat("Remaining Balance", "12 days"),
                ),
            )

        session.show_toast("Report generated successfully", ToastLevel.SUCCESS)
        session.on_achievement("report-generator")
        return report
