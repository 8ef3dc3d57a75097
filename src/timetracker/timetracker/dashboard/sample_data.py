"""Demo content shown on the dashboard until real timesheets are wired in."""

from __future__ import annotations

from datetime import date

from ..core.enums import RequestStatus
from .model import LeaveRequest, TeamMember, TimesheetRow

TIMESHEET = (
    TimesheetRow("Mon, Aug 4", "9:00 AM", "5:30 PM", "1:00h", "7.5h", "Mobile App Dev", "Approved"),
    TimesheetRow("Tue, Aug 5", "8:45 AM", "5:15 PM", "0:45h", "7.75h", "Mobile App Dev", "Approved"),
    TimesheetRow("Wed, Aug 6", "9:15 AM", "6:00 PM", "1:15h", "7.5h", "Mobile App Dev", "Approved"),
    TimesheetRow("Thu, Aug 7", "8:30 AM", "4:45 PM", "1:00h", "7.25h", "Mobile App Dev", "Pending"),
    TimesheetRow("Fri, Aug 8", "9:15 AM", "-", "-", "2.25h", "Mobile App Dev", "In Progress"),
)

LEAVE_REQUESTS = (
    LeaveRequest("Vacation", date(2025, 8, 15), date(2025, 8, 20), 5, RequestStatus.PENDING),
    LeaveRequest("Sick Leave", date(2025, 8, 10), date(2025, 8, 12), 3, RequestStatus.APPROVED),
)

TEAM_MEMBERS = (
    TeamMember("Mike Davis", "Senior Developer", "MD", "Present", "8.75h"),
    TeamMember("Lisa Chen", "Sales Representative", "LC", "Present", "8.25h"),
    TeamMember("David Wilson", "Engineering Manager", "DW", "On Leave", "Sick Leave"),
)

LEAVE_TYPES = ("vacation", "sick", "personal", "other")
