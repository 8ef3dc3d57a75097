from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import RequestStatus, ToastLevel


@dataclass(frozen=True)
class TimesheetRow:
    day: str
    clock_in: str
    clock_out: str
    break_time: str
    total: str
    project: str
    status: str


@dataclass(frozen=True)
class LeaveRequest:
    leave_type: str
    start_date: date
    end_date: date
    days: int
    status: RequestStatus = RequestStatus.PENDING
    reason: Optional[str] = None


@dataclass(frozen=True)
class TeamMember:
    name: str
    role: str
    avatar: str
    status: str
    hours: str


@dataclass(frozen=True)
class Toast:
    message: str
    level: ToastLevel = ToastLevel.INFO


@dataclass(frozen=True)
class ReportStat:
    label: str
    value: str


@dataclass(frozen=True)
class Report:
    kind: str
    title: str
    start_date: date
    end_date: date
    stats: tuple[ReportStat, ...] = field(default_factory=tuple)
