from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles as shown on the profile and the setup wizard role cards."""

    ADMIN = "Admin"
    MANAGER = "Manager"
    EMPLOYEE = "Employee"

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Accept role card values ('manager') as well as stored names ('Manager')."""
        v = value.strip() if isinstance(value, str) else ""
        return cls(v[:1].upper() + v[1:].lower())


class Screen(str, Enum):
    """Onboarding overlay screens. DORMANT means the overlay is hidden."""

    DORMANT = "dormant"
    WELCOME = "welcome"
    WIZARD = "wizard"
    TOUR = "tour"
    HELP = "help"


class TooltipPosition(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class Section(str, Enum):
    """Dashboard content sections reachable from the sidebar and shortcuts."""

    DASHBOARD = "dashboard"
    TIME_TRACKING = "timetracking"
    ATTENDANCE = "attendance"
    REPORTS = "reports"
    TEAM = "team"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class ToastLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class RequestStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
