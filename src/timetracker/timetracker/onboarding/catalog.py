"""Static onboarding content: tour script, achievements, keyboard shortcuts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..core.constants import SEARCH_DEMO_TEXT
from ..core.enums import Role, Section, TooltipPosition
from .model import AchievementDefinition, ClockDemo, SearchDemo, ThemeDemo, TourStop

TOUR_STOPS: Sequence[TourStop] = (
    TourStop(
        target="dashboard",
        title="Your Dashboard",
        description="Your central hub showing today's status, weekly hours, and important notifications at a glance.",
        position=TooltipPosition.BOTTOM,
    ),
    TourStop(
        target="clock-toggle",
        title="Clock In/Out",
        description="Easily track your work hours with our one-click clock in and out system.",
        position=TooltipPosition.TOP,
        demo=ClockDemo(),
    ),
    TourStop(
        target="global-search",
        title="Global Search",
        description="Quickly find employees, projects, reports, and more using our powerful search feature.",
        position=TooltipPosition.BOTTOM,
        demo=SearchDemo(text=SEARCH_DEMO_TEXT),
    ),
    TourStop(
        target="theme-toggle",
        title="Theme Toggle",
        description="Switch between light and dark modes to match your preference and lighting conditions.",
        position=TooltipPosition.BOTTOM,
        demo=ThemeDemo(),
    ),
    TourStop(
        target="nav-time-tracking",
        title="Time Tracking",
        description="View your timesheets, track project hours, and manage your work schedule.",
        position=TooltipPosition.RIGHT,
    ),
    TourStop(
        target="nav-attendance",
        title="Attendance & Leave",
        description="Request time off, view your attendance history, and check your leave balance.",
        position=TooltipPosition.RIGHT,
    ),
    TourStop(
        target="nav-reports",
        title="Reports",
        description="Generate detailed reports on your work hours, productivity, and attendance patterns.",
        position=TooltipPosition.RIGHT,
    ),
    TourStop(
        target="nav-team",
        title="Team Overview",
        description="View team status, collaborate on projects, and stay connected with colleagues.",
        position=TooltipPosition.RIGHT,
    ),
)


def _achievements(*defs: AchievementDefinition) -> Mapping[str, AchievementDefinition]:
    return {d.key: d for d in defs}


ACHIEVEMENTS: Mapping[str, AchievementDefinition] = _achievements(
    AchievementDefinition("first-clock-in", "Time Tracker", "Successfully clocked in for the first time", "⏰"),
    AchievementDefinition("first-search", "Search Master", "Used the global search feature", "🔍"),
    AchievementDefinition("theme-switcher", "Style Setter", "Switched between light and dark themes", "🎨"),
    AchievementDefinition("leave-requester", "Vacation Planner", "Submitted your first leave request", "🏖️"),
    AchievementDefinition("report-generator", "Data Analyst", "Generated your first report", "📊"),
    AchievementDefinition(
        "onboarding-complete", "TimeTracker Pro Expert", "Completed the full onboarding experience", "🎓"
    ),
)

ONBOARDING_COMPLETE = "onboarding-complete"

# Role cards offered on wizard step 2.
ROLE_CHOICES: Sequence[Role] = (Role.EMPLOYEE, Role.MANAGER, Role.ADMIN)


@dataclass(frozen=True)
class ShortcutDef:
    """A process-wide keyboard shortcut.

    `is_global` shortcuts fire even while a text field has focus.
    """

    action_id: str
    key: str
    description: str
    ctrl: bool = False
    section: Optional[Section] = None
    is_global: bool = False

    @property
    def label(self) -> str:
        key = "Space" if self.key == " " else self.key.upper() if self.ctrl else self.key
        return f"Ctrl+{key}" if self.ctrl else key


KEYBOARD_SHORTCUTS: Sequence[ShortcutDef] = (
    ShortcutDef("toggle_clock", " ", "Clock in / clock out"),
    ShortcutDef("navigate", "d", "Go to Dashboard", ctrl=True, section=Section.DASHBOARD),
    ShortcutDef("navigate", "t", "Go to Time Tracking", ctrl=True, section=Section.TIME_TRACKING),
    ShortcutDef("navigate", "a", "Go to Attendance", ctrl=True, section=Section.ATTENDANCE),
    ShortcutDef("navigate", "r", "Go to Reports", ctrl=True, section=Section.REPORTS),
    ShortcutDef("show_help", "?", "Open the help center"),
    ShortcutDef("close_overlay", "Escape", "Close the current overlay", is_global=True),
)
