from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from ..common.datetime_utils import format_hms, now_local
from ..core.enums import Section, Theme, ToastLevel
from ..core.exceptions import ValidationError
from ..onboarding.host import HostActions
from .model import LeaveRequest, Toast
from .sample_data import LEAVE_REQUESTS

logger = logging.getLogger(__name__)


class DashboardSession(HostActions):
    """Per-user dashboard state: clock, current section, theme, search, toasts.

    Also the host side of the onboarding flow: tour demos and keyboard
    shortcuts drive the dashboard through these methods. Trackable actions
    report to `on_achievement` once it is wired.
    """

    def __init__(
        self,
        *,
        theme: Theme = Theme.LIGHT,
        clock: Callable[[], datetime] = now_local,
    ):
        self._clock = clock
        self.clocked_in = False
        self.clock_in_time: Optional[datetime] = None
        self.current_section = Section.DASHBOARD
        self.theme = theme
        self.search_text = ""
        self.search_focused = False
        self.leave_requests: List[LeaveRequest] = list(LEAVE_REQUESTS)
        self._toasts: List[Toast] = []
        self.on_achievement: Callable[[str], bool] = lambda key: False

    # -- host actions ----------------------------------------------------------

    def toggle_clock(self) -> None:
        if self.clocked_in:
            self.clocked_in = False
            self.clock_in_time = None
            self.show_toast("Clocked out successfully", ToastLevel.SUCCESS)
        else:
            self.clocked_in = True
            self.clock_in_time = self._clock()
            self.show_toast("Clocked in successfully", ToastLevel.SUCCESS)
            self.on_achievement("first-clock-in")

    def navigate_to(self, section: Section) -> None:
        self.current_section = Section(section)
        logger.debug("Showing section %s", self.current_section.value)

    def focus_search(self, text: str) -> None:
        self.search_focused = True
        self.search_text = text

    def clear_search(self) -> None:
        self.search_text = ""

    def toggle_theme(self) -> None:
        self.theme = Theme.LIGHT if self.theme == Theme.DARK else Theme.DARK
        self.on_achievement("theme-switcher")

    def show_toast(self, message: str, level: ToastLevel = ToastLevel.INFO) -> None:
        self._toasts.append(Toast(message=message, level=level))

    # -- dashboard features ------------------------------------------------------

    def perform_search(self, query: str) -> bool:
        query = (query or "").strip()
        if not query:
            self.show_toast("Please enter a search term", ToastLevel.WARNING)
            return False
        self.search_text = query
        self.show_toast(f'Searching for: "{query}"', ToastLevel.INFO)
        self.on_achievement("first-search")
        return True

    def set_theme(self, theme: str) -> None:
        try:
            self.theme = Theme(str(theme).lower())
        except ValueError:
            raise ValidationError("Theme must be light or dark")

    def elapsed_seconds(self) -> int:
        if not self.clocked_in or self.clock_in_time is None:
            return 0
        return max(int((self._clock() - self.clock_in_time).total_seconds()), 0)

    def clock_display(self) -> str:
        if not self.clocked_in:
            return "Ready to start"
        return format_hms(self.elapsed_seconds())

    def today_hours(self) -> str:
        return f"{self.elapsed_seconds() / 3600:.1f}h"

    def drain_toasts(self) -> List[Toast]:
        toasts, self._toasts = self._toasts, []
        return toasts
