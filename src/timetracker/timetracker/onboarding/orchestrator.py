from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Sequence

from ..core.constants import DEFAULT_VIEWPORT_HEIGHT, DEFAULT_VIEWPORT_WIDTH
from ..core.enums import Role, Screen, ToastLevel
from ..users.model import User
from .achievements import AchievementTracker
from .catalog import ACHIEVEMENTS, KEYBOARD_SHORTCUTS, ONBOARDING_COMPLETE, TOUR_STOPS, ShortcutDef
from .host import AnchorLocator, HostActions, LayoutAnchorLocator, UserDirectory
from .model import AchievementDefinition, OnboardingState, OnboardingView, TourStop, Viewport
from .repository import AchievementRepository
from .shortcuts import KeyEvent, match_shortcut
from .timers import TimerScheduler
from .tour import GuidedTour
from .wizard import SetupWizard

logger = logging.getLogger(__name__)

SKIP_NOTICE = "You can access onboarding help anytime from the user menu"


@dataclass
class OnboardingContext:
    """Everything one user session's onboarding flow talks to."""

    user: Optional[User]
    host: HostActions
    users: UserDirectory
    locator: AnchorLocator = field(default_factory=LayoutAnchorLocator)
    scheduler: TimerScheduler = field(default_factory=TimerScheduler)
    viewport: Viewport = field(default_factory=lambda: Viewport(DEFAULT_VIEWPORT_WIDTH, DEFAULT_VIEWPORT_HEIGHT))
    achievements: Optional[AchievementRepository] = None


def welcome_message(user: Optional[User]) -> str:
    if user is None:
        return ""
    first = user.first_name
    if user.role == Role.ADMIN:
        return f"Welcome back, Administrator {first}!"
    if user.role == Role.MANAGER:
        return f"Welcome, Manager {first}!"
    return f"Welcome to TimeTracker Pro, {first}!"


class OnboardingOrchestrator:
    """Sequences Welcome -> Setup Wizard -> Guided Tour -> Help Center.

    Screens are mutually exclusive; DORMANT means the overlay is hidden.
    Transition methods return False when the move is not allowed from the
    current screen, and never raise for flow errors. Leaving a screen cancels
    the timers it scheduled.
    """

    def __init__(
        self,
        context: OnboardingContext,
        *,
        stops: Sequence[TourStop] = TOUR_STOPS,
        achievements: Mapping[str, AchievementDefinition] = ACHIEVEMENTS,
        shortcuts: Sequence[ShortcutDef] = KEYBOARD_SHORTCUTS,
    ):
        self._ctx = context
        self._shortcuts = tuple(shortcuts)
        self.state = OnboardingState()
        self._welcome_message = ""

        self.tracker = AchievementTracker(
            achievements,
            context.scheduler,
            state=self.state,
            repository=context.achievements,
            user_id=context.user.user_id if context.user else None,
        )
        self.wizard = SetupWizard(self.state)
        self.tour = GuidedTour(
            stops,
            self.state,
            locator=context.locator,
            host=context.host,
            tracker=self.tracker,
            scheduler=context.scheduler,
            viewport=lambda: self._ctx.viewport,
            on_complete=self._on_tour_complete,
        )

    @property
    def screen(self) -> Screen:
        return self.state.screen

    @property
    def user(self) -> Optional[User]:
        return self._ctx.user

    # -- entry points for the host application ---------------------------

    def check_first_time_login(self) -> bool:
        """Open the welcome screen if the signed-in user has never onboarded."""
        user = self._ctx.user
        if user is None or not user.is_first_login:
            return False
        self.show_welcome()
        return True

    def show_welcome(self) -> None:
        self._welcome_message = welcome_message(self._ctx.user)
        self._enter(Screen.WELCOME)

    def show_help_center(self) -> bool:
        """Open the help center directly, from anywhere."""
        self._enter(Screen.HELP)
        return True

    def check_achievement(self, key: str) -> bool:
        return self.tracker.unlock(key)

    def dismiss_achievement(self) -> bool:
        return self.tracker.dismiss()

    def set_viewport(self, viewport: Viewport) -> None:
        self._ctx.viewport = viewport

    def tick(self) -> int:
        return self._ctx.scheduler.run_due()

    # -- welcome -----------------------------------------------------------

    def start(self) -> bool:
        if self.screen != Screen.WELCOME:
            return False
        self.wizard.start(self._ctx.user)
        self._enter(Screen.WIZARD)
        return True

    def skip(self) -> bool:
        if self.screen != Screen.WELCOME:
            return False
        self._enter(Screen.DORMANT)
        self._ctx.host.show_toast(SKIP_NOTICE, ToastLevel.INFO)
        return True

    # -- setup wizard --------------------------------------------------------

    def wizard_next(self) -> bool:
        return self.screen == Screen.WIZARD and self.wizard.next()

    def wizard_prev(self) -> bool:
        return self.screen == Screen.WIZARD and self.wizard.prev()

    def update_details(self, *, name: str, department: str) -> bool:
        if self.screen != Screen.WIZARD:
            return False
        self.wizard.update_details(name=name, department=department)
        return True

    def select_role(self, role: str | Role) -> bool:
        """Pick a role card. Updates the user's role, not the wizard step."""
        if self.screen != Screen.WIZARD:
            return False
        chosen = self.wizard.select_role(role)
        user = self._ctx.user
        if user is not None and user.role != chosen:
            self._ctx.users.update_role(user.user_id, chosen)
            self._ctx.user = replace(user, role=chosen)
        return True

    def set_preferences(self, **prefs: Any) -> bool:
        if self.screen != Screen.WIZARD:
            return False
        self.wizard.set_preferences(**prefs)
        return True

    def complete_setup(self) -> bool:
        if self.screen != Screen.WIZARD or not self.wizard.can_complete:
            return False
        self._enter(Screen.TOUR)
        self.tour.start()
        return True

    # -- guided tour -----------------------------------------------------------

    def tour_next(self) -> bool:
        return self.screen == Screen.TOUR and self.tour.next()

    def tour_prev(self) -> bool:
        return self.screen == Screen.TOUR and self.tour.prev()

    def try_feature(self) -> bool:
        return self.screen == Screen.TOUR and self.tour.try_feature()

    def skip_tour(self) -> bool:
        if self.screen != Screen.TOUR:
            return False
        self.tour.skip()
        return True

    def _on_tour_complete(self) -> None:
        self._enter(Screen.HELP)

    # -- help center -------------------------------------------------------------

    def toggle_shortcuts(self) -> bool:
        if self.screen != Screen.HELP:
            return False
        self.state.shortcuts_visible = not self.state.shortcuts_visible
        return True

    def complete(self) -> bool:
        """Finish onboarding from the help center and clear the first-login flag."""
        if self.screen != Screen.HELP:
            return False

        # A failed profile write leaves the help center open.
        user = self._ctx.user
        if user is not None and user.is_first_login:
            self._ctx.users.clear_first_login(user.user_id)
            self._ctx.user = replace(user, is_first_login=False)

        self._enter(Screen.DORMANT)
        self.tracker.unlock(ONBOARDING_COMPLETE)
        return True

    # -- global ------------------------------------------------------------------

    def escape(self) -> bool:
        """Close whatever is open. An abandon, so the first-login flag stays set."""
        closed = False
        if self.state.is_active:
            self._enter(Screen.DORMANT)
            closed = True
        if self.tracker.dismiss():
            closed = True
        return closed

    def handle_key(self, event: KeyEvent) -> bool:
        shortcut = match_shortcut(event, self._shortcuts)
        if shortcut is None:
            return False

        host = self._ctx.host
        if shortcut.action_id == "toggle_clock":
            host.toggle_clock()
            self.check_achievement("first-clock-in")
        elif shortcut.action_id == "navigate" and shortcut.section is not None:
            host.navigate_to(shortcut.section)
        elif shortcut.action_id == "show_help":
            self.show_help_center()
        elif shortcut.action_id == "close_overlay":
            self.escape()
        else:
            return False
        return True

    def view(self) -> OnboardingView:
        screen = self.screen
        show_shortcuts = screen == Screen.HELP and self.state.shortcuts_visible
        return OnboardingView(
            screen=screen,
            overlay_visible=self.state.is_active,
            welcome_message=self._welcome_message if screen == Screen.WELCOME else "",
            wizard=self.wizard.view() if screen == Screen.WIZARD else None,
            tour=self.tour.view() if screen == Screen.TOUR else None,
            shortcuts_visible=show_shortcuts,
            notification=self.tracker.notification,
            unlocked_achievements=tuple(sorted(self.state.unlocked_achievements)),
            shortcuts=tuple({"keys": s.label, "description": s.description} for s in self._shortcuts)
            if show_shortcuts
            else (),
        )

    def _enter(self, screen: Screen) -> None:
        previous = self.state.screen
        if previous == Screen.TOUR and screen != Screen.TOUR:
            self.tour.stop()
        if previous != screen:
            self._ctx.scheduler.cancel_scope(previous.value)
        if previous == Screen.HELP and screen != Screen.HELP:
            self.state.shortcuts_visible = False

        self.state.screen = screen
        self.state.is_active = screen != Screen.DORMANT
        logger.debug("Onboarding %s -> %s", previous.value, screen.value)
