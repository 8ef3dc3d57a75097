from __future__ import annotations

import pytest

from src.timetracker.timetracker.core.enums import Role, Screen, Section, Theme
from src.timetracker.timetracker.core.exceptions import ValidationError
from src.timetracker.timetracker.dashboard.session import DashboardSession
from src.timetracker.timetracker.onboarding.catalog import TOUR_STOPS
from src.timetracker.timetracker.onboarding.host import LayoutAnchorLocator
from src.timetracker.timetracker.onboarding.model import Rect
from src.timetracker.timetracker.onboarding.orchestrator import (
    SKIP_NOTICE,
    OnboardingContext,
    OnboardingOrchestrator,
    welcome_message,
)
from src.timetracker.timetracker.onboarding.repository import InMemoryAchievementRepository
from src.timetracker.timetracker.onboarding.shortcuts import KeyEvent
from src.timetracker.timetracker.onboarding.timers import TimerScheduler
from src.timetracker.timetracker.users.model import User


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self) -> int:
        return self.now


class FakeDirectory:
    def __init__(self, missing=False):
        self.cleared = []
        self.roles = []
        self.missing = missing

    def clear_first_login(self, user_id):
        if self.missing:
            raise ValidationError("User does not exist")
        self.cleared.append(user_id)

    def update_role(self, user_id, role):
        self.roles.append((user_id, role))


def make_user(role=Role.EMPLOYEE, is_first_login=True, name="Mike Davis") -> User:
    return User(
        user_id=3,
        name=name,
        email="mike@company.com",
        password_hash="x",
        role=role,
        department="Engineering",
        is_first_login=is_first_login,
    )


class Harness:
    def __init__(self, user=None, anchors=None):
        self.clock = FakeClock()
        self.directory = FakeDirectory()
        self.dashboard = DashboardSession()
        self.repo = InMemoryAchievementRepository()
        self.locator = LayoutAnchorLocator(
            {s.target: Rect(100, 100, 40, 40) for s in TOUR_STOPS} if anchors is None else anchors
        )
        self.context = OnboardingContext(
            user=user if user is not None else make_user(),
            host=self.dashboard,
            users=self.directory,
            locator=self.locator,
            scheduler=TimerScheduler(self.clock),
            achievements=self.repo,
        )
        self.onboarding = OnboardingOrchestrator(self.context)
        self.dashboard.on_achievement = self.onboarding.check_achievement

    def advance(self, ms):
        self.clock.now += ms
        self.onboarding.tick()

    def to_tour(self):
        o = self.onboarding
        o.check_first_time_login()
        o.start()
        for _ in range(3):
            o.wizard_next()
        assert o.complete_setup() is True

    def to_help(self):
        self.to_tour()
        self.onboarding.skip_tour()
        assert self.onboarding.screen == Screen.HELP


# -- welcome ----------------------------------------------------------------------


@pytest.mark.parametrize(
    "role,expected",
    [
        (Role.ADMIN, "Welcome back, Administrator John!"),
        (Role.MANAGER, "Welcome, Manager John!"),
        (Role.EMPLOYEE, "Welcome to TimeTracker Pro, John!"),
    ],
)
def test_welcome_message_by_role(role, expected):
    assert welcome_message(make_user(role=role, name="John Smith")) == expected


def test_welcome_message_without_user():
    assert welcome_message(None) == ""


def test_first_login_opens_welcome():
    h = Harness()

    assert h.onboarding.check_first_time_login() is True

    view = h.onboarding.view()
    assert view.screen == Screen.WELCOME
    assert view.overlay_visible is True
    assert view.welcome_message == "Welcome to TimeTracker Pro, Mike!"


def test_returning_user_stays_dormant():
    h = Harness(make_user(is_first_login=False))

    assert h.onboarding.check_first_time_login() is False
    assert h.onboarding.view().overlay_visible is False


def test_skip_hides_overlay_and_leaves_a_hint():
    h = Harness()
    h.onboarding.check_first_time_login()

    assert h.onboarding.skip() is True

    assert h.onboarding.screen == Screen.DORMANT
    assert h.dashboard.drain_toasts()[-1].message == SKIP_NOTICE
    assert h.directory.cleared == []


# -- full flow ------------------------------------------------------------------------


def test_full_first_login_flow_clears_flag_and_awards_expert():
    h = Harness()
    o = h.onboarding
    o.check_first_time_login()
    o.start()
    assert o.view().wizard.counter == "Step 1 of 4"

    for _ in range(3):
        o.wizard_next()
    o.complete_setup()
    assert o.screen == Screen.TOUR
    assert o.view().tour.target == "dashboard"

    while o.screen == Screen.TOUR:
        o.tour_next()
    assert o.screen == Screen.HELP

    assert o.complete() is True
    assert o.screen == Screen.DORMANT
    assert o.view().overlay_visible is False
    assert h.directory.cleared == [3]
    assert o.user.is_first_login is False
    assert "onboarding-complete" in o.view().unlocked_achievements
    assert o.view().notification.title == "TimeTracker Pro Expert"
    assert h.repo.list_keys(3) == ["onboarding-complete"]


def test_second_check_after_completion_does_not_reopen():
    h = Harness()
    h.to_help()
    h.onboarding.complete()

    assert h.onboarding.check_first_time_login() is False


def test_complete_setup_needs_last_step():
    h = Harness()
    h.onboarding.check_first_time_login()
    h.onboarding.start()
    h.onboarding.wizard_next()

    assert h.onboarding.complete_setup() is False
    assert h.onboarding.screen == Screen.WIZARD


def test_actions_from_wrong_screen_are_rejected():
    h = Harness()
    o = h.onboarding

    assert o.start() is False
    assert o.wizard_next() is False
    assert o.tour_next() is False
    assert o.try_feature() is False
    assert o.toggle_shortcuts() is False
    assert o.complete() is False
    assert o.skip_tour() is False
    assert o.screen == Screen.DORMANT


def test_select_role_updates_profile():
    h = Harness()
    h.onboarding.check_first_time_login()
    h.onboarding.start()
    h.onboarding.wizard_next()

    assert h.onboarding.select_role("manager") is True

    assert h.directory.roles == [(3, Role.MANAGER)]
    assert h.onboarding.user.role == Role.MANAGER
    assert h.onboarding.view().wizard.step == 2


def test_reselecting_current_role_does_not_write():
    h = Harness()
    h.onboarding.check_first_time_login()
    h.onboarding.start()

    h.onboarding.select_role("employee")

    assert h.directory.roles == []


# -- tour ----------------------------------------------------------------------------


def test_theme_try_twice_toggles_once_and_unlocks_once():
    h = Harness()
    h.to_tour()
    o = h.onboarding
    o.tour.show([s.target for s in TOUR_STOPS].index("theme-toggle"))

    assert o.try_feature() is True
    assert o.try_feature() is False

    assert h.dashboard.theme == Theme.DARK
    assert o.tracker.history[-1].key == "theme-switcher"
    assert len([n for n in o.tracker.history if n.key == "theme-switcher"]) == 1

    h.advance(1500)
    assert o.view().tour.target == "nav-time-tracking"


def test_leaving_tour_cancels_pending_demo():
    h = Harness()
    h.to_tour()
    o = h.onboarding
    o.tour.show([s.target for s in TOUR_STOPS].index("global-search"))
    o.try_feature()

    o.escape()
    h.advance(5000)

    assert o.screen == Screen.DORMANT
    assert h.dashboard.search_text == ""
    assert not o.tracker.is_unlocked("first-search")


def test_tour_without_any_anchor_lands_in_help():
    h = Harness(anchors={})
    o = h.onboarding
    o.check_first_time_login()
    o.start()
    for _ in range(3):
        o.wizard_next()

    assert o.complete_setup() is True
    assert o.screen == Screen.HELP


# -- escape / help ---------------------------------------------------------------------


def test_escape_mid_tour_keeps_first_login_flag():
    h = Harness()
    h.to_tour()
    h.onboarding.tour_next()

    assert h.onboarding.escape() is True

    view = h.onboarding.view()
    assert view.screen == Screen.DORMANT
    assert view.tour is None
    assert h.onboarding.tour.running is False
    assert h.directory.cleared == []
    assert h.onboarding.user.is_first_login is True


def test_escape_dismisses_achievement_notice():
    h = Harness(make_user(is_first_login=False))
    h.dashboard.toggle_theme()
    assert h.onboarding.view().notification is not None

    assert h.onboarding.escape() is True
    assert h.onboarding.view().notification is None
    assert h.onboarding.escape() is False


def test_shortcut_list_visible_only_in_help():
    h = Harness()
    h.to_help()
    o = h.onboarding

    assert o.toggle_shortcuts() is True
    view = o.view()
    assert view.shortcuts_visible is True
    assert {"keys": "Ctrl+D", "description": "Go to Dashboard"} in view.shortcuts

    o.escape()
    o.show_help_center()
    assert o.view().shortcuts_visible is False


def test_help_center_reachable_from_dormant():
    h = Harness(make_user(is_first_login=False))

    assert h.onboarding.show_help_center() is True
    assert h.onboarding.screen == Screen.HELP


def test_achievement_auto_dismiss_via_tick():
    h = Harness(make_user(is_first_login=False))
    h.dashboard.toggle_clock()

    h.advance(2999)
    assert h.onboarding.view().notification.key == "first-clock-in"
    h.advance(1)
    assert h.onboarding.view().notification is None


# -- keyboard ----------------------------------------------------------------------------


def test_space_toggles_clock_and_unlocks():
    h = Harness(make_user(is_first_login=False))

    assert h.onboarding.handle_key(KeyEvent(key=" ")) is True

    assert h.dashboard.clocked_in is True
    assert h.onboarding.tracker.is_unlocked("first-clock-in")


def test_space_in_text_field_is_ignored():
    h = Harness(make_user(is_first_login=False))

    assert h.onboarding.handle_key(KeyEvent(key=" ", target_tag="INPUT")) is False
    assert h.dashboard.clocked_in is False


def test_ctrl_letter_navigates():
    h = Harness(make_user(is_first_login=False))

    h.onboarding.handle_key(KeyEvent(key="r", ctrl=True))

    assert h.dashboard.current_section == Section.REPORTS


def test_question_mark_opens_help_and_escape_closes():
    h = Harness(make_user(is_first_login=False))

    h.onboarding.handle_key(KeyEvent(key="?"))
    assert h.onboarding.screen == Screen.HELP

    h.onboarding.handle_key(KeyEvent(key="Escape", target_tag="textarea"))
    assert h.onboarding.screen == Screen.DORMANT


def test_unbound_key_not_handled():
    h = Harness()

    assert h.onboarding.handle_key(KeyEvent(key="x")) is False


def test_failed_profile_write_keeps_help_center_open():
    h = Harness()
    h.to_help()
    h.directory.missing = True

    with pytest.raises(ValidationError):
        h.onboarding.complete()

    assert h.onboarding.screen == Screen.HELP
    assert h.onboarding.view().overlay_visible is True
    assert h.onboarding.user.is_first_login is True
    assert not h.onboarding.tracker.is_unlocked("onboarding-complete")

    h.directory.missing = False
    assert h.onboarding.complete() is True
    assert h.onboarding.screen == Screen.DORMANT
    assert h.directory.cleared == [3]
