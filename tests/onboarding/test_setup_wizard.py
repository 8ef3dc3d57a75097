from __future__ import annotations

import pytest

from src.timetracker.timetracker.core.enums import Role, Section, Theme
from src.timetracker.timetracker.core.exceptions import ValidationError
from src.timetracker.timetracker.onboarding.model import OnboardingState
from src.timetracker.timetracker.onboarding.wizard import SetupWizard
from src.timetracker.timetracker.users.model import User


def user(**kw) -> User:
    base = dict(
        user_id=3,
        name="Mike Davis",
        email="mike@company.com",
        password_hash="x",
        role=Role.EMPLOYEE,
        department="Engineering",
    )
    base.update(kw)
    return User(**base)


def started(u=None) -> SetupWizard:
    wizard = SetupWizard(OnboardingState())
    wizard.start(u if u is not None else user())
    return wizard


def test_start_prefills_details_from_user():
    view = started().view()

    assert view.step == 1
    assert view.counter == "Step 1 of 4"
    assert view.name == "Mike Davis"
    assert view.department == "Engineering"
    assert view.prev_visible is False
    assert view.next_visible is True
    assert view.complete_visible is False


def test_start_without_user_leaves_form_blank():
    wizard = SetupWizard(OnboardingState())
    wizard.start(None)

    view = wizard.view()
    assert view.name == ""
    assert view.department == ""


def test_next_is_bounded_by_last_step():
    wizard = started()
    for _ in range(3):
        assert wizard.next() is True

    assert wizard.step == 4
    assert wizard.can_complete is True
    assert wizard.next() is False
    assert wizard.step == 4

    view = wizard.view()
    assert view.next_visible is False
    assert view.complete_visible is True
    assert view.progress_percent == 100


def test_prev_is_bounded_by_first_step():
    wizard = started()

    assert wizard.prev() is False
    assert wizard.step == 1

    wizard.next()
    assert wizard.prev() is True
    assert wizard.step == 1


def test_restart_resets_step_and_choices():
    wizard = started()
    wizard.next()
    wizard.select_role("manager")
    wizard.set_preferences(theme="dark")

    wizard.start(user())

    assert wizard.step == 1
    assert wizard.selected_role is None
    assert wizard.view().preferences == {}


@pytest.mark.parametrize("raw,expected", [("employee", Role.EMPLOYEE), ("Manager", Role.MANAGER), (Role.ADMIN, Role.ADMIN)])
def test_select_role_accepts_card_values(raw, expected):
    wizard = started()

    assert wizard.select_role(raw) == expected
    assert wizard.view().selected_role == expected.value


def test_select_role_does_not_move_the_step():
    wizard = started()
    wizard.next()

    wizard.select_role("admin")

    assert wizard.step == 2


def test_select_unknown_role_rejected():
    wizard = started()
    with pytest.raises(ValidationError, match="Unknown role"):
        wizard.select_role("intern")


def test_update_details_requires_both_fields():
    wizard = started()
    wizard.update_details(name="  Michael Davis ", department="Platform")

    assert wizard.view().name == "Michael Davis"
    with pytest.raises(ValidationError):
        wizard.update_details(name="", department="Platform")


def test_preferences_are_normalised():
    wizard = started()
    wizard.set_preferences(theme="DARK", default_section="reports", notifications=0)

    assert wizard.view().preferences == {
        "theme": Theme.DARK.value,
        "default_section": Section.REPORTS.value,
        "notifications": False,
    }


def test_unknown_preference_rejected():
    wizard = started()
    with pytest.raises(ValidationError, match="Unknown preference"):
        wizard.set_preferences(language="fr")
    with pytest.raises(ValidationError):
        wizard.set_preferences(theme="purple")
