from __future__ import annotations

import pytest

from src.timetracker.timetracker.core.enums import Role
from src.timetracker.timetracker.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from src.timetracker.timetracker.users.memory_user_repository import DEMO_PASSWORD, InMemoryUserRepository
from src.timetracker.timetracker.users.service import AuthService, UserService


@pytest.fixture()
def repo():
    return InMemoryUserRepository.with_demo_users()


def test_demo_users_sign_in_with_shared_password(repo):
    auth = AuthService(repo)

    user = auth.authenticate("Sarah.Johnson@company.com", DEMO_PASSWORD)

    assert user.name == "Sarah Johnson"
    assert user.role == Role.MANAGER
    assert user.is_first_login is True
    assert user.initials == "SJ"


@pytest.mark.parametrize("email,password", [("nobody@company.com", "password"), ("john.smith@company.com", "nope")])
def test_bad_credentials_rejected(repo, email, password):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        AuthService(repo).authenticate(email, password)


def test_corrupt_hash_treated_as_wrong_password(repo):
    repo.create_user(name="Broken", email="broken@company.com", password_hash="not-a-hash", role=Role.EMPLOYEE, department="IT")

    with pytest.raises(AuthenticationError):
        AuthService(repo).authenticate("broken@company.com", "password")


def test_clear_first_login(repo):
    service = UserService(repo)

    service.clear_first_login(3)

    assert repo.get_by_id(3).is_first_login is False
    assert repo.get_by_id(4).is_first_login is True


def test_clear_first_login_unknown_user(repo):
    with pytest.raises(ValidationError):
        UserService(repo).clear_first_login(99)


def test_update_role(repo):
    service = UserService(repo)

    service.update_role(4, Role.MANAGER)

    assert service.get(4).role == Role.MANAGER


def test_create_account(repo):
    service = UserService(repo)

    user_id = service.create_account(
        current_role=Role.ADMIN, name=" Ana Ruiz ", email="ana@company.com", password="secret1", department=""
    )

    user = service.get(user_id)
    assert user.name == "Ana Ruiz"
    assert user.department == "General"
    assert user.role == Role.EMPLOYEE
    assert AuthService(repo).authenticate("ana@company.com", "secret1").user_id == user_id


def test_create_account_validation(repo):
    service = UserService(repo)

    with pytest.raises(ValidationError, match="already registered"):
        service.create_account(current_role=Role.ADMIN, name="Dup", email="lisa.chen@company.com", password="secret1")
    with pytest.raises(ValidationError, match="at least 6"):
        service.create_account(current_role=Role.ADMIN, name="Short", email="short@company.com", password="123")


@pytest.mark.parametrize("current_role", [Role.MANAGER, Role.EMPLOYEE])
def test_only_admins_create_accounts(repo, current_role):
    with pytest.raises(AuthorizationError):
        UserService(repo).create_account(
            current_role=current_role, name="Ana Ruiz", email="ana@company.com", password="secret1"
        )
    assert repo.get_by_email("ana@company.com") is None
