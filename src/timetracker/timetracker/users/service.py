from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> User:
        user = self._users.get_by_email(email)
        if not user or user.status != "active":
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("User %s signed in", user.user_id)
        return user


class UserService:
    """Use case: read and update employee profiles."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get(self, user_id: int) -> Optional[User]:
        return self._users.get_by_id(int(user_id))

    def create_account(
        self,
        *,
        current_role: Role,
        name: str,
        email: str,
        password: str,
        role: Role = Role.EMPLOYEE,
        department: str = "General",
    ) -> int:
        """Admin-only: add an employee profile, flagged for first-login onboarding."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to add accounts")

        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email")
        require_min_length(password, "Password", 6)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        return self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            department=(department.strip() if isinstance(department, str) else "") or "General",
        )

    def clear_first_login(self, user_id: int) -> None:
        if not self._users.set_first_login(int(user_id), is_first_login=False):
            raise ValidationError("User does not exist")
        logger.info("User %s completed onboarding", user_id)

    def update_role(self, user_id: int, role: Role) -> None:
        if not self._users.set_role(int(user_id), role=role):
            raise ValidationError("User does not exist")
