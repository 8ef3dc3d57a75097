from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .model import User
from .repository import UserRepository

DEMO_PASSWORD = "password"

DEMO_USERS = (
    ("John Smith", "john.smith@company.com", Role.ADMIN, "IT"),
    ("Sarah Johnson", "sarah.johnson@company.com", Role.MANAGER, "HR"),
    ("Mike Davis", "mike.davis@company.com", Role.EMPLOYEE, "Engineering"),
    ("Lisa Chen", "lisa.chen@company.com", Role.EMPLOYEE, "Sales"),
    ("David Wilson", "david.wilson@company.com", Role.MANAGER, "Engineering"),
)


class InMemoryUserRepository(UserRepository):
    """Process-local user store used in development and tests."""

    def __init__(self, users: Sequence[User] = ()):
        self._by_id: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self._by_id, default=0) + 1

    @classmethod
    def with_demo_users(cls) -> "InMemoryUserRepository":
        repo = cls()
        password_hash = generate_password_hash(DEMO_PASSWORD)
        for name, email, role, department in DEMO_USERS:
            repo.create_user(
                name=name,
                email=email,
                password_hash=password_hash,
                role=role,
                department=department,
            )
        return repo

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        needle = (email or "").strip().lower()
        for user in self._by_id.values():
            if user.email.lower() == needle:
                return user
        return None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: str,
        is_first_login: bool = True,
    ) -> int:
        user_id = self._next_id
        self._next_id += 1
        self._by_id[user_id] = User(
            user_id=user_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            department=department,
            is_first_login=is_first_login,
        )
        return user_id

    def set_first_login(self, user_id: int, *, is_first_login: bool) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, is_first_login=is_first_login)
        return True

    def set_role(self, user_id: int, *, role: Role) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, role=role)
        return True
