from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import execute, query_one
from .model import User
from .repository import UserRepository

_SELECT_PROFILE = (
    "SELECT user_id, name, email, password_hash, role, department, status, is_first_login FROM profiles"
)


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role.parse(row["role"]),
        department=row.get("department") or "",
        status=row.get("status") or "active",
        is_first_login=bool(row.get("is_first_login", True)),
    )


class MySQLUserRepository(UserRepository):
    """Profiles stored in the `profiles` table."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        row = query_one(self._conn_factory, f"{_SELECT_PROFILE} WHERE user_id=%s", (int(user_id),))
        return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        row = query_one(
            self._conn_factory,
            f"{_SELECT_PROFILE} WHERE LOWER(email)=LOWER(%s)",
            ((email or "").strip(),),
        )
        return _row_to_user(row) if row else None

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
        _, user_id = execute(
            self._conn_factory,
            """
            INSERT INTO profiles (name, email, password_hash, role, department, is_first_login)
            VALUES (%s, %s, %s, %s, %s, %s)
            """,
            (name, email, password_hash, role.value, department, int(is_first_login)),
        )
        return int(user_id)

    def set_first_login(self, user_id: int, *, is_first_login: bool) -> bool:
        # rowcount is 0 when the value is unchanged, so check existence first
        if self.get_by_id(user_id) is None:
            return False
        execute(
            self._conn_factory,
            "UPDATE profiles SET is_first_login=%s WHERE user_id=%s",
            (int(is_first_login), int(user_id)),
        )
        return True

    def set_role(self, user_id: int, *, role: Role) -> bool:
        if self.get_by_id(user_id) is None:
            return False
        execute(self._conn_factory, "UPDATE profiles SET role=%s WHERE user_id=%s", (role.value, int(user_id)))
        return True
