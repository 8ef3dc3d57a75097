from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User profiles.

    Services depend on this interface, not on a concrete store.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

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
        raise NotImplementedError

    def set_first_login(self, user_id: int, *, is_first_login: bool) -> bool:
        raise NotImplementedError

    def set_role(self, user_id: int, *, role: Role) -> bool:
        raise NotImplementedError
