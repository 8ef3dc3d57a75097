from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: employee profile.

    Plain data object, no DB access. `is_first_login` gates the onboarding
    flow and is cleared once the user finishes it.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    department: str
    status: str = "active"
    is_first_login: bool = True

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else ""

    @property
    def initials(self) -> str:
        return "".join(p[0] for p in self.name.split() if p)[:2].upper()
