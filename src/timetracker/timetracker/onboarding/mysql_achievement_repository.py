from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import execute, query_all
from .repository import AchievementRepository


class MySQLAchievementRepository(AchievementRepository):
    """Unlocked achievements in `user_achievements`, one row per (user, key)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_keys(self, user_id: int) -> Sequence[str]:
        rows = query_all(
            self._conn_factory,
            "SELECT achievement_key FROM user_achievements WHERE user_id=%s ORDER BY unlocked_at, achievement_key",
            (int(user_id),),
        )
        return [row["achievement_key"] for row in rows]

    def add(self, user_id: int, key: str) -> bool:
        inserted, _ = execute(
            self._conn_factory,
            "INSERT IGNORE INTO user_achievements (user_id, achievement_key) VALUES (%s, %s)",
            (int(user_id), key),
        )
        return inserted > 0
