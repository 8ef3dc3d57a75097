from __future__ import annotations

from typing import Protocol, Sequence


class AchievementRepository(Protocol):
    """Stores which achievements a user has unlocked across sessions."""

    def list_keys(self, user_id: int) -> Sequence[str]:
        raise NotImplementedError

    def add(self, user_id: int, key: str) -> bool:
        raise NotImplementedError


class InMemoryAchievementRepository(AchievementRepository):
    def __init__(self):
        self._keys: dict[int, list[str]] = {}

    def list_keys(self, user_id: int) -> Sequence[str]:
        return list(self._keys.get(int(user_id), []))

    def add(self, user_id: int, key: str) -> bool:
        keys = self._keys.setdefault(int(user_id), [])
        if key in keys:
            return False
        keys.append(key)
        return True
