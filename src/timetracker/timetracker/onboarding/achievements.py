from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from ..core.constants import ACHIEVEMENT_AUTO_DISMISS_MS
from .model import AchievementDefinition, AchievementNotice, OnboardingState
from .repository import AchievementRepository
from .timers import TimerHandle, TimerScheduler

logger = logging.getLogger(__name__)


class AchievementTracker:
    """One-shot achievements for the current session.

    The first `unlock` of a known key records it and raises a notification;
    every later call for that key is a no-op. The notification stays until
    dismissed or until the auto-dismiss timer fires, whichever comes first.
    """

    def __init__(
        self,
        definitions: Mapping[str, AchievementDefinition],
        scheduler: TimerScheduler,
        *,
        state: Optional[OnboardingState] = None,
        repository: Optional[AchievementRepository] = None,
        user_id: Optional[int] = None,
        auto_dismiss_ms: int = ACHIEVEMENT_AUTO_DISMISS_MS,
    ):
        self._definitions = definitions
        self._scheduler = scheduler
        self._state = state if state is not None else OnboardingState()
        self._repository = repository
        self._user_id = user_id
        self._auto_dismiss_ms = auto_dismiss_ms
        self._notification: Optional[AchievementNotice] = None
        self._dismiss_timer: Optional[TimerHandle] = None
        self._history: List[AchievementNotice] = []

        if repository is not None and user_id is not None:
            known = [k for k in repository.list_keys(user_id) if k in definitions]
            self._state.unlocked_achievements.update(known)

    @property
    def unlocked(self) -> frozenset[str]:
        return frozenset(self._state.unlocked_achievements)

    @property
    def notification(self) -> Optional[AchievementNotice]:
        return self._notification

    @property
    def history(self) -> tuple[AchievementNotice, ...]:
        """Every notification raised this session, oldest first."""
        return tuple(self._history)

    def is_unlocked(self, key: str) -> bool:
        return key in self._state.unlocked_achievements

    def unlock(self, key: str) -> bool:
        definition = self._definitions.get(key)
        if definition is None or key in self._state.unlocked_achievements:
            return False

        self._state.unlocked_achievements.add(key)
        if self._repository is not None and self._user_id is not None:
            self._repository.add(self._user_id, key)
        logger.info("Achievement unlocked: %s (user=%s)", key, self._user_id)

        self._notify(AchievementNotice.of(definition))
        return True

    def dismiss(self) -> bool:
        if self._dismiss_timer is not None:
            self._dismiss_timer.cancel()
            self._dismiss_timer = None
        if self._notification is None:
            return False
        self._notification = None
        return True

    def _notify(self, notice: AchievementNotice) -> None:
        self.dismiss()
        self._notification = notice
        self._history.append(notice)
        self._dismiss_timer = self._scheduler.schedule(self._auto_dismiss_ms, self._auto_dismiss, scope="achievement")

    def _auto_dismiss(self) -> None:
        self._dismiss_timer = None
        self._notification = None
