from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .common.datetime_utils import monotonic_ms
from .dashboard.session import DashboardSession
from .onboarding.host import LayoutAnchorLocator
from .onboarding.orchestrator import OnboardingContext, OnboardingOrchestrator
from .onboarding.repository import AchievementRepository
from .onboarding.timers import TimerScheduler
from .users.model import User
from .users.service import UserService

logger = logging.getLogger(__name__)


@dataclass
class UserSession:
    """Server-side state for one signed-in user."""

    user_id: int
    dashboard: DashboardSession
    onboarding: OnboardingOrchestrator
    locator: LayoutAnchorLocator


class SessionRegistry:
    """Owns the live `UserSession`s, keyed by user id.

    Created on login, dropped on logout; nothing is shared between users.
    """

    def __init__(
        self,
        user_service: UserService,
        achievements: Optional[AchievementRepository] = None,
        *,
        clock_ms: Callable[[], int] = monotonic_ms,
    ):
        self._users = user_service
        self._achievements = achievements
        self._clock_ms = clock_ms
        self._sessions: Dict[int, UserSession] = {}

    def open(self, user: User) -> UserSession:
        dashboard = DashboardSession()
        locator = LayoutAnchorLocator()
        context = OnboardingContext(
            user=user,
            host=dashboard,
            users=self._users,
            locator=locator,
            scheduler=TimerScheduler(self._clock_ms),
            achievements=self._achievements,
        )
        onboarding = OnboardingOrchestrator(context)
        dashboard.on_achievement = onboarding.check_achievement

        session = UserSession(user_id=user.user_id, dashboard=dashboard, onboarding=onboarding, locator=locator)
        self._sessions[user.user_id] = session
        logger.debug("Opened session for user %s", user.user_id)
        return session

    def get(self, user_id: int) -> Optional[UserSession]:
        return self._sessions.get(int(user_id))

    def get_or_open(self, user_id: int) -> Optional[UserSession]:
        session = self.get(user_id)
        if session is not None:
            return session
        user = self._users.get(user_id)
        return self.open(user) if user else None

    def close(self, user_id: int) -> bool:
        session = self._sessions.pop(int(user_id), None)
        if session is None:
            return False
        session.onboarding.escape()
        logger.debug("Closed session for user %s", user_id)
        return True
