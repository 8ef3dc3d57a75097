from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .auth.manager import AuthManager
from .dashboard.service import DashboardService
from .database.connection import DatabaseConnection, DBConfig
from .onboarding.mysql_achievement_repository import MySQLAchievementRepository
from .onboarding.repository import AchievementRepository, InMemoryAchievementRepository
from .sessions import SessionRegistry
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    achievements_repo: AchievementRepository

    auth_service: AuthService
    user_service: UserService
    dashboard_service: DashboardService
    sessions: SessionRegistry
    auth_manager: Optional[AuthManager] = None


def build_container(
    *,
    user_backend: str = "memory",
    db_config: Optional[dict] = None,
    supabase_client: Any = None,
    site_url: str = "",
    clock_ms: Optional[Callable[[], int]] = None,
) -> Container:
    conn: Optional[DatabaseConnection] = None
    if user_backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql backend")
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        users_repo: UserRepository = MySQLUserRepository(conn)
        achievements_repo: AchievementRepository = MySQLAchievementRepository(conn)
    elif user_backend == "memory":
        users_repo = InMemoryUserRepository.with_demo_users()
        achievements_repo = InMemoryAchievementRepository()
    else:
        raise ValueError(f"Unknown USER_BACKEND: {user_backend!r}")

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    dashboard_service = DashboardService()
    if clock_ms is not None:
        sessions = SessionRegistry(user_service, achievements_repo, clock_ms=clock_ms)
    else:
        sessions = SessionRegistry(user_service, achievements_repo)

    auth_manager = AuthManager(supabase_client, site_url=site_url) if supabase_client is not None else None
    logger.info("Container ready (users=%s, hosted auth=%s)", user_backend, auth_manager is not None)

    return Container(
        conn=conn,
        users_repo=users_repo,
        achievements_repo=achievements_repo,
        auth_service=auth_service,
        user_service=user_service,
        dashboard_service=dashboard_service,
        sessions=sessions,
        auth_manager=auth_manager,
    )
