from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timetracker.timetracker.common.logging_setup import setup_logging
from src.timetracker.timetracker.database.bootstrap import ensure_demo_users
from src.timetracker.timetracker.users.memory_user_repository import DEMO_PASSWORD, DEMO_USERS


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_users(db_config)

    print(
        f"OK: Seeded {len(DEMO_USERS)} demo users (password '{DEMO_PASSWORD}') -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
