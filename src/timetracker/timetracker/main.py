from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .auth.supabase_client import create_supabase_client
from .common.logging_setup import setup_logging
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .onboarding.controller import register as register_onboarding
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    user_backend = str(getattr(settings, "USER_BACKEND", "memory")).lower()
    db_config = getattr(settings, "DB_CONFIG", None)
    logger.info("Starting with settings=%s users=%s", settings_module, user_backend)

    if container is None:
        if user_backend == "mysql":
            if bool(getattr(settings, "AUTO_INIT_DB", False)):
                apply_schema(db_config, schema_path=SCHEMA_PATH)
                logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
            if bool(getattr(settings, "AUTO_SEED_DB", False)):
                ensure_demo_users(db_config)

        supabase_url = getattr(settings, "SUPABASE_URL", "")
        supabase_key = getattr(settings, "SUPABASE_ANON_KEY", "")
        supabase_client = create_supabase_client(supabase_url, supabase_key) if supabase_url and supabase_key else None

        container = build_container(
            user_backend=user_backend,
            db_config=db_config,
            supabase_client=supabase_client,
            site_url=getattr(settings, "SITE_URL", ""),
        )

    app.extensions["timetracker"] = container

    register_users(app, container)
    register_dashboard(app, container)
    register_onboarding(app, container)

    @app.route("/healthz", endpoint="healthz")
    def healthz():
        return jsonify({"success": True, "status": "ok"})

    return app
