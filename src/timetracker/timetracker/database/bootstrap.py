"""Schema and demo-data setup for the MySQL backend."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from werkzeug.security import generate_password_hash

from ..users.memory_user_repository import DEMO_PASSWORD, DEMO_USERS
from .connection import DatabaseConnection, DBConfig
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

# schema.sql names its own database; the configured one wins.
_DATABASE_LINE = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def split_schema(sql: str) -> Iterator[str]:
    """Statements of a schema file, minus comments and database selection.

    Statements end with ';' at the end of a line; string literals in the
    schema never contain one.
    """
    buf: list[str] = []
    for line in sql.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("--") or _DATABASE_LINE.match(stripped):
            continue
        buf.append(line.rstrip())
        if stripped.endswith(";"):
            yield "\n".join(buf).rstrip(";").strip()
            buf = []
    if buf:
        yield "\n".join(buf).strip()


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    statements = list(split_schema(Path(schema_path).read_text(encoding="utf-8")))

    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config))) as (_, cur):
        for stmt in statements:
            cur.execute(stmt)
    logger.info("Applied %d statement(s) from %s", len(statements), schema_path)


def ensure_demo_users(db_config: dict) -> None:
    """Upsert the five sample profiles. New rows start flagged for onboarding."""
    password_hash = generate_password_hash(DEMO_PASSWORD)
    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config))) as (_, cur):
        for name, email, role, department in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO profiles (name, email, password_hash, role, department, status, is_first_login)
                VALUES (%s, %s, %s, %s, %s, 'active', 1)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), password_hash=VALUES(password_hash),
                    role=VALUES(role), department=VALUES(department), status='active'
                """,
                (name, email, password_hash, role.value, department),
            )
    logger.info("Demo profiles ready (%d users)", len(DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config)), read_only=True) as (_, cur):
        cur.execute("SHOW TABLES")
        return sorted(next(iter(row.values())) for row in cur.fetchall())
