from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, read_only: bool = False) -> Iterator[Tuple[Any, Any]]:
    """One unit of work on a short-lived connection with a dict cursor.

    Commits on success unless `read_only`; rolls back and re-raises on error.
    """
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=True)
    try:
        yield conn, cur
        if not read_only:
            conn.commit()
    except Exception:
        logger.warning("Rolling back transaction on %s", conn_factory.config.database)
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def query_one(conn_factory: DatabaseConnection, sql: str, params: Sequence[Any] = ()) -> Optional[Row]:
    with db_cursor(conn_factory, read_only=True) as (_, cur):
        cur.execute(sql, tuple(params))
        return cur.fetchone() or None


def query_all(conn_factory: DatabaseConnection, sql: str, params: Sequence[Any] = ()) -> List[Row]:
    with db_cursor(conn_factory, read_only=True) as (_, cur):
        cur.execute(sql, tuple(params))
        return list(cur.fetchall() or [])


def execute(conn_factory: DatabaseConnection, sql: str, params: Sequence[Any] = ()) -> Tuple[int, Optional[int]]:
    """Run a write statement; returns (rowcount, lastrowid)."""
    with db_cursor(conn_factory) as (_, cur):
        cur.execute(sql, tuple(params))
        return cur.rowcount, cur.lastrowid
