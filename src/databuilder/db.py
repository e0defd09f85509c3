"""
psycopg access for the store adapters.

Rows come back as dicts, which is also the shape the repo cache keeps
them in. Tests install a connection with set_connection_override() so
every fixture row lands in one transaction the test can roll back.
"""

from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from databuilder import config as cfg

Query = str | sql.Composable

_connection_override: psycopg.Connection | None = None


def set_connection_override(conn: psycopg.Connection) -> None:
    """Route every query through `conn` until the override is cleared."""
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    global _connection_override
    _connection_override = None


@contextmanager
def get_connection():
    """
    Yield the override connection if one is set; it is left untouched.

    Otherwise connect to DATABASE_URL, commit on success, roll back on
    error, and close.
    """
    if _connection_override is not None:
        yield _connection_override
        return

    if not cfg.config.database_url:
        raise RuntimeError("DATABASE_URL is not set and no connection override is active")

    conn = psycopg.connect(cfg.config.database_url)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def get_cursor():
    with get_connection() as conn:
        with conn.cursor(row_factory=dict_row) as cur:
            yield cur


def fetch_one(query: Query, params: tuple | dict = None) -> dict[str, Any] | None:
    """Run `query` and return its first row, or None."""
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.fetchone()


def fetch_all(query: Query, params: tuple | dict = None) -> list[dict[str, Any]]:
    """Run `query` and return every row."""
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.fetchall()
