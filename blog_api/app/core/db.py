"""
SQLite database integration.

This module provides functions for resolving the database location
(``get_database_path``), obtaining a connection (``get_connection``)
and creating the ``posts`` table on application start (``init_db``).
SQLite is used as a lightweight embedded document store: every post
is one row keyed by its id, with the author stored as a JSON document.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If ``database_url`` (default: ``settings.database_url``) is an
    absolute path, use it directly.  Otherwise resolve it relative to
    the project root.
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / db_url).resolve())


def get_connection(database_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.
    Timestamps are stored as ISO strings and parsed by the caller.
    """
    conn = sqlite3.connect(database_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(database_path: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(database_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(database_path: str) -> None:
    """Create the ``posts`` table if it does not exist yet."""
    with get_cursor(database_path) as cursor:
        cursor.executescript(
            """
            CREATE TABLE IF NOT EXISTS posts (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                author TEXT NOT NULL,
                created TIMESTAMP NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_posts_created ON posts(created);
            """
        )
