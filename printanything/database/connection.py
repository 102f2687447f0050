"""SQLite connection handling.

One short-lived connection per unit of work; ``get_db`` commits on
success and rolls back on error.
"""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from printanything.config import get_database_path

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS templates (
    id TEXT PRIMARY KEY,
    user_id TEXT,
    name TEXT NOT NULL,
    objects TEXT NOT NULL DEFAULT '[]',
    settings TEXT NOT NULL DEFAULT '{}',
    is_public INTEGER NOT NULL DEFAULT 0,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_templates_user ON templates(user_id);

CREATE TABLE IF NOT EXISTS print_history (
    id TEXT PRIMARY KEY,
    template_id TEXT NOT NULL,
    user_id TEXT,
    data TEXT NOT NULL DEFAULT '{}',
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_print_history_template ON print_history(template_id);
"""


def connect(path: str | Path) -> sqlite3.Connection:
    """Open a connection with dict-like rows and the schema in place."""
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    try:
        conn.executescript(SCHEMA)
    except sqlite3.Error:
        conn.close()
        raise
    return conn


@contextmanager
def get_db(path: str | Path | None = None) -> Iterator[sqlite3.Connection]:
    """Connection context manager.

    Usage:
        with get_db() as conn:
            row = get_template_row(conn, template_id)
    """
    db_path = path or get_database_path()
    if db_path is None:
        raise ValueError("No database path configured (set PRINTANYTHING_DATABASE_PATH)")
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
