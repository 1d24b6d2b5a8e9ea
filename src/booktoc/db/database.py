"""SQLite database connection and schema management.

Provides connection management and schema initialization for the book
content store.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_PATH = Path("db/booktoc.db")

# Current database (module-level, set by init_db)
_db_path: Path | None = None


def init_db(db_path: Path | None = None) -> None:
    """Initialize database with schema.

    Creates the database file and all required tables if they don't exist.

    Args:
        db_path: Path to database file. Defaults to db/booktoc.db
    """
    global _db_path
    _db_path = db_path or DEFAULT_DB_PATH

    _db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db() as conn:
        _create_schema(conn)

    logger.info("database.initialized", path=str(_db_path))


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Yields:
        SQLite connection with row factory set to sqlite3.Row

    Example:
        with get_db() as conn:
            rows = conn.execute("SELECT * FROM posts").fetchall()
    """
    db_path = _db_path or DEFAULT_DB_PATH

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create database schema.

    Uses IF NOT EXISTS for idempotency.
    """
    conn.executescript(
        """
        -- One row per front-matter, part, chapter or back-matter post
        CREATE TABLE IF NOT EXISTS posts (
            ID INTEGER PRIMARY KEY,
            post_type TEXT NOT NULL CHECK(post_type IN ('front-matter', 'part', 'chapter', 'back-matter')),
            post_parent INTEGER NOT NULL DEFAULT 0,
            post_title TEXT NOT NULL DEFAULT '',
            post_name TEXT NOT NULL DEFAULT '',
            post_author INTEGER NOT NULL DEFAULT 0,
            post_status TEXT NOT NULL DEFAULT 'draft',
            menu_order INTEGER NOT NULL DEFAULT 0,
            comment_count INTEGER NOT NULL DEFAULT 0,
            export INTEGER NOT NULL DEFAULT 0,
            post_content TEXT NOT NULL DEFAULT ''
        );

        CREATE INDEX IF NOT EXISTS idx_posts_type_order ON posts(post_type, menu_order);
        CREATE INDEX IF NOT EXISTS idx_posts_parent ON posts(post_parent);
        """
    )
