"""Repository functions for the posts table.

Provides inserts and the raw book structure read used by the TOC.
"""

from __future__ import annotations

import sqlite3
from contextlib import nullcontext
from typing import Any, ContextManager

import structlog

from booktoc.core.models import BACK_MATTER, FRONT_MATTER, PART
from booktoc.db.database import get_db

logger = structlog.get_logger(__name__)

POST_TYPES = (FRONT_MATTER, PART, "chapter", BACK_MATTER)


def _connection(conn: sqlite3.Connection | None) -> ContextManager[sqlite3.Connection]:
    """Use the caller's connection, or open and commit a new one."""
    return nullcontext(conn) if conn is not None else get_db()


def insert_post(
    post_type: str,
    post_title: str,
    post_name: str = "",
    post_status: str = "draft",
    post_author: int = 0,
    menu_order: int = 0,
    post_parent: int = 0,
    comment_count: int = 0,
    export: bool = False,
    post_content: str = "",
    post_id: int | None = None,
    conn: sqlite3.Connection | None = None,
) -> int:
    """Insert a new post record.

    Args:
        post_type: One of front-matter, part, chapter, back-matter
        post_title: Display title
        post_name: Slug
        post_status: Publication status
        post_author: Author user ID
        menu_order: Position among posts of the same type
        post_parent: Part ID for chapters, 0 otherwise
        comment_count: Number of comments
        export: Include in exports
        post_content: Body content
        post_id: Explicit ID; autoincrement when None
        conn: Open connection to insert through; the caller commits.
            A new connection is opened and committed when None.

    Returns:
        The ID of the inserted post.

    Raises:
        ValueError: If post_type is unknown
        sqlite3.IntegrityError: If post_id already exists
    """
    if post_type not in POST_TYPES:
        raise ValueError(f"Unknown post type '{post_type}'")

    with _connection(conn) as db:
        cursor = db.execute(
            """
            INSERT INTO posts (
                ID, post_type, post_parent, post_title, post_name,
                post_author, post_status, menu_order, comment_count,
                export, post_content
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                post_id,
                post_type,
                post_parent,
                post_title,
                post_name,
                post_author,
                post_status,
                menu_order,
                comment_count,
                int(export),
                post_content,
            ),
        )
        new_id = cursor.lastrowid

    logger.debug("posts.inserted", post_id=new_id, post_type=post_type)
    return new_id


def delete_all_posts(conn: sqlite3.Connection | None = None) -> int:
    """Delete every post. Returns the number of rows removed."""
    with _connection(conn) as db:
        cursor = db.execute("DELETE FROM posts")
        return cursor.rowcount


def count_posts() -> int:
    with get_db() as conn:
        return conn.execute("SELECT COUNT(*) FROM posts").fetchone()[0]


def _row_to_record(row: sqlite3.Row) -> dict[str, Any]:
    """Convert a posts row to a raw structure record."""
    return {
        "ID": row["ID"],
        "post_title": row["post_title"],
        "post_name": row["post_name"],
        "post_author": row["post_author"],
        "comment_count": row["comment_count"],
        "menu_order": row["menu_order"],
        "post_status": row["post_status"],
        "export": bool(row["export"]),
        "has_post_content": bool(row["post_content"].strip()),
    }


def get_book_structure() -> dict[str, Any]:
    """Read the raw book structure.

    Posts are returned in storage order (menu_order, then ID). Chapters are
    nested under their parent part; chapters without a known part are
    left out.

    Returns:
        Dict with ``front-matter``, ``part`` (each with ``chapters``) and
        ``back-matter`` lists, plus the ``__order`` and ``__export_lookup``
        indexes.
    """
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM posts ORDER BY menu_order, ID"
        ).fetchall()

    structure: dict[str, Any] = {FRONT_MATTER: [], PART: [], BACK_MATTER: []}
    order: dict[int, dict[str, Any]] = {}
    export_lookup: dict[str, bool] = {}
    parts_by_id: dict[int, dict[str, Any]] = {}
    chapter_rows = []

    for row in rows:
        post_type = row["post_type"]
        order[row["ID"]] = {
            "post_status": row["post_status"],
            "export": bool(row["export"]),
            "post_parent": row["post_parent"],
            "post_type": post_type,
        }
        export_lookup[row["post_name"]] = bool(row["export"])

        if post_type == "chapter":
            chapter_rows.append(row)
            continue

        record = _row_to_record(row)
        if post_type == PART:
            record["chapters"] = []
            parts_by_id[row["ID"]] = record
        structure[post_type].append(record)

    for row in chapter_rows:
        part = parts_by_id.get(row["post_parent"])
        if part is None:
            logger.warning(
                "structure.orphan_chapter", post_id=row["ID"], post_parent=row["post_parent"]
            )
            continue
        part["chapters"].append(_row_to_record(row))

    structure["__order"] = order
    structure["__export_lookup"] = export_lookup
    return structure
