"""Book structure import.

Loads a book structure from a YAML (or JSON) file into the posts table.
The file mirrors the raw structure shape:

    front-matter:
      - post_title: Preface
        post_status: publish
    part:
      - post_title: Part I
        chapters:
          - post_title: Getting Started
    back-matter:
      - post_title: Appendix

Missing slugs are generated from titles; missing ``menu_order`` values
follow the position in the file.
"""

from __future__ import annotations

import re
import sqlite3
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import structlog
import yaml

from booktoc.core.models import BACK_MATTER, FRONT_MATTER, PART, normalize_status
from booktoc.db.database import get_db
from booktoc.db.structure_repository import delete_all_posts, insert_post

logger = structlog.get_logger(__name__)


@dataclass
class ImportResult:
    """Counts of posts imported per type."""

    front_matter: int = 0
    parts: int = 0
    chapters: int = 0
    back_matter: int = 0

    @property
    def total(self) -> int:
        return self.front_matter + self.parts + self.chapters + self.back_matter


class StructureImportError(Exception):
    """Raised when a structure file cannot be imported."""

    pass


def slugify(text: str) -> str:
    """Normalize text to slug-friendly format."""
    text = unicodedata.normalize("NFKD", text)
    text = "".join(c for c in text if not unicodedata.combining(c))
    text = text.lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-")


def _int(record: Mapping[str, Any], key: str, default: int, where: str) -> int:
    value = record.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise StructureImportError(f"{where}: '{key}' must be an integer, got {value!r}") from e


def _insert(
    conn: sqlite3.Connection,
    post_type: str,
    record: Mapping[str, Any],
    position: int,
    parent: int = 0,
) -> int:
    where = f"{post_type} entry #{position}"
    if not isinstance(record, Mapping):
        raise StructureImportError(f"{where} is not a mapping")

    title = str(record.get("post_title") or "")
    post_id = _int(record, "ID", 0, where) or None
    return insert_post(
        post_type=post_type,
        post_title=title,
        post_name=str(record.get("post_name") or slugify(title)),
        post_status=normalize_status(record.get("post_status", "draft")),
        post_author=_int(record, "post_author", 0, where),
        menu_order=_int(record, "menu_order", position, where),
        post_parent=parent,
        comment_count=_int(record, "comment_count", 0, where),
        export=bool(record.get("export", False)),
        post_content=str(record.get("post_content") or ""),
        post_id=post_id,
        conn=conn,
    )


def import_structure(file_path: Path, replace: bool = False) -> ImportResult:
    """Import a structure file into the current database.

    Args:
        file_path: YAML or JSON file in raw structure shape
        replace: If True, delete existing posts first

    Returns:
        ImportResult with per-type counts

    Raises:
        StructureImportError: If the file is missing, unparsable or malformed,
            or its posts clash with stored ones. Nothing is written then.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise StructureImportError(f"File not found: {file_path}")

    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise StructureImportError(f"Cannot parse {file_path}: {e}") from e

    if not isinstance(data, Mapping):
        raise StructureImportError(f"{file_path} must contain a mapping at top level")

    logger.info("import_structure.start", file=str(file_path), replace=replace)

    result = ImportResult()

    # One transaction: a failed import leaves the store as it was
    try:
        with get_db() as conn:
            if replace:
                removed = delete_all_posts(conn)
                logger.info("import_structure.cleared", removed=removed)

            for i, record in enumerate(data.get(FRONT_MATTER) or [], start=1):
                _insert(conn, FRONT_MATTER, record, i)
                result.front_matter += 1

            for i, record in enumerate(data.get(PART) or [], start=1):
                part_id = _insert(conn, PART, record, i)
                result.parts += 1
                for j, chapter in enumerate(record.get("chapters") or [], start=1):
                    _insert(conn, "chapter", chapter, j, parent=part_id)
                    result.chapters += 1

            for i, record in enumerate(data.get(BACK_MATTER) or [], start=1):
                _insert(conn, BACK_MATTER, record, i)
                result.back_matter += 1
    except sqlite3.IntegrityError as e:
        logger.warning("import_structure.failed", file=str(file_path), error=str(e))
        raise StructureImportError(f"Cannot import {file_path}: {e}") from e

    logger.info("import_structure.done", total=result.total)
    return result
