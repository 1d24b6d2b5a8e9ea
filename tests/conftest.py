"""Shared fixtures for booktoc tests."""

from pathlib import Path
from typing import Any

import pytest
import structlog

from booktoc.config.app_config import (
    ApiConfig,
    AppConfig,
    AuthConfig,
    SiteConfig,
    TokenGrant,
)
from booktoc.core.links import LinkBuilder
from booktoc.db.database import init_db

EDITOR_TOKEN = "editor-token"
READER_TOKEN = "reader-token"


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo logging config from CLI tests, whose captured stderr closes after each test."""
    yield
    structlog.reset_defaults()


def make_record(post_id: int, title: str, status: str, **extra: Any) -> dict[str, Any]:
    """Raw structure record in source vocabulary."""
    record = {
        "ID": post_id,
        "post_title": title,
        "post_name": title.lower().replace(" ", "-"),
        "post_author": 1,
        "comment_count": 0,
        "menu_order": post_id,
        "post_status": status,
        "export": True,
        "has_post_content": True,
    }
    record.update(extra)
    return record


@pytest.fixture
def raw_structure() -> dict[str, Any]:
    """Book with published and unpublished items in every segment."""
    return {
        "front-matter": [
            make_record(1, "Preface", "publish"),
            make_record(2, "Draft Note", "draft"),
        ],
        "part": [
            {
                **make_record(5, "Part One", "publish"),
                "chapters": [
                    make_record(10, "Getting Started", "publish"),
                    make_record(11, "Unfinished", "draft"),
                ],
            },
            {
                **make_record(6, "Part Two", "draft"),
                "chapters": [
                    make_record(12, "Advanced Topics", "publish"),
                ],
            },
        ],
        "back-matter": [
            make_record(30, "Appendix", "publish"),
            make_record(31, "Private Notes", "private"),
        ],
        "__order": {1: {"post_status": "publish"}},
        "__export_lookup": {"preface": True},
    }


@pytest.fixture
def links() -> LinkBuilder:
    """Link builder for a test host."""
    return LinkBuilder(base_url="http://example.test", namespace="books/v2")


@pytest.fixture
def app_config() -> AppConfig:
    """Public site with one editor and one reader token."""
    return AppConfig(
        api=ApiConfig(base_url="http://example.test", namespace="books/v2"),
        site=SiteConfig(blog_public=True, filter_parts=False),
        auth=AuthConfig(
            tokens={
                EDITOR_TOKEN: TokenGrant(user_id=1, capabilities=["edit_posts"]),
                READER_TOKEN: TokenGrant(user_id=2, capabilities=["read"]),
            }
        ),
        paths={},
    )


@pytest.fixture
def temp_db(tmp_path) -> Path:
    """Initialize a fresh database under tmp_path."""
    db_path = tmp_path / "db" / "booktoc.db"
    init_db(db_path)
    return db_path


@pytest.fixture
def record_factory():
    """Factory for raw structure records."""
    return make_record


@pytest.fixture
def editor_headers() -> dict[str, str]:
    """Auth headers of a caller who can edit posts."""
    return {"Authorization": f"Bearer {EDITOR_TOKEN}"}


@pytest.fixture
def reader_headers() -> dict[str, str]:
    """Auth headers of an authenticated caller without edit_posts."""
    return {"Authorization": f"Bearer {READER_TOKEN}"}
