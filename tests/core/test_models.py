"""Tests for TOC domain types."""

import pytest

from booktoc.core.models import ContentItem, StructureError, normalize_status


class TestNormalizeStatus:
    """Tests for normalize_status."""

    def test_published_alias(self):
        assert normalize_status("published") == "publish"

    def test_case_and_whitespace(self):
        assert normalize_status(" Draft ") == "draft"

    def test_none_is_empty(self):
        assert normalize_status(None) == ""


class TestContentItemFromRaw:
    """Tests for ContentItem.from_raw."""

    def test_maps_source_fields(self, record_factory):
        """Every source field lands on its public attribute."""
        item = ContentItem.from_raw(record_factory(7, "Intro", "publish"), "front-matter")

        assert item.id == 7
        assert item.title == "Intro"
        assert item.slug == "intro"
        assert item.author == 1
        assert item.menu_order == 7
        assert item.status == "publish"
        assert item.export is True
        assert item.has_post_content is True
        assert item.extra == {}

    def test_numeric_strings_coerced(self):
        """Stores that return strings for numbers still produce ints."""
        item = ContentItem.from_raw(
            {"ID": "12", "post_author": "3", "menu_order": "2"}, "chapter"
        )

        assert item.id == 12
        assert item.author == 3
        assert item.menu_order == 2

    def test_bad_id(self):
        """A non-numeric ID is a StructureError."""
        with pytest.raises(StructureError, match="bad 'ID'"):
            ContentItem.from_raw({"ID": "abc"}, "part")

    @pytest.mark.parametrize("key", ["post_author", "comment_count", "menu_order"])
    def test_bad_numeric_field(self, key):
        """Non-numeric counters are a StructureError, not a ValueError."""
        with pytest.raises(StructureError, match=f"bad '{key}'"):
            ContentItem.from_raw({"ID": 1, key: "first"}, "chapter")

    def test_status_kept_as_stored(self):
        item = ContentItem.from_raw({"ID": 1, "post_status": "published"}, "part")

        assert item.status == "published"

    def test_missing_status_is_draft(self):
        assert ContentItem.from_raw({"ID": 1}, "part").status == "draft"

    def test_chapters_not_kept_as_extra(self):
        """A part's chapter list is not copied into extra."""
        item = ContentItem.from_raw({"ID": 1, "chapters": []}, "part")

        assert "chapters" not in item.extra
