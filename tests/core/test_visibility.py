"""Tests for the visibility rule."""

import pytest

from booktoc.core.models import ContentItem, PostStatus
from booktoc.core.visibility import is_visible


class TestIsVisible:
    """Tests for is_visible."""

    @pytest.mark.parametrize("status", [s.value for s in PostStatus])
    def test_elevated_sees_every_status(self, status):
        """Elevated access sees items in any status."""
        assert is_visible(ContentItem(id=1, status=status), True) is True

    def test_published_visible_to_everyone(self):
        """Published items are visible without elevated access."""
        assert is_visible(ContentItem(id=1, status="publish"), False) is True

    def test_published_spelling_visible(self):
        """The 'published' spelling also counts as published."""
        assert is_visible(ContentItem(id=1, status="published"), False) is True

    @pytest.mark.parametrize("status", ["draft", "pending", "private", "future", ""])
    def test_unpublished_hidden(self, status):
        """Anything not published is hidden without elevated access."""
        assert is_visible(ContentItem(id=1, status=status), False) is False
