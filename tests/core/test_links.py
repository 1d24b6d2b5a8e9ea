"""Tests for link construction."""

from booktoc.core.links import LinkBuilder, trailingslashit


class TestTrailingSlashIt:
    def test_adds_slash(self):
        assert trailingslashit("http://x/a") == "http://x/a/"

    def test_collapses_slashes(self):
        assert trailingslashit("http://x/a//") == "http://x/a/"


class TestLinkBuilder:
    """Tests for LinkBuilder."""

    def test_rest_url_joins_cleanly(self):
        """Slashes on either side of the join are normalized."""
        builder = LinkBuilder(base_url="http://x/api/", namespace="books/v2")

        assert builder.rest_url("/books/v2/toc") == "http://x/api/books/v2/toc"

    def test_item_links(self):
        """Item links address the item, its collection and its type."""
        builder = LinkBuilder(base_url="http://x", namespace="books/v2")

        item_links = builder.item_links("chapters", 3)

        assert item_links.to_dict() == {
            "up": {"href": "http://x/books/v2/chapters/3"},
            "collection": {"href": "http://x/books/v2/chapters"},
            "about": {"href": "http://x/books/v2/types/chapters"},
        }

    def test_types_namespace(self):
        """about links can live in another namespace."""
        builder = LinkBuilder(base_url="http://x", namespace="books/v2", types_namespace="wp/v2")

        assert builder.about_url("parts") == "http://x/wp/v2/types/parts"
