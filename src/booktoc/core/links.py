"""REST URL construction for TOC hyperlinks."""

from __future__ import annotations

from dataclasses import dataclass

from booktoc.core.models import ItemLinks, Link


def trailingslashit(url: str) -> str:
    """Return ``url`` with exactly one trailing slash."""
    return url.rstrip("/") + "/"


@dataclass(frozen=True)
class LinkBuilder:
    """Builds hrefs under ``{base_url}/{namespace}``.

    Args:
        base_url: Public root of the API (e.g. "http://localhost:8000")
        namespace: Route namespace (e.g. "books/v2")
        types_namespace: Namespace that serves type descriptions, used by
            ``about`` links. Defaults to ``namespace``.
    """

    base_url: str
    namespace: str
    types_namespace: str | None = None

    def rest_url(self, path: str = "") -> str:
        """Absolute URL for a path relative to the API root."""
        root = trailingslashit(self.base_url)
        return root + path.lstrip("/")

    def collection_url(self, rest_base: str) -> str:
        return self.rest_url(f"{self.namespace.strip('/')}/{rest_base}")

    def about_url(self, rest_base: str) -> str:
        types_ns = (self.types_namespace or self.namespace).strip("/")
        return self.rest_url(f"{types_ns}/types/{rest_base}")

    def item_links(self, rest_base: str, item_id: int) -> ItemLinks:
        """Links for one item of type ``rest_base``."""
        collection = self.collection_url(rest_base)
        return ItemLinks(
            up=Link(trailingslashit(collection) + str(item_id)),
            collection=Link(collection),
            about=Link(self.about_url(rest_base)),
        )
