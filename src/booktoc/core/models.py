"""Domain types for the table of contents.

Raw records use the storage vocabulary (``ID``, ``post_title``,
``post_name``, ``post_author``, ``post_status``); the types here use the
public vocabulary (``id``, ``title``, ``slug``, ``author``, ``status``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class PostStatus(str, Enum):
    """Publication states a content item can be in."""

    PUBLISH = "publish"
    FUTURE = "future"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"


# Spellings accepted on input for the published state
STATUS_ALIASES = {"published": PostStatus.PUBLISH.value}

# Raw status values that count as published
PUBLISHED_STATUSES = frozenset({PostStatus.PUBLISH.value, *STATUS_ALIASES})

# Segment keys of a raw book structure, in output order
FRONT_MATTER = "front-matter"
PART = "part"
BACK_MATTER = "back-matter"

# Source key -> public key
RENAMED_FIELDS = {
    "ID": "id",
    "post_title": "title",
    "post_name": "slug",
    "post_author": "author",
    "post_status": "status",
}

# Fields that keep their source name
PASSTHROUGH_FIELDS = ("comment_count", "menu_order", "export", "has_post_content")


class StructureError(Exception):
    """Raised when a raw structure record cannot be read."""

    def __init__(self, segment: str, message: str):
        self.segment = segment
        super().__init__(f"Invalid {segment} record: {message}")


def normalize_status(value: Any) -> str:
    """Return the canonical status string for a raw status value."""
    if isinstance(value, PostStatus):
        return value.value
    status = str(value or "").strip().lower()
    return STATUS_ALIASES.get(status, status)


def _int_field(raw: Mapping[str, Any], key: str, segment: str) -> int:
    value = raw.get(key)
    try:
        return int(value or 0)
    except (TypeError, ValueError) as e:
        raise StructureError(segment, f"bad '{key}' {value!r}") from e


@dataclass(frozen=True)
class Link:
    """A single hyperlink."""

    href: str


@dataclass(frozen=True)
class ItemLinks:
    """Navigation links attached to every TOC entry."""

    up: Link
    collection: Link
    about: Link

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            "up": {"href": self.up.href},
            "collection": {"href": self.collection.href},
            "about": {"href": self.about.href},
        }


@dataclass(frozen=True)
class ContentItem:
    """One front-matter, part, chapter or back-matter record."""

    id: int
    title: str = ""
    slug: str = ""
    author: int = 0
    comment_count: int = 0
    menu_order: int = 0
    status: str = PostStatus.DRAFT.value
    export: bool = False
    has_post_content: bool = False
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], segment: str) -> ContentItem:
        """Build an item from a raw record keyed by source field names.

        Keys outside the known set are kept in ``extra`` untouched. The
        status value is kept as stored.

        Raises:
            StructureError: If the record has no usable ``ID`` or a
                non-numeric author, comment count or menu order.
        """
        if "ID" not in raw:
            raise StructureError(segment, "missing 'ID'")
        try:
            item_id = int(raw["ID"])
        except (TypeError, ValueError) as e:
            raise StructureError(segment, f"bad 'ID' {raw['ID']!r}") from e

        known = set(RENAMED_FIELDS) | set(PASSTHROUGH_FIELDS) | {"chapters"}
        extra = {k: v for k, v in raw.items() if k not in known}

        return cls(
            id=item_id,
            title=str(raw.get("post_title") or ""),
            slug=str(raw.get("post_name") or ""),
            author=_int_field(raw, "post_author", segment),
            comment_count=_int_field(raw, "comment_count", segment),
            menu_order=_int_field(raw, "menu_order", segment),
            status=str(raw.get("post_status") or PostStatus.DRAFT.value),
            export=bool(raw.get("export", False)),
            has_post_content=bool(raw.get("has_post_content", False)),
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        data.update(
            id=self.id,
            title=self.title,
            slug=self.slug,
            author=self.author,
            comment_count=self.comment_count,
            menu_order=self.menu_order,
            status=self.status,
            export=self.export,
            has_post_content=self.has_post_content,
        )
        return data


@dataclass(frozen=True)
class TocEntry:
    """A content item with its navigation links."""

    item: ContentItem
    links: ItemLinks

    def to_dict(self) -> dict[str, Any]:
        data = self.item.to_dict()
        data["_links"] = self.links.to_dict()
        return data


@dataclass(frozen=True)
class Part:
    """A part entry and the chapters visible inside it."""

    item: ContentItem
    links: ItemLinks
    chapters: tuple[TocEntry, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = self.item.to_dict()
        data["chapters"] = [c.to_dict() for c in self.chapters]
        data["_links"] = self.links.to_dict()
        return data


@dataclass(frozen=True)
class TocView:
    """Public table of contents for one request."""

    front_matter: tuple[TocEntry, ...]
    parts: tuple[Part, ...]
    back_matter: tuple[TocEntry, ...]
    self_link: Link | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape (hyphenated segment keys)."""
        data: dict[str, Any] = {
            FRONT_MATTER: [e.to_dict() for e in self.front_matter],
            PART: [p.to_dict() for p in self.parts],
            BACK_MATTER: [e.to_dict() for e in self.back_matter],
        }
        if self.self_link is not None:
            data["_links"] = {"self": [{"href": self.self_link.href}]}
        return data
