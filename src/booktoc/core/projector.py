"""Structure projector.

Turns a raw book structure, as returned by the content store, into the
public TOC view:

- renames source fields to the public vocabulary
- drops items the caller may not see (front-matter, chapters, back-matter)
- attaches ``up`` / ``collection`` / ``about`` links to every entry

Parts are kept regardless of their own status unless ``filter_parts`` is
set; their chapters are always filtered.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import structlog

from booktoc.core.links import LinkBuilder
from booktoc.core.models import (
    BACK_MATTER,
    FRONT_MATTER,
    PART,
    ContentItem,
    Link,
    Part,
    TocEntry,
    TocView,
)
from booktoc.core.visibility import is_visible

logger = structlog.get_logger(__name__)

# Segment -> REST base used in links
REST_BASES = {
    FRONT_MATTER: "front-matter",
    PART: "parts",
    "chapter": "chapters",
    BACK_MATTER: "back-matter",
}


def _segment(raw_structure: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    """Records of one segment; absent or null segments are empty."""
    return list(raw_structure.get(key) or [])


def _project_items(
    records: Iterable[Mapping[str, Any]],
    segment: str,
    has_elevated_access: bool,
    links: LinkBuilder,
) -> tuple[TocEntry, ...]:
    rest_base = REST_BASES[segment]
    entries = []
    for raw in records:
        item = ContentItem.from_raw(raw, segment)
        if not is_visible(item, has_elevated_access):
            continue
        entries.append(TocEntry(item=item, links=links.item_links(rest_base, item.id)))
    return tuple(entries)


def _project_parts(
    records: Iterable[Mapping[str, Any]],
    has_elevated_access: bool,
    links: LinkBuilder,
    filter_parts: bool,
) -> tuple[Part, ...]:
    parts = []
    for raw in records:
        item = ContentItem.from_raw(raw, PART)
        if filter_parts and not is_visible(item, has_elevated_access):
            continue
        chapters = _project_items(
            raw.get("chapters") or [], "chapter", has_elevated_access, links
        )
        parts.append(
            Part(
                item=item,
                links=links.item_links(REST_BASES[PART], item.id),
                chapters=chapters,
            )
        )
    return tuple(parts)


def project(
    raw_structure: Mapping[str, Any],
    has_elevated_access: bool,
    links: LinkBuilder,
    filter_parts: bool = False,
    self_path: str | None = None,
) -> TocView:
    """Project a raw book structure into a public TOC view.

    Args:
        raw_structure: Mapping with ``front-matter``, ``part`` and
            ``back-matter`` segments. Other keys are ignored.
        has_elevated_access: Whether the caller may see unpublished items
        links: Link builder for the API the view is served from
        filter_parts: Also drop unpublished parts for unprivileged callers
        self_path: Route path of the TOC resource, relative to the
            namespace; adds a ``self`` link when given

    Returns:
        A new TocView. The input is not modified.

    Raises:
        StructureError: If a record has no usable ``ID``.
    """
    view = TocView(
        front_matter=_project_items(
            _segment(raw_structure, FRONT_MATTER), FRONT_MATTER, has_elevated_access, links
        ),
        parts=_project_parts(
            _segment(raw_structure, PART), has_elevated_access, links, filter_parts
        ),
        back_matter=_project_items(
            _segment(raw_structure, BACK_MATTER), BACK_MATTER, has_elevated_access, links
        ),
        self_link=Link(links.collection_url(self_path)) if self_path else None,
    )

    logger.debug(
        "toc.projected",
        elevated=has_elevated_access,
        front_matter=len(view.front_matter),
        parts=len(view.parts),
        chapters=sum(len(p.chapters) for p in view.parts),
        back_matter=len(view.back_matter),
    )
    return view
