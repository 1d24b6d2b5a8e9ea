"""Pydantic schemas for Web API.

Serialization models for the TOC and health endpoints.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from booktoc.core.models import PostStatus


# =============================================================================
# TOC SCHEMAS
# =============================================================================


class HrefResponse(BaseModel):
    """A single link target."""

    href: str


class ItemLinksResponse(BaseModel):
    """Navigation links of a TOC entry."""

    up: HrefResponse
    collection: HrefResponse
    about: HrefResponse


class TocItemResponse(BaseModel):
    """Front-matter, chapter or back-matter entry.

    Source fields without a public name are passed through as extras.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int = Field(..., description="Unique identifier for the object.")
    title: str = Field(default="", description="The title for the object.")
    slug: str = Field(
        default="",
        description="An alphanumeric identifier for the object unique to its type.",
    )
    author: int = Field(default=0, description="The ID for the author of the object.")
    comment_count: int = Field(default=0, description="Comment count")
    menu_order: int = Field(
        default=0,
        description="The order of the object in relation to other object of its type.",
    )
    status: str = Field(
        default=PostStatus.DRAFT.value, description="A named status for the object."
    )
    export: bool = Field(default=False, description="Include in exports.")
    has_post_content: bool = Field(
        default=False,
        description="Has post content, the content field is not empty.",
    )
    links: ItemLinksResponse | None = Field(default=None, alias="_links")


class TocPartResponse(TocItemResponse):
    """Part entry with its chapters."""

    chapters: list[TocItemResponse] = Field(default_factory=list, description="Chapter")


class TocResponse(BaseModel):
    """Table of contents."""

    model_config = ConfigDict(populate_by_name=True)

    front_matter: list[TocItemResponse] = Field(
        default_factory=list, alias="front-matter", description="Front Matter"
    )
    part: list[TocPartResponse] = Field(default_factory=list, description="Part")
    back_matter: list[TocItemResponse] = Field(
        default_factory=list, alias="back-matter", description="Back Matter"
    )
    links: dict[str, list[HrefResponse]] | None = Field(default=None, alias="_links")


class RouteDescriptionResponse(BaseModel):
    """Route metadata returned by OPTIONS."""

    namespace: str
    methods: list[str]
    schema_: dict[str, Any] = Field(..., alias="schema")

    model_config = ConfigDict(populate_by_name=True)


def _item_properties() -> dict[str, Any]:
    """JSON Schema properties shared by every TOC entry."""
    schema = TocItemResponse.model_json_schema(by_alias=True)
    properties = {
        name: prop
        for name, prop in schema["properties"].items()
        if name != "_links"
    }
    # Inline the status enum instead of a $ref
    properties["status"] = {
        "description": "A named status for the object.",
        "type": "string",
        "enum": [s.value for s in PostStatus],
    }
    for prop in properties.values():
        prop.pop("default", None)
        prop.pop("title", None)
    return properties


def get_toc_schema() -> dict[str, Any]:
    """JSON Schema describing the TOC response body."""
    item = _item_properties()
    item_array = {"type": "array", "items": {"type": "object", "properties": item}}

    return {
        "$schema": "http://json-schema.org/schema#",
        "title": "toc",
        "type": "object",
        "properties": {
            "front-matter": {"description": "Front Matter", **item_array},
            "part": {
                "description": "Part",
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        **item,
                        "chapters": {"description": "Chapter", **item_array},
                    },
                },
            },
            "back-matter": {"description": "Back Matter", **item_array},
        },
    }


# =============================================================================
# CONTENT TYPE SCHEMAS
# =============================================================================


class ContentTypeResponse(BaseModel):
    """Description of a TOC content type."""

    slug: str
    name: str
    description: str
    rest_base: str
    collection: str


class ContentTypeListResponse(BaseModel):
    """Response for list of content types."""

    types: list[ContentTypeResponse]
    count: int


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
