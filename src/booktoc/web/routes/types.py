"""Content type description endpoints.

Targets of the ``about`` links attached to TOC entries.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from booktoc.core.links import LinkBuilder
from booktoc.web.routes.toc import get_link_builder
from booktoc.web.schemas import ContentTypeListResponse, ContentTypeResponse

router = APIRouter(prefix="/types", tags=["types"])

# rest_base -> (name, description)
CONTENT_TYPES = {
    "front-matter": ("Front Matter", "Content that precedes the main body of the book."),
    "parts": ("Parts", "Groupings of chapters."),
    "chapters": ("Chapters", "Main body content, grouped into parts."),
    "back-matter": ("Back Matter", "Content that follows the main body of the book."),
}


def _type_to_response(rest_base: str, links: LinkBuilder) -> ContentTypeResponse:
    name, description = CONTENT_TYPES[rest_base]
    return ContentTypeResponse(
        slug=rest_base,
        name=name,
        description=description,
        rest_base=rest_base,
        collection=links.collection_url(rest_base),
    )


@router.get("", response_model=ContentTypeListResponse)
async def list_types(links: LinkBuilder = Depends(get_link_builder)) -> ContentTypeListResponse:
    """List the content types that appear in the TOC."""
    types = [_type_to_response(t, links) for t in CONTENT_TYPES]
    return ContentTypeListResponse(types=types, count=len(types))


@router.get("/{rest_base}", response_model=ContentTypeResponse)
async def get_type(
    rest_base: str, links: LinkBuilder = Depends(get_link_builder)
) -> ContentTypeResponse:
    """Describe one content type."""
    if rest_base not in CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Type '{rest_base}' not found",
        )
    return _type_to_response(rest_base, links)
