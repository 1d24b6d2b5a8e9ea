"""Table of contents endpoints.

Mounted under ``/{namespace}`` by the app factory.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

import structlog
from fastapi import APIRouter, Depends, Request

from booktoc.config.app_config import AppConfig
from booktoc.core.links import LinkBuilder
from booktoc.core.projector import project
from booktoc.web.auth import TocAccess, get_config, require_toc_access
from booktoc.web.schemas import RouteDescriptionResponse, TocResponse, get_toc_schema

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["toc"])

# Path of the TOC resource under the namespace
TOC_REST_BASE = "toc"

StructureFetcher = Callable[[], Mapping[str, Any]]


def get_structure_fetcher(request: Request) -> StructureFetcher:
    """Structure source configured on the app."""
    return request.app.state.fetch_structure


def get_link_builder(config: AppConfig = Depends(get_config)) -> LinkBuilder:
    return LinkBuilder(base_url=config.api.base_url, namespace=config.api.namespace)


@router.get(f"/{TOC_REST_BASE}", response_model=TocResponse)
async def get_toc(
    access: TocAccess = Depends(require_toc_access),
    fetch_structure: StructureFetcher = Depends(get_structure_fetcher),
    links: LinkBuilder = Depends(get_link_builder),
    config: AppConfig = Depends(get_config),
) -> TocResponse:
    """Get the book's table of contents."""
    raw_structure = fetch_structure()

    view = project(
        raw_structure,
        access.has_elevated_access,
        links,
        filter_parts=config.site.filter_parts,
        self_path=TOC_REST_BASE,
    )

    logger.info(
        "toc_get",
        user_id=access.caller.user_id,
        elevated=access.has_elevated_access,
        parts=len(view.parts),
    )

    return TocResponse.model_validate(view.to_dict())


@router.options(f"/{TOC_REST_BASE}", response_model=RouteDescriptionResponse)
async def describe_toc(config: AppConfig = Depends(get_config)) -> RouteDescriptionResponse:
    """Describe the TOC route and its response schema."""
    return RouteDescriptionResponse(
        namespace=config.api.namespace,
        methods=["GET"],
        schema=get_toc_schema(),
    )


@router.get(f"/{TOC_REST_BASE}/schema")
async def get_schema() -> dict[str, Any]:
    """JSON Schema of the TOC response."""
    return get_toc_schema()
