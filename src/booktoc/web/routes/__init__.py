"""Route handlers for Web API."""

from booktoc.web.routes.health import router as health_router
from booktoc.web.routes.toc import router as toc_router
from booktoc.web.routes.types import router as types_router

__all__ = [
    "health_router",
    "toc_router",
    "types_router",
]
