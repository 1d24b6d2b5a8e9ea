"""Caller resolution and read permission for the TOC.

The caller is identified by an optional bearer token looked up in the
configured token table. Reading is allowed when the caller can edit posts
or the site is public; only editors see unpublished content.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from booktoc.config.app_config import EDIT_POSTS, AppConfig

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Caller:
    """Identity of the current request."""

    user_id: int | None = None
    capabilities: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def can(self, capability: str) -> bool:
        return capability in self.capabilities


ANONYMOUS = Caller()


@dataclass(frozen=True)
class TocAccess:
    """Outcome of the read permission check."""

    caller: Caller
    has_elevated_access: bool


def get_config(request: Request) -> AppConfig:
    """Config of the running app."""
    return request.app.state.config


def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    config: AppConfig = Depends(get_config),
) -> Caller:
    """Resolve the caller from the bearer token, if any.

    Raises:
        HTTPException: 401 if a token is given but unknown
    """
    if credentials is None:
        return ANONYMOUS

    grant = config.auth.tokens.get(credentials.credentials)
    if grant is None:
        logger.info("auth.invalid_token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Caller(user_id=grant.user_id, capabilities=frozenset(grant.capabilities))


def check_read_permission(caller: Caller, blog_public: bool) -> TocAccess:
    """Decide whether ``caller`` may read the TOC.

    Raises:
        HTTPException: 401 for anonymous callers and 403 for authenticated
            ones when the site is private and the caller cannot edit posts
    """
    can_edit = caller.can(EDIT_POSTS)

    if not (can_edit or blog_public):
        code = (
            status.HTTP_403_FORBIDDEN
            if caller.is_authenticated
            else status.HTTP_401_UNAUTHORIZED
        )
        logger.info("toc.forbidden", user_id=caller.user_id, status_code=code)
        raise HTTPException(
            status_code=code,
            detail="Sorry, you are not allowed to view the table of contents.",
        )

    # A public site only lets the request through; drafts still need edit_posts
    return TocAccess(caller=caller, has_elevated_access=can_edit)


def require_toc_access(
    caller: Caller = Depends(get_caller),
    config: AppConfig = Depends(get_config),
) -> TocAccess:
    """FastAPI dependency wrapping check_read_permission."""
    return check_read_permission(caller, config.site.blog_public)
