"""Configuration package for booktoc."""

from booktoc.config.app_config import (
    EDIT_POSTS,
    ApiConfig,
    AppConfig,
    AuthConfig,
    SiteConfig,
    TokenGrant,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "EDIT_POSTS",
    "ApiConfig",
    "AppConfig",
    "AuthConfig",
    "SiteConfig",
    "TokenGrant",
    "clear_config_cache",
    "load_app_config",
]
