"""Application configuration loader.

Loads configuration from data/config/booktoc.yaml, falling back to
built-in defaults when the file is absent. Sections missing from the file
take their default values.

Usage:
    from booktoc.config.app_config import load_app_config

    config = load_app_config()
    config.api.namespace  # "books/v2"
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root), overridable by env
CONFIG_FILE = Path("data/config/booktoc.yaml")
CONFIG_ENV = "BOOKTOC_CONFIG"

EDIT_POSTS = "edit_posts"


@dataclass
class ApiConfig:
    """Where the API is served from."""

    base_url: str = "http://localhost:8000"
    namespace: str = "books/v2"


@dataclass
class SiteConfig:
    """Site-wide visibility settings."""

    blog_public: bool = True
    filter_parts: bool = False


@dataclass
class TokenGrant:
    """Identity and capabilities behind one bearer token."""

    user_id: int
    capabilities: list[str] = field(default_factory=list)


@dataclass
class AuthConfig:
    """Bearer tokens known to the API."""

    tokens: dict[str, TokenGrant] = field(default_factory=dict)


@dataclass
class AppConfig:
    """Application-wide configuration."""

    api: ApiConfig = field(default_factory=ApiConfig)
    site: SiteConfig = field(default_factory=SiteConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    paths: dict[str, str] = field(default_factory=dict)

    @property
    def db_path(self) -> Path:
        return Path(self.paths.get("db_path", "db/booktoc.db"))


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "api": {
            "base_url": "http://localhost:8000",
            "namespace": "books/v2",
        },
        "site": {
            "blog_public": True,
            "filter_parts": False,
        },
        "auth": {
            "tokens": {},
        },
        "paths": {
            "db_path": "db/booktoc.db",
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()

    api_data = {**defaults["api"], **(data.get("api") or {})}
    api = ApiConfig(
        base_url=str(api_data["base_url"]),
        namespace=str(api_data["namespace"]).strip("/"),
    )

    site_data = {**defaults["site"], **(data.get("site") or {})}
    site = SiteConfig(
        blog_public=bool(site_data["blog_public"]),
        filter_parts=bool(site_data["filter_parts"]),
    )

    tokens = {}
    for token, grant in ((data.get("auth") or {}).get("tokens") or {}).items():
        tokens[str(token)] = TokenGrant(
            user_id=int(grant.get("user_id", 0)),
            capabilities=list(grant.get("capabilities", [])),
        )

    paths = {**defaults["paths"], **(data.get("paths") or {})}

    return AppConfig(api=api, site=site, auth=AuthConfig(tokens=tokens), paths=paths)


def _config_file() -> Path:
    return Path(os.environ.get(CONFIG_ENV, str(CONFIG_FILE)))


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any]
    config_file = _config_file()

    if config_file.exists():
        logger.debug("loading_app_config", source=str(config_file))
        data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
