"""Tests for app configuration.

Tests the configuration loading, defaults and fallbacks.
"""

import pytest

from booktoc.config.app_config import (
    CONFIG_ENV,
    AppConfig,
    clear_config_cache,
    load_app_config,
)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point the loader at a temporary config file."""
    path = tmp_path / "booktoc.yaml"
    monkeypatch.setenv(CONFIG_ENV, str(path))
    clear_config_cache()
    yield path
    clear_config_cache()


class TestLoadAppConfig:
    """Tests for load_app_config function."""

    def test_defaults_without_file(self, config_file):
        """Missing file falls back to defaults."""
        config = load_app_config()

        assert isinstance(config, AppConfig)
        assert config.api.namespace == "books/v2"
        assert config.site.blog_public is True
        assert config.site.filter_parts is False
        assert config.auth.tokens == {}
        assert str(config.db_path) == "db/booktoc.db"

    def test_loads_yaml(self, config_file):
        config_file.write_text(
            """
api:
  base_url: "https://books.example.org"
  namespace: "/press/v1/"
site:
  blog_public: false
  filter_parts: true
auth:
  tokens:
    secret:
      user_id: 7
      capabilities: [edit_posts]
paths:
  db_path: "/tmp/other.db"
""",
            encoding="utf-8",
        )

        config = load_app_config()

        assert config.api.base_url == "https://books.example.org"
        assert config.api.namespace == "press/v1"
        assert config.site.blog_public is False
        assert config.site.filter_parts is True
        assert config.auth.tokens["secret"].user_id == 7
        assert config.auth.tokens["secret"].capabilities == ["edit_posts"]
        assert str(config.db_path) == "/tmp/other.db"

    def test_partial_file_keeps_defaults(self, config_file):
        """Sections missing from the file keep their defaults."""
        config_file.write_text("site:\n  blog_public: false\n", encoding="utf-8")

        config = load_app_config()

        assert config.site.blog_public is False
        assert config.site.filter_parts is False
        assert config.api.namespace == "books/v2"

    def test_empty_file(self, config_file):
        config_file.write_text("", encoding="utf-8")

        assert load_app_config().api.namespace == "books/v2"

    def test_cached(self, config_file):
        """Second call returns the cached object."""
        assert load_app_config() is load_app_config()

    def test_force_reload(self, config_file):
        first = load_app_config()
        config_file.write_text("api:\n  namespace: other/v1\n", encoding="utf-8")

        assert load_app_config().api.namespace == first.api.namespace
        assert load_app_config(force_reload=True).api.namespace == "other/v1"
