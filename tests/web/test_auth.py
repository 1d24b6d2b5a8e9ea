"""Tests for caller resolution and the read permission check."""

import pytest
from fastapi import HTTPException

from booktoc.web.auth import ANONYMOUS, Caller, check_read_permission

EDITOR = Caller(user_id=1, capabilities=frozenset({"edit_posts"}))
READER = Caller(user_id=2, capabilities=frozenset({"read"}))


class TestCaller:
    def test_anonymous(self):
        assert ANONYMOUS.is_authenticated is False
        assert ANONYMOUS.can("edit_posts") is False

    def test_capability(self):
        assert EDITOR.can("edit_posts") is True
        assert READER.can("edit_posts") is False


class TestCheckReadPermission:
    """Tests for check_read_permission."""

    def test_editor_private_site(self):
        access = check_read_permission(EDITOR, blog_public=False)

        assert access.has_elevated_access is True

    def test_editor_public_site(self):
        assert check_read_permission(EDITOR, blog_public=True).has_elevated_access is True

    def test_anonymous_public_site_not_elevated(self):
        """A public site lets anyone read, without seeing drafts."""
        access = check_read_permission(ANONYMOUS, blog_public=True)

        assert access.has_elevated_access is False
        assert access.caller is ANONYMOUS

    def test_anonymous_private_site(self):
        with pytest.raises(HTTPException) as exc_info:
            check_read_permission(ANONYMOUS, blog_public=False)

        assert exc_info.value.status_code == 401

    def test_reader_private_site(self):
        with pytest.raises(HTTPException) as exc_info:
            check_read_permission(READER, blog_public=False)

        assert exc_info.value.status_code == 403
