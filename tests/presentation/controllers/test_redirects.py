"""Unit tests for form redirect helpers."""
import pytest

from webflow_forms.presentation.controllers.redirects import build_redirect_url, resolve_redirect_base


@pytest.mark.unit
class TestResolveRedirectBase:
    """Tests for resolve_redirect_base."""

    def test_configured_url_wins(self, clean_env):
        clean_env.setenv("TIMELINE_REDIRECT_URL", "https://site.example/timeline")
        assert resolve_redirect_base("timeline", "https://other.example/page", "/api/timeline/submit") == \
            "https://site.example/timeline"

    def test_referer_without_query(self, clean_env):
        assert resolve_redirect_base("guestbook", "https://site.example/guestbook?success=true#form", "/x") == \
            "https://site.example/guestbook"

    def test_fallback_path(self, clean_env):
        assert resolve_redirect_base("memory", None, "/api/memory/submit") == "/api/memory/submit"


@pytest.mark.unit
class TestBuildRedirectUrl:
    """Tests for build_redirect_url."""

    def test_appends_query(self):
        assert build_redirect_url("https://site.example/g", {"success": "true", "id": 5}) == \
            "https://site.example/g?success=true&id=5"

    def test_encodes_like_uri_component(self):
        url = build_redirect_url("/g", {"error": "true", "message": "Missing collection ID & more"})
        assert url == "/g?error=true&message=Missing%20collection%20ID%20%26%20more"

    def test_existing_query(self):
        assert build_redirect_url("https://site.example/g?lang=en", {"t": 1}) == "https://site.example/g?lang=en&t=1"
