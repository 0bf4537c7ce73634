"""Pytest configuration and shared fixtures."""
import struct
from datetime import datetime, timezone
from typing import Callable
from unittest.mock import MagicMock

import pytest

from webflow_forms.domain.entities.cms_item import CmsItem
from webflow_forms.domain.value_objects.form_submission import FormSubmission

CONFIG_ENV_VARS = (
    "WEBFLOW_CMS_SITE_API_TOKEN_WRITE",
    "WEBFLOW_CMS_SITE_API_TOKEN",
    "WEBFLOW_API_HOST",
    "WEBFLOW_SITE_ID",
    "GUESTBOOK_COLLECTION_ID",
    "TIMELINE_COLLECTION_ID",
    "MEMORY_JOURNAL_COLLECTION_ID",
    "GUESTBOOK_REDIRECT_URL",
    "TIMELINE_REDIRECT_URL",
    "MEMORY_REDIRECT_URL",
    "R2_ACCOUNT_ID",
    "R2_ACCESS_KEY_ID",
    "R2_SECRET_ACCESS_KEY",
    "R2_BUCKET_NAME",
    "R2_PUBLIC_URL",
    "R2_PUBLIC_DOMAIN",
    "COSMIC_MOUNT_PATH",
    "HTTP_TIMEOUT_SECONDS",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every configuration variable from the environment."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def webflow_env(clean_env: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Provide a complete Webflow configuration."""
    clean_env.setenv("WEBFLOW_CMS_SITE_API_TOKEN_WRITE", "write-token")
    clean_env.setenv("WEBFLOW_CMS_SITE_API_TOKEN", "read-token")
    clean_env.setenv("WEBFLOW_SITE_ID", "site-123")
    clean_env.setenv("GUESTBOOK_COLLECTION_ID", "guestbook-col")
    clean_env.setenv("TIMELINE_COLLECTION_ID", "timeline-col")
    clean_env.setenv("MEMORY_JOURNAL_COLLECTION_ID", "memory-col")
    return clean_env


@pytest.fixture
def r2_env(clean_env: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Provide a complete R2 configuration."""
    clean_env.setenv("R2_ACCOUNT_ID", "acct")
    clean_env.setenv("R2_ACCESS_KEY_ID", "key-id")
    clean_env.setenv("R2_SECRET_ACCESS_KEY", "secret")
    clean_env.setenv("R2_BUCKET_NAME", "bucket")
    clean_env.setenv("R2_PUBLIC_URL", "https://cdn.example.com")
    return clean_env


@pytest.fixture
def fixed_now() -> datetime:
    """Provide a fixed submission time."""
    return datetime(2024, 6, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)


@pytest.fixture
def make_jpeg() -> Callable[[int, int], bytes]:
    """Build a minimal JPEG header with an SOF0 segment of the given size."""
    def _make(width: int, height: int) -> bytes:
        app0 = b"\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        sof0 = b"\xff\xc0\x00\x11\x08" + struct.pack(">HH", height, width) + b"\x03\x01\x22\x00"
        return b"\xff\xd8" + app0 + sof0 + b"\x00" * 16
    return _make


@pytest.fixture
def make_png() -> Callable[[int, int], bytes]:
    """Build a minimal PNG signature and IHDR chunk of the given size."""
    def _make(width: int, height: int) -> bytes:
        ihdr = b"\x00\x00\x00\rIHDR" + struct.pack(">II", width, height) + b"\x08\x02\x00\x00\x00"
        return b"\x89PNG\r\n\x1a\n" + ihdr + b"\x00\x00\x00\x00"
    return _make


@pytest.fixture
def mock_client() -> MagicMock:
    """Webflow client double with an empty collection."""
    client = MagicMock()
    client.timeout = 30
    client.list_all_items.return_value = []
    client.create_item.return_value = CmsItem(id="item-1")
    client.update_item.return_value = CmsItem(id="item-1")
    return client


@pytest.fixture
def guestbook_form() -> FormSubmission:
    """Provide a sample guestbook submission."""
    return FormSubmission.from_dict({
        "full_name": "Ada Lovelace",
        "email": "ada@example.com",
        "guestbook_location": "London",
        "guestbook_first_met": "At the salon",
        "Select-Field": "Friend",
        "guestbook_message": "Lovely memories",
        "card_color": "Ocean Teal",
    })
