"""Configuration module for webflow-forms."""
import os
from typing import Dict, Optional

DEFAULT_WEBFLOW_API_HOST = "https://api.webflow.com/v2"


def _get_required_env(name: str) -> str:
    """Get required environment variable or raise error."""
    value = os.getenv(name)
    if value is None or value == "":
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _get_optional_env(name: str) -> Optional[str]:
    """Get optional environment variable, treating empty strings as unset."""
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def get_webflow_token() -> str:
    """Get Webflow API token, preferring the write token over the read token."""
    token = _get_optional_env("WEBFLOW_CMS_SITE_API_TOKEN_WRITE") or _get_optional_env("WEBFLOW_CMS_SITE_API_TOKEN")
    if not token:
        raise RuntimeError("Missing API token")
    return token


def get_webflow_read_token() -> str:
    """Get Webflow API token for read-only endpoints, preferring the read token."""
    token = _get_optional_env("WEBFLOW_CMS_SITE_API_TOKEN") or _get_optional_env("WEBFLOW_CMS_SITE_API_TOKEN_WRITE")
    if not token:
        raise RuntimeError("Missing API token")
    return token


def get_webflow_api_host() -> str:
    """Get Webflow API base URL, with default."""
    host = _get_optional_env("WEBFLOW_API_HOST") or DEFAULT_WEBFLOW_API_HOST
    return host.rstrip("/")


def get_webflow_site_id() -> str:
    """Get Webflow site ID used by the Assets API."""
    return _get_required_env("WEBFLOW_SITE_ID")


def get_guestbook_collection_id() -> str:
    """Get guestbook CMS collection ID."""
    return _get_required_env("GUESTBOOK_COLLECTION_ID")


def get_timeline_collection_id() -> str:
    """Get timeline CMS collection ID."""
    return _get_required_env("TIMELINE_COLLECTION_ID")


def get_memory_collection_id() -> str:
    """Get memory journal CMS collection ID."""
    return _get_required_env("MEMORY_JOURNAL_COLLECTION_ID")


def get_redirect_url(form_name: str) -> Optional[str]:
    """
    Get the page a form submission redirects back to.

    Reads ``<FORM>_REDIRECT_URL`` (e.g. GUESTBOOK_REDIRECT_URL). Returns None
    when unset so callers can fall back to the referring page.
    """
    return _get_optional_env(f"{form_name.upper()}_REDIRECT_URL")


def get_r2_config() -> Dict[str, str]:
    """Get Cloudflare R2 configuration from environment variables."""
    account_id = _get_required_env("R2_ACCOUNT_ID")
    return {
        "R2_ACCOUNT_ID": account_id,
        "R2_ACCESS_KEY_ID": _get_required_env("R2_ACCESS_KEY_ID"),
        "R2_SECRET_ACCESS_KEY": _get_required_env("R2_SECRET_ACCESS_KEY"),
        "R2_BUCKET_NAME": _get_required_env("R2_BUCKET_NAME"),
        "R2_PUBLIC_URL": get_r2_public_url(account_id),
    }


def get_r2_public_url(account_id: Optional[str] = None) -> str:
    """Get public base URL of the R2 bucket, falling back to the r2.dev domain."""
    public_url = _get_optional_env("R2_PUBLIC_URL") or _get_optional_env("R2_PUBLIC_DOMAIN")
    if public_url:
        return public_url.rstrip("/")
    account = account_id or _get_optional_env("R2_ACCOUNT_ID") or "pub"
    return f"https://{account}.r2.dev"


def get_mount_path() -> str:
    """Get the path prefix the app is mounted under (no trailing slash)."""
    mount_path = _get_optional_env("COSMIC_MOUNT_PATH") or ""
    return mount_path.rstrip("/")


def get_http_timeout() -> float:
    """Get timeout for outbound HTTP calls in seconds, with safe default."""
    raw = os.getenv("HTTP_TIMEOUT_SECONDS", "30")
    try:
        timeout = float(raw)
    except ValueError:
        raise RuntimeError(f"Invalid HTTP_TIMEOUT_SECONDS: {raw}")
    if timeout <= 0:
        raise RuntimeError(f"Invalid HTTP_TIMEOUT_SECONDS: {raw}")
    return timeout


def describe_config() -> Dict[str, bool]:
    """Report which settings are present, without exposing their values."""
    return {
        "hasWriteToken": _get_optional_env("WEBFLOW_CMS_SITE_API_TOKEN_WRITE") is not None,
        "hasReadToken": _get_optional_env("WEBFLOW_CMS_SITE_API_TOKEN") is not None,
        "hasSiteId": _get_optional_env("WEBFLOW_SITE_ID") is not None,
        "hasGuestbookCollectionId": _get_optional_env("GUESTBOOK_COLLECTION_ID") is not None,
        "hasTimelineCollectionId": _get_optional_env("TIMELINE_COLLECTION_ID") is not None,
        "hasMemoryCollectionId": _get_optional_env("MEMORY_JOURNAL_COLLECTION_ID") is not None,
        "hasR2": _get_optional_env("R2_ACCESS_KEY_ID") is not None,
    }
