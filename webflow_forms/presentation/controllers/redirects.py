"""Redirect helpers for HTML form submissions."""
from typing import Any, Mapping, Optional
from urllib.parse import quote, urlencode

from ...config.config import get_redirect_url


def resolve_redirect_base(form_name: str, referer: Optional[str], fallback_path: str) -> str:
    """
    Pick the page a form submission returns to.

    Order: the configured ``<FORM>_REDIRECT_URL``, then the referring page
    without its query string, then the submission path itself.
    """
    configured = get_redirect_url(form_name)
    if configured:
        return configured
    if referer:
        return referer.split("#", 1)[0].split("?", 1)[0]
    return fallback_path


def build_redirect_url(base: str, params: Mapping[str, Any]) -> str:
    """Append query parameters to a URL, percent-encoding values like encodeURIComponent."""
    query = urlencode({k: str(v) for k, v in params.items()}, quote_via=quote)
    separator = "&" if "?" in base else "?"
    return f"{base}{separator}{query}"
