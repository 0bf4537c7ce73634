"""Guestbook controller - Handles guestbook submissions and counts."""
import logging
from typing import Any, Dict, Optional

from ...application.services.date_parser import to_epoch_ms, to_iso, utc_now
from ...application.use_cases.guestbook_use_cases import count_guestbook_entries, submit_guestbook_entry
from ...config.config import get_guestbook_collection_id, get_webflow_read_token
from ...domain.value_objects.form_submission import FormSubmission
from ...infrastructure.webflow.cms_client import get_webflow_client
from .redirects import build_redirect_url, resolve_redirect_base

logger = logging.getLogger(__name__)

FORM_NAME = "guestbook"


def handle_guestbook_status() -> Dict[str, Any]:
    """Liveness message for GET on the submit endpoint."""
    return {
        "message": "Guestbook API is working! Use POST to submit data.",
        "timestamp": to_iso(utc_now()),
    }


def handle_guestbook_submit(form: FormSubmission, referer: Optional[str], path: str) -> str:
    """
    Handle a guestbook form post.

    Failures never surface as exceptions: the visitor is redirected back with
    ``error=true`` and the message instead.

    Returns:
        Redirect URL
    """
    base = resolve_redirect_base(FORM_NAME, referer, path)
    now = utc_now()
    try:
        client = get_webflow_client()
        result = submit_guestbook_entry(form, client, get_guestbook_collection_id(), now=now)
    except Exception as e:
        logger.error(f"Guestbook form submission error: {e}")
        return build_redirect_url(base, {
            "error": "true",
            "message": str(e) or "Unknown error",
            "t": to_epoch_ms(utc_now()),
        })

    return build_redirect_url(base, {
        "success": "true",
        "id": result["guestbook_id"],
        "t": to_epoch_ms(now),
    })


def handle_guestbook_count() -> Dict[str, Any]:
    """
    Count published guestbook entries.

    Raises:
        RuntimeError: If configuration is missing or the Webflow call fails
    """
    client = get_webflow_client(get_webflow_read_token())
    count = count_guestbook_entries(client, get_guestbook_collection_id())
    return {"success": True, "count": count, "timestamp": to_iso(utc_now())}


def handle_guestbook_count_text() -> str:
    """Published entry count as plain text, "0" on any failure."""
    try:
        return str(handle_guestbook_count()["count"])
    except Exception as e:
        logger.error(f"Error fetching guestbook count: {e}")
        return "0"
