"""Memory journal controller - Handles memory submissions."""
import logging
from typing import Any, Dict, Optional

from ...application.services.date_parser import to_iso, utc_now
from ...application.use_cases.memory_use_cases import submit_memory_entry
from ...config.config import describe_config, get_memory_collection_id, get_webflow_site_id
from ...domain.value_objects.form_submission import FormSubmission
from ...infrastructure.webflow.cms_client import get_webflow_client
from .redirects import build_redirect_url, resolve_redirect_base

logger = logging.getLogger(__name__)

FORM_NAME = "memory"


def handle_memory_status() -> Dict[str, Any]:
    """Configuration probe for GET on the submit endpoint."""
    flags = describe_config()
    return {
        "message": "Memory Journal API is working! Use POST to submit data with file uploads.",
        "timestamp": to_iso(utc_now()),
        "config": {
            "hasWriteToken": flags["hasWriteToken"],
            "hasReadToken": flags["hasReadToken"],
            "hasCollectionId": flags["hasMemoryCollectionId"],
            "hasSiteId": flags["hasSiteId"],
        },
    }


def handle_memory_submit(form: FormSubmission, referer: Optional[str], path: str) -> str:
    """
    Handle a memory journal form post, redirecting with the memory ID or the error.

    Returns:
        Redirect URL
    """
    base = resolve_redirect_base(FORM_NAME, referer, path)
    try:
        client = get_webflow_client()
        site_id = get_webflow_site_id()
        collection_id = get_memory_collection_id()
        result = submit_memory_entry(form, client, collection_id, site_id)
    except Exception as e:
        logger.error(f"Memory form submission error: {e}")
        return build_redirect_url(base, {"error": "true", "message": str(e) or "Unknown error"})

    return build_redirect_url(base, {"success": "true", "memoryId": result["memory_id"]})
