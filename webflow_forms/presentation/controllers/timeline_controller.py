"""Timeline controller - Handles timeline submissions, image attachment and diagnostics."""
import logging
from typing import Any, Dict, Optional

from ...application.services.date_parser import to_iso, utc_now
from ...application.use_cases.timeline_use_cases import (
    attach_images,
    create_test_event,
    query_event_numbers,
    submit_timeline_entry,
)
from ...config.config import describe_config, get_timeline_collection_id, get_webflow_site_id
from ...domain.value_objects.form_submission import FormSubmission
from ...infrastructure.webflow.cms_client import get_webflow_client
from ..dtos.image_models import AttachImagesRequest
from .redirects import build_redirect_url, resolve_redirect_base

logger = logging.getLogger(__name__)

FORM_NAME = "timeline"
TEST_MODES = ("info", "query", "create")


def _config_flags() -> Dict[str, bool]:
    flags = describe_config()
    return {
        "hasWriteToken": flags["hasWriteToken"],
        "hasReadToken": flags["hasReadToken"],
        "hasCollectionId": flags["hasTimelineCollectionId"],
        "hasSiteId": flags["hasSiteId"],
    }


def handle_timeline_status() -> Dict[str, Any]:
    """Configuration probe for GET on the submit endpoint."""
    return {
        "message": "Timeline API is working! Use POST to submit data with file uploads.",
        "timestamp": to_iso(utc_now()),
        "config": _config_flags(),
    }


def handle_timeline_submit(form: FormSubmission, referer: Optional[str], path: str) -> str:
    """
    Handle a timeline form post, redirecting with the event number or the error.

    Returns:
        Redirect URL
    """
    base = resolve_redirect_base(FORM_NAME, referer, path)
    try:
        client = get_webflow_client()
        site_id = get_webflow_site_id()
        collection_id = get_timeline_collection_id()
        result = submit_timeline_entry(form, client, collection_id, site_id)
    except Exception as e:
        logger.error(f"Timeline form submission error: {e}")
        return build_redirect_url(base, {"error": "true", "message": str(e) or "Unknown error"})

    return build_redirect_url(base, {"success": "true", "eventNumber": result["event_number"]})


def handle_attach_images(payload: AttachImagesRequest) -> Dict[str, Any]:
    """
    Attach staged images to a timeline item.

    Raises:
        ValueError: If itemId is missing
    """
    images = None
    if payload.images:
        images = {key: image.model_dump(by_alias=True) for key, image in payload.images.items() if image is not None}
    logger.info(f"Attaching images {list((images or {}).keys())} to item {payload.item_id}")

    if not payload.item_id:
        raise ValueError("Missing itemId")

    client = get_webflow_client()
    return attach_images(client, get_timeline_collection_id(), payload.item_id, images)


def handle_timeline_test(mode: str) -> Dict[str, Any]:
    """
    Run a timeline diagnostic.

    Modes: ``info`` reports configuration, ``query`` reports event numbers,
    ``create`` creates and publishes a test item.

    Raises:
        ValueError: If the mode is unknown
    """
    if mode not in TEST_MODES:
        raise ValueError("Invalid mode")

    if mode == "info":
        config = _config_flags()
        config["hasR2"] = describe_config()["hasR2"]
        return {
            "message": "Timeline Test API",
            "timestamp": to_iso(utc_now()),
            "config": config,
            "modes": {
                "info": "GET ?mode=info (current)",
                "create": "GET ?mode=create (create test item)",
                "query": "GET ?mode=query (query max timeline_id)",
            },
        }

    client = get_webflow_client()
    collection_id = get_timeline_collection_id()
    if mode == "query":
        return query_event_numbers(client, collection_id)
    return create_test_event(client, collection_id)
