"""Timeline use cases - Functional programming style."""
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from ...domain.value_objects.form_submission import FormSubmission
from ...infrastructure.webflow.asset_client import upload_asset
from ...infrastructure.webflow.cms_client import WebflowApiError, WebflowClient, publish_quietly
from ..services.date_parser import parse_date_or_default, to_epoch_ms, to_iso, utc_now
from ..services.form_transformer import (
    TIMELINE_ALIASES,
    build_timeline_field_data,
    generate_edit_code,
    to_item_payload,
)
from ..services.sequence_service import max_field_value, next_sequential_id

logger = logging.getLogger(__name__)

EVENT_NUMBER_FIELD = "event-number"
TIMELINE_FILE_FIELDS = ("fileToUpload1", "fileToUpload2")
TIMELINE_PHOTO_FIELDS = ("photo-1", "photo-2")


def _staged_photo(form: FormSubmission, index: int) -> Optional[Dict[str, Any]]:
    """Image field from the hidden inputs written by the upload widget (photoN_url, photoN_alt)."""
    url = form.get(f"photo{index}_url")
    if not url:
        return None
    return {"url": url, "alt": form.get(f"photo{index}_alt") or f"Timeline photo {index}"}


def collect_timeline_photos(
    form: FormSubmission,
    client: WebflowClient,
    site_id: Optional[str]
) -> List[Optional[Dict[str, Any]]]:
    """
    Resolve photo-1 and photo-2 for a timeline submission.

    A file part is uploaded to Webflow Assets; otherwise the image staged in
    object storage by the browser is used. A failed upload leaves the slot
    empty and is logged.
    """
    photos: List[Optional[Dict[str, Any]]] = [None, None]
    for index, field_name in enumerate(TIMELINE_FILE_FIELDS, start=1):
        uploaded = form.get_file(field_name)
        if uploaded and site_id:
            logger.info(f"Processing {field_name}: {uploaded.filename} ({uploaded.size} bytes, {uploaded.content_type})")
            try:
                asset = upload_asset(client, site_id, uploaded.filename, uploaded.data)
                photos[index - 1] = asset.to_image_field(f"Timeline photo {index}")
                continue
            except WebflowApiError as e:
                logger.error(f"Failed to upload {field_name}: {e.message}")
        elif uploaded:
            logger.warning(f"Skipping {field_name}: no site ID configured for asset upload")
        photos[index - 1] = _staged_photo(form, index)
    return photos


def submit_timeline_entry(
    form: FormSubmission,
    client: WebflowClient,
    collection_id: str,
    site_id: Optional[str],
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Create and publish a timeline event from a form submission.

    Args:
        form: Submitted timeline form, with optional file parts
        client: Webflow client
        collection_id: Timeline collection ID
        site_id: Webflow site ID for asset uploads
        now: Submission time, defaults to the current time

    Returns:
        Dict with item_id, event_number, edit_code and photos attached
    """
    current = now or utc_now()
    logger.info(f"Timeline submission with fields: {list(form.keys())}")

    event_number = next_sequential_id(client, collection_id, EVENT_NUMBER_FIELD)
    edit_code = generate_edit_code()
    timeline_date = parse_date_or_default(form.resolve(TIMELINE_ALIASES["date"]), now=current)
    photos = collect_timeline_photos(form, client, site_id)

    field_data = build_timeline_field_data(
        form,
        event_number=event_number,
        edit_code=edit_code,
        timeline_date=timeline_date,
        now_iso=to_iso(current),
        photos=photos,
        now_ms=to_epoch_ms(current)
    )

    item = client.create_item(collection_id, to_item_payload(field_data))
    published = publish_quietly(client, collection_id, item.id)

    attached = [slug for slug, photo in zip(TIMELINE_PHOTO_FIELDS, photos) if photo]
    logger.info(f"Timeline submission complete: item {item.id}, event-number {event_number}, photos {attached}")
    return {
        "item_id": item.id,
        "event_number": event_number,
        "edit_code": edit_code,
        "photos": attached,
        "published": published,
    }


def build_photo_field_data(images: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Map {"photo1": {url, alt}, "photo2": {...}} to photo-1 / photo-2 image fields - pure function."""
    field_data: Dict[str, Any] = {}
    for index, field_slug in enumerate(TIMELINE_PHOTO_FIELDS, start=1):
        image = (images or {}).get(f"photo{index}")
        if image and image.get("url"):
            field_data[field_slug] = {"url": image["url"], "alt": image.get("alt") or None}
    return field_data


def attach_images(
    client: WebflowClient,
    collection_id: str,
    item_id: Optional[str],
    images: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    """
    Attach staged images to an existing timeline item and republish it.

    Raises:
        ValueError: If item_id is missing
        WebflowApiError: If the update fails
    """
    if not item_id:
        raise ValueError("Missing itemId")

    if not images:
        logger.info(f"No images to attach to item {item_id}")
        return {"success": True, "message": "No images to attach"}

    field_data = build_photo_field_data(images)
    if not field_data:
        logger.warning(f"No valid photo fields for item {item_id}")
        return {"success": True, "message": "No valid photo fields"}

    item = client.update_item(collection_id, item_id, {"fieldData": field_data})
    publish_quietly(client, collection_id, item_id)

    logger.info(f"Attached {list(field_data.keys())} to item {item.id or item_id}")
    return {"success": True, "itemId": item.id or item_id, "imagesAttached": list(field_data.keys())}


def query_event_numbers(client: WebflowClient, collection_id: str) -> Dict[str, Any]:
    """Report the current maximum event number and every item's number."""
    items = client.list_all_items(collection_id)
    max_id = max_field_value(items, EVENT_NUMBER_FIELD)
    next_id = max_id + 1
    return {
        "success": True,
        "totalItems": len(items),
        "currentMaxTimelineId": max_id,
        "nextTimelineId": next_id,
        "nextIsEven": next_id % 2 == 0,
        "items": [
            {
                "id": item.id,
                "name": item.field_data.get("name"),
                "eventNumber": item.field_data.get(EVENT_NUMBER_FIELD),
                "isDraft": item.is_draft,
            }
            for item in items
        ],
    }


def create_test_event(client: WebflowClient, collection_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Create and publish a diagnostic timeline item."""
    current = now or utc_now()
    now_ms = to_epoch_ms(current)
    event_number = next_sequential_id(client, collection_id, EVENT_NUMBER_FIELD)
    edit_code = generate_edit_code()
    timeline_name = f"API Test Event {event_number}"
    slug = f"api-test-{event_number}-{now_ms}"

    form = FormSubmission.from_dict({
        "timeline_name_line_1": timeline_name,
        "timeline_detail": "Test submission via API endpoint",
        "timeline_location": "API Test Location",
        "full_name": "API Tester",
        "email": "api@test.com",
    })
    field_data = build_timeline_field_data(
        form,
        event_number=event_number,
        edit_code=edit_code,
        timeline_date=parse_date_or_default("December 2024", now=current),
        now_iso=to_iso(current),
        now_ms=now_ms
    )
    field_data["slug"] = slug

    item = client.create_item(collection_id, to_item_payload(field_data))
    publish_quietly(client, collection_id, item.id)

    return {
        "success": True,
        "message": "Test item created and published",
        "item": {
            "id": item.id,
            "name": timeline_name,
            "slug": slug,
            "eventNumber": event_number,
            "isEven": event_number % 2 == 0,
            "editCode": edit_code,
            "approved": True,
            "active": True,
            "origin": "webflow",
        },
    }
