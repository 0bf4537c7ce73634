"""Memory journal use cases - Functional programming style."""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ...domain.entities.cms_item import UploadedAsset
from ...domain.entities.image_orientation import ImageOrientation
from ...domain.value_objects.form_submission import FormSubmission, SubmittedFile
from ...infrastructure.webflow.asset_client import upload_asset
from ...infrastructure.webflow.cms_client import WebflowApiError, WebflowClient, publish_quietly
from ..services.date_parser import parse_date_or_default, to_epoch_ms, utc_now
from ..services.form_transformer import (
    MEMORY_ALIASES,
    build_memory_field_data,
    generate_edit_code,
    to_item_payload,
)
from ..services.image_orientation import detect_orientation, get_card_size_config
from ..services.sequence_service import next_sequential_id

logger = logging.getLogger(__name__)

MEMORY_ID_FIELD = "memory-id"
PROFILE_IMAGE_FIELD = "profile_image"
PHOTO_FIELD = "photo"


def _upload_optional(
    client: WebflowClient,
    site_id: Optional[str],
    field_name: str,
    uploaded: Optional[SubmittedFile]
) -> Optional[UploadedAsset]:
    if not uploaded:
        return None
    if not site_id:
        logger.warning(f"Skipping {field_name}: no site ID configured for asset upload")
        return None
    logger.info(f"Processing {field_name}: {uploaded.filename} ({uploaded.size} bytes, {uploaded.content_type})")
    try:
        return upload_asset(client, site_id, uploaded.filename, uploaded.data)
    except WebflowApiError as e:
        logger.error(f"Failed to upload {field_name}: {e.message}")
        return None


def submit_memory_entry(
    form: FormSubmission,
    client: WebflowClient,
    collection_id: str,
    site_id: Optional[str],
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Create and publish a memory journal entry from a form submission.

    The card size follows the orientation of the memory photo; without a
    photo the card is square.

    Args:
        form: Submitted memory form, with optional profile_image and photo files
        client: Webflow client
        collection_id: Memory journal collection ID
        site_id: Webflow site ID for asset uploads
        now: Submission time, defaults to the current time

    Returns:
        Dict with item_id, memory_id, edit_code and orientation
    """
    current = now or utc_now()
    logger.info(f"Memory submission with fields: {list(form.keys())}")

    memory_id = next_sequential_id(client, collection_id, MEMORY_ID_FIELD)
    edit_code = generate_edit_code()
    memory_date = parse_date_or_default(form.resolve(MEMORY_ALIASES["date"]), now=current)

    photo_file = form.get_file(PHOTO_FIELD)
    orientation = detect_orientation(photo_file.data) if photo_file else ImageOrientation.SQUARE
    card_size = get_card_size_config(orientation)

    profile_image = _upload_optional(client, site_id, PROFILE_IMAGE_FIELD, form.get_file(PROFILE_IMAGE_FIELD))
    photo = _upload_optional(client, site_id, PHOTO_FIELD, photo_file)

    field_data = build_memory_field_data(
        form,
        memory_id=memory_id,
        edit_code=edit_code,
        memory_date=memory_date,
        card_size=card_size,
        profile_image=profile_image,
        photo=photo,
        now_ms=to_epoch_ms(current)
    )

    item = client.create_item(collection_id, to_item_payload(field_data))
    published = publish_quietly(client, collection_id, item.id)

    logger.info(f"Memory submission complete: item {item.id}, memory-id {memory_id}, card {card_size.tag}")
    return {
        "item_id": item.id,
        "memory_id": memory_id,
        "edit_code": edit_code,
        "orientation": orientation.value,
        "published": published,
    }
