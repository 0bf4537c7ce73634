"""Guestbook use cases - Functional programming style."""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ...domain.value_objects.form_submission import FormSubmission
from ...infrastructure.webflow.cms_client import WebflowClient, publish_quietly
from ..services.date_parser import to_epoch_ms, to_iso, utc_now
from ..services.form_transformer import (
    GUESTBOOK_ALIASES,
    build_guestbook_field_data,
    generate_edit_code,
    to_item_payload,
)
from ..services.sequence_service import next_sequential_id

logger = logging.getLogger(__name__)

GUESTBOOK_ID_FIELD = "guestbook-id"


def submit_guestbook_entry(
    form: FormSubmission,
    client: WebflowClient,
    default_collection_id: str,
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Create and publish a guestbook entry from a form submission.

    The collection ID submitted with the form wins over the configured one.
    Publishing failures are logged and do not fail the submission.

    Args:
        form: Submitted guestbook form
        client: Webflow client
        default_collection_id: Configured guestbook collection
        now: Submission time, defaults to the current time

    Returns:
        Dict with item_id, guestbook_id, edit_code and published flag
    """
    current = now or utc_now()
    collection_id = form.resolve(GUESTBOOK_ALIASES["collection_id"]) or default_collection_id
    if not collection_id:
        raise ValueError("Missing collection ID")

    logger.info(f"Guestbook submission for collection {collection_id} with fields: {list(form.keys())}")

    guestbook_id = next_sequential_id(client, collection_id, GUESTBOOK_ID_FIELD, live=True)
    edit_code = generate_edit_code()
    field_data = build_guestbook_field_data(
        form,
        guestbook_id=guestbook_id,
        edit_code=edit_code,
        now_iso=to_iso(current),
        now_ms=to_epoch_ms(current)
    )

    item = client.create_item(collection_id, to_item_payload(field_data))
    published = publish_quietly(client, collection_id, item.id)

    logger.info(f"Guestbook submission complete: item {item.id}, guestbook-id {guestbook_id}")
    return {
        "item_id": item.id,
        "guestbook_id": guestbook_id,
        "edit_code": edit_code,
        "published": published,
    }


def count_guestbook_entries(client: WebflowClient, collection_id: str) -> int:
    """Number of published guestbook entries."""
    return client.count_live_items(collection_id)
