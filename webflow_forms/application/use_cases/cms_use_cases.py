"""CMS pass-through use cases - Generic item operations on any collection."""
import logging
from typing import Any, Dict, List, Optional

from ...infrastructure.webflow.cms_client import MAX_PAGE_SIZE, WebflowClient

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


class ItemValidationError(ValueError):
    """Item payload failed the required-field checks."""

    def __init__(self, message: str, errors: List[Dict[str, str]]):
        super().__init__(message)
        self.errors = errors


def clamp_page(limit: Optional[int], offset: Optional[int]) -> Dict[str, int]:
    """Normalize pagination: limit in [1, 100] (default 20), offset >= 0."""
    page_limit = DEFAULT_PAGE_SIZE if limit is None else min(max(int(limit), 1), MAX_PAGE_SIZE)
    page_offset = max(int(offset or 0), 0)
    return {"limit": page_limit, "offset": page_offset}


def _build_payload(field_data: Dict[str, Any], is_archived: Optional[bool], is_draft: Optional[bool]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"fieldData": field_data}
    if is_archived is not None:
        payload["isArchived"] = is_archived
    if is_draft is not None:
        payload["isDraft"] = is_draft
    return payload


def list_collection_items(
    client: WebflowClient,
    collection_id: str,
    limit: Optional[int] = None,
    offset: Optional[int] = None
) -> Dict[str, Any]:
    """List published items of a collection; returns the raw Webflow page."""
    page = clamp_page(limit, offset)
    return client.list_items_live(collection_id, limit=page["limit"], offset=page["offset"])


def get_collection_item(client: WebflowClient, collection_id: str, item_id: str) -> Dict[str, Any]:
    """Fetch one published item."""
    return client.get_item_live(collection_id, item_id).to_dict()


def create_collection_item(
    client: WebflowClient,
    collection_id: str,
    field_data: Dict[str, Any],
    is_archived: Optional[bool] = None,
    is_draft: Optional[bool] = None
) -> Dict[str, Any]:
    """
    Create an item after checking the fields Webflow requires.

    Raises:
        ItemValidationError: If name or slug is missing
    """
    errors: List[Dict[str, str]] = []
    if not field_data.get("name"):
        errors.append({"field": "name", "message": "Name is required"})
    if not field_data.get("slug"):
        errors.append({"field": "slug", "message": "Slug is required"})
    if errors:
        raise ItemValidationError("Name and slug are required fields", errors)

    item = client.create_item(collection_id, _build_payload(field_data, is_archived, is_draft))
    return item.to_dict()


def update_collection_item(
    client: WebflowClient,
    collection_id: str,
    item_id: str,
    field_data: Dict[str, Any],
    is_archived: Optional[bool] = None,
    is_draft: Optional[bool] = None
) -> Dict[str, Any]:
    """Update an item with only the provided fields."""
    item = client.update_item(collection_id, item_id, _build_payload(field_data, is_archived, is_draft))
    return item.to_dict()
