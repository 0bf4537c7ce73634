"""CMS controller - Handles generic collection item operations."""
import logging
from typing import Any, Dict, Optional

from ...application.use_cases.cms_use_cases import (
    create_collection_item,
    get_collection_item,
    list_collection_items,
    update_collection_item,
)
from ...infrastructure.webflow.cms_client import get_webflow_client
from ..dtos.cms_models import CreateItemRequest, UpdateItemRequest

logger = logging.getLogger(__name__)


def handle_list_items(collection_id: str, limit: Optional[int], offset: Optional[int]) -> Dict[str, Any]:
    """List published items of a collection."""
    logger.info(f"Listing items of collection {collection_id} (limit={limit}, offset={offset})")
    return list_collection_items(get_webflow_client(), collection_id, limit=limit, offset=offset)


def handle_get_item(collection_id: str, item_id: str) -> Dict[str, Any]:
    """Fetch a published item."""
    return {"success": True, "data": get_collection_item(get_webflow_client(), collection_id, item_id)}


def handle_create_item(collection_id: str, payload: CreateItemRequest) -> Dict[str, Any]:
    """Create an item; name and slug are required."""
    logger.info(f"Creating item in collection {collection_id}")
    data = create_collection_item(
        get_webflow_client(),
        collection_id,
        payload.field_data,
        is_archived=payload.is_archived,
        is_draft=payload.is_draft
    )
    return {"success": True, "data": data}


def handle_update_item(collection_id: str, item_id: str, payload: UpdateItemRequest) -> Dict[str, Any]:
    """Update an item with the provided fields."""
    logger.info(f"Updating item {item_id} in collection {collection_id}")
    data = update_collection_item(
        get_webflow_client(),
        collection_id,
        item_id,
        payload.field_data,
        is_archived=payload.is_archived,
        is_draft=payload.is_draft
    )
    return {"success": True, "data": data}
