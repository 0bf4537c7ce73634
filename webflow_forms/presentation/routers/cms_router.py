"""CMS router - Generic endpoints for Webflow CMS collection items."""
import logging
from typing import Optional

from fastapi import APIRouter, Query

from ..controllers.cms_controller import (
    handle_create_item,
    handle_get_item,
    handle_list_items,
    handle_update_item,
)
from ..dtos.cms_models import CreateItemRequest, UpdateItemRequest
from .responses import error_response_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cms", tags=["CMS"])


@router.get("/{collection_id}", status_code=200)
async def list_items(
    collection_id: str,
    limit: Optional[int] = Query(None, description="Page size, at most 100 (default 20)"),
    offset: Optional[int] = Query(None, description="Number of items to skip")
):
    """List published items of a collection."""
    try:
        return handle_list_items(collection_id, limit, offset)
    except Exception as e:
        return error_response_for(e, "list_items")


@router.post("/{collection_id}/create", status_code=201)
async def create_item(collection_id: str, payload: CreateItemRequest):
    """Create an item; fieldData must contain name and slug."""
    try:
        return handle_create_item(collection_id, payload)
    except Exception as e:
        return error_response_for(e, "create_item")


@router.get("/{collection_id}/{item_id}", status_code=200)
async def get_item(collection_id: str, item_id: str):
    """Fetch a published item."""
    try:
        return handle_get_item(collection_id, item_id)
    except Exception as e:
        return error_response_for(e, "get_item")


@router.patch("/{collection_id}/{item_id}", status_code=200)
async def update_item(collection_id: str, item_id: str, payload: UpdateItemRequest):
    """Update an item."""
    try:
        return handle_update_item(collection_id, item_id, payload)
    except Exception as e:
        return error_response_for(e, "update_item")
