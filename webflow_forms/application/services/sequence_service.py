"""Sequence service - Next sequential number for CMS collections without auto-increment."""
import logging
from typing import Any, Iterable

from ...domain.entities.cms_item import CmsItem
from ...infrastructure.webflow.cms_client import WebflowApiError, WebflowClient

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def max_field_value(items: Iterable[CmsItem], field_slug: str) -> int:
    """Largest integer value of a field across items, 0 when none - pure function."""
    return max((_as_int(item.field_data.get(field_slug)) for item in items), default=0)


def next_sequential_id(client: WebflowClient, collection_id: str, field_slug: str, live: bool = False) -> int:
    """
    Compute the next sequential number of a collection.

    Scans every item (staged, or published when ``live`` is set) and returns
    the maximum of ``field_slug`` plus one. Two submissions running at the
    same time can get the same number.

    Args:
        client: Webflow client
        collection_id: CMS collection ID
        field_slug: Numeric field holding the sequence (e.g. "event-number")
        live: Scan published items instead of staged items

    Returns:
        Next number, 1 when the collection is empty or cannot be listed
    """
    try:
        items = client.list_all_items(collection_id, live=live)
    except WebflowApiError as e:
        logger.warning(f"Error getting max {field_slug}, using 1: {e.message}")
        return 1

    max_id = max_field_value(items, field_slug)
    logger.info(f"Found {len(items)} items, max {field_slug}: {max_id}, next: {max_id + 1}")
    logger.debug(f"Next {field_slug} is not reserved; concurrent submissions may collide")
    return max_id + 1
