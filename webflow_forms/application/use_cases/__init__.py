"""Application use cases package."""
from .guestbook_use_cases import submit_guestbook_entry, count_guestbook_entries
from .timeline_use_cases import submit_timeline_entry, attach_images, query_event_numbers, create_test_event
from .memory_use_cases import submit_memory_entry
from .image_use_cases import stage_image, create_upload_url
from .cms_use_cases import (
    ItemValidationError,
    list_collection_items,
    get_collection_item,
    create_collection_item,
    update_collection_item,
)

__all__ = [
    "submit_guestbook_entry",
    "count_guestbook_entries",
    "submit_timeline_entry",
    "attach_images",
    "query_event_numbers",
    "create_test_event",
    "submit_memory_entry",
    "stage_image",
    "create_upload_url",
    "ItemValidationError",
    "list_collection_items",
    "get_collection_item",
    "create_collection_item",
    "update_collection_item",
]
