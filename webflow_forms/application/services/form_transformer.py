"""Form transformer service - Maps form fields to Webflow CMS field data."""
import logging
import re
import secrets
import string
import time
from typing import Any, Dict, List, Mapping, Optional

from ...domain.entities.cms_item import UploadedAsset
from ...domain.entities.image_orientation import CardSizeConfig
from ...domain.value_objects.form_submission import FormSubmission
from .date_parser import parse_flexible_date, to_iso, utc_now

logger = logging.getLogger(__name__)

# Logical value -> form field names, tried in order
GUESTBOOK_ALIASES = {
    "collection_id": ("collectionId", "Collection ID"),
    "full_name": ("full_name",),
    "email": ("email",),
    "location": ("guestbook_location",),
    "first_met": ("guestbook_first_met",),
    "relationship": ("Select-Field", "guestbook_relationship"),
    "message": ("guestbook_message",),
    "card_color": ("card_color", "color", "Card-Color"),
}

TIMELINE_ALIASES = {
    "name_line_1": ("timeline_name_line_1",),
    "name_line_2": ("timeline_name_line_2",),
    "name": ("name",),
    "date": ("month-year", "timeline_date", "date-added"),
    "event_type": ("timeline_type", "event-type"),
    "description": ("timeline_detail", "memory"),
    "location": ("timeline_location", "location"),
    "full_name": ("full_name", "name"),
    "email": ("email",),
}

MEMORY_ALIASES = {
    "first_name": ("first_name",),
    "last_name": ("last_name",),
    "detail": ("memory_detail", "memory"),
    "date": ("memory_date", "date"),
    "location": ("memory_location", "location"),
    "tag_1": ("memory_tag_1", "tag1"),
    "tag_2": ("memory_tag_2", "tag2"),
    "tag_3": ("memory_tag_3", "tag3"),
    "email": ("email",),
    "video": ("video",),
    "content_link": ("content_link",),
}

CARD_COLOR_FIELDS = {
    "Slate Blue": "slate-blue-2",
    "Ocean Teal": "ocean-teal-2",
    "Rustwood Red": "rustwood-red-2",
    "Twilight Smoke": "twilight-smoke-2",
    "Warm Sandstone": "warm-sandstone",
}

_SLUG_CHARS = string.ascii_lowercase + string.digits
_EDIT_CODE_CHARS = string.ascii_uppercase + string.digits
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def slugify(text: str) -> str:
    """Lowercase text with every non-alphanumeric run collapsed to a hyphen."""
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower())
    return slug.strip("-")


def generate_slug(length: int = 10) -> str:
    """Random lowercase alphanumeric slug."""
    return "".join(secrets.choice(_SLUG_CHARS) for _ in range(length))


def generate_edit_code(length: int = 6) -> str:
    """Random uppercase alphanumeric edit code."""
    return "".join(secrets.choice(_EDIT_CODE_CHARS) for _ in range(length))


def unique_slug(text: str, fallback_prefix: str, now_ms: Optional[int] = None) -> str:
    """Slug from text with a millisecond suffix, e.g. "first-day-123456"."""
    millis = now_ms if now_ms is not None else int(time.time() * 1000)
    base = slugify(text) or f"{fallback_prefix}-{millis}"
    return f"{base}-{str(millis)[-6:]}"


def parse_boolean(value: Any) -> bool:
    """Parse checkbox/string/boolean form values."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1", "on")
    return bool(value)


def format_date_for_cms(value: Optional[str]) -> Optional[str]:
    """Convert a form date to an ISO instant, or None if it cannot be read."""
    if not value:
        return None
    parsed = parse_flexible_date(value)
    return parsed.iso if parsed else None


def get_card_color_config(color_selection: str) -> Dict[str, bool]:
    """
    Get card color switches for a selection.

    Exactly the selected color's switch is true; an unknown selection leaves
    all switches false.
    """
    config = {field_slug: False for field_slug in CARD_COLOR_FIELDS.values()}
    field_slug = CARD_COLOR_FIELDS.get((color_selection or "").strip())
    if field_slug:
        config[field_slug] = True
    return config


def build_guestbook_field_data(
    form: FormSubmission,
    guestbook_id: int,
    edit_code: str,
    now_iso: str,
    now_ms: Optional[int] = None
) -> Dict[str, Any]:
    """
    Build guestbook CMS field data from a form submission - pure function.

    Args:
        form: Submitted form
        guestbook_id: Next sequential guestbook number
        edit_code: Generated edit code
        now_iso: Submission time as ISO string
        now_ms: Submission time in epoch milliseconds, for slug fallback

    Returns:
        Field data dictionary keyed by CMS field slug
    """
    full_name = form.resolve(GUESTBOOK_ALIASES["full_name"])
    millis = now_ms if now_ms is not None else int(time.time() * 1000)
    slug = slugify(full_name) or f"entry-{millis}"

    field_data: Dict[str, Any] = {
        "name": full_name,
        "slug": slug,
        "guestbook-id": guestbook_id,
        "first-name": full_name,
        "email-address": form.resolve(GUESTBOOK_ALIASES["email"]),
        "location": form.resolve(GUESTBOOK_ALIASES["location"]),
        "memory": form.resolve(GUESTBOOK_ALIASES["first_met"]),
        "guestbook-relationship": form.resolve(GUESTBOOK_ALIASES["relationship"]),
        "guestbook-message": form.resolve(GUESTBOOK_ALIASES["message"]),
        "memory-date": now_iso,
        "edit-code-2": edit_code,
        "active": True,
    }
    field_data.update(get_card_color_config(form.resolve(GUESTBOOK_ALIASES["card_color"])))
    return field_data


def resolve_timeline_name(form: FormSubmission) -> str:
    """Timeline entry name from the two name lines, then the generic name field."""
    return (
        form.resolve(TIMELINE_ALIASES["name_line_1"])
        or form.resolve(TIMELINE_ALIASES["name_line_2"])
        or form.resolve(TIMELINE_ALIASES["name"])
        or "Untitled Event"
    )


def build_timeline_field_data(
    form: FormSubmission,
    event_number: int,
    edit_code: str,
    timeline_date: str,
    now_iso: str,
    photos: Optional[List[Optional[Dict[str, Any]]]] = None,
    now_ms: Optional[int] = None
) -> Dict[str, Any]:
    """
    Build timeline CMS field data from a form submission - pure function.

    Args:
        form: Submitted form
        event_number: Next sequential event number
        edit_code: Generated edit code
        timeline_date: ISO date of the event
        now_iso: Submission time as ISO string
        photos: Up to two CMS image fields for photo-1 and photo-2
        now_ms: Submission time in epoch milliseconds, for the slug suffix

    Returns:
        Field data dictionary keyed by CMS field slug
    """
    line_1 = form.resolve(TIMELINE_ALIASES["name_line_1"])
    line_2 = form.resolve(TIMELINE_ALIASES["name_line_2"])
    timeline_name = resolve_timeline_name(form)
    full_name = form.resolve(TIMELINE_ALIASES["full_name"])

    field_data: Dict[str, Any] = {
        "name": timeline_name,
        "slug": unique_slug(timeline_name, "timeline", now_ms),
        "event-number": event_number,
        "even-number": event_number % 2 == 0,
        "date": now_iso,
        "date-added": timeline_date,
        "event-name": line_1,
        "event-name-main": line_2 or timeline_name,
        "description": form.resolve(TIMELINE_ALIASES["description"]),
        "event-type": form.resolve(TIMELINE_ALIASES["event_type"]),
        "timeline-location": form.resolve(TIMELINE_ALIASES["location"]),
        "full-name": full_name,
        "email": form.resolve(TIMELINE_ALIASES["email"]),
        "posted-by-user-name": full_name,
        "origin": "webflow",
        "edit-code": edit_code,
        "permalink": "",
        "synced": False,
        "approved": True,
        "active": True,
    }

    for index, photo in enumerate((photos or [])[:2], start=1):
        if photo:
            field_data[f"photo-{index}"] = photo
    return field_data


def resolve_memory_name(form: FormSubmission) -> str:
    """Memory name from the first line of the detail, then the poster's name."""
    detail = form.resolve(MEMORY_ALIASES["detail"])
    first_line = detail.split("\n")[0][:50].strip() if detail else ""
    if first_line:
        return first_line
    full_name = f"{form.resolve(MEMORY_ALIASES['first_name'])} {form.resolve(MEMORY_ALIASES['last_name'])}".strip()
    return full_name or "Untitled Memory"


def build_memory_field_data(
    form: FormSubmission,
    memory_id: int,
    edit_code: str,
    memory_date: str,
    card_size: CardSizeConfig,
    profile_image: Optional[UploadedAsset] = None,
    photo: Optional[UploadedAsset] = None,
    now_ms: Optional[int] = None
) -> Dict[str, Any]:
    """
    Build memory journal CMS field data from a form submission - pure function.

    Args:
        form: Submitted form
        memory_id: Next sequential memory number
        edit_code: Generated edit code
        memory_date: ISO date of the memory
        card_size: Layout derived from the photo orientation
        profile_image: Uploaded profile image asset, if any
        photo: Uploaded memory photo asset, if any
        now_ms: Submission time in epoch milliseconds, for the slug suffix

    Returns:
        Field data dictionary keyed by CMS field slug
    """
    memory_name = resolve_memory_name(form)

    field_data: Dict[str, Any] = {
        "name": memory_name,
        "slug": unique_slug(memory_name, "memory", now_ms),
        "memory-id": memory_id,
        "first-name": form.resolve(MEMORY_ALIASES["first_name"]),
        "last-name": form.resolve(MEMORY_ALIASES["last_name"]),
        "email": form.resolve(MEMORY_ALIASES["email"]),
        "memory-detail": form.resolve(MEMORY_ALIASES["detail"]),
        "memory-date": memory_date,
        "memory-location": form.resolve(MEMORY_ALIASES["location"]),
        "memory-tag-1": form.resolve(MEMORY_ALIASES["tag_1"]),
        "memory-tag-2": form.resolve(MEMORY_ALIASES["tag_2"]),
        "memory-tag-3": form.resolve(MEMORY_ALIASES["tag_3"]),
        "photo-added": photo is not None,
        "video": form.resolve(MEMORY_ALIASES["video"]),
        "content-link": form.resolve(MEMORY_ALIASES["content_link"]),
        "edit-code": edit_code,
        "active": True,
    }
    if profile_image:
        field_data["profile-image"] = profile_image.to_image_field("Profile image")
    if photo:
        field_data["photo"] = photo.to_image_field("Memory photo")
    field_data.update(card_size.to_field_data())
    return field_data


def to_item_payload(field_data: Dict[str, Any], is_archived: bool = False, is_draft: bool = False) -> Dict[str, Any]:
    """Wrap field data in a Webflow create-item payload."""
    return {"fieldData": field_data, "isArchived": is_archived, "isDraft": is_draft}


def validate_guestbook_form(values: Mapping[str, Any]) -> List[Dict[str, str]]:
    """
    Validate required fields for a guestbook entry created through the CMS API.

    Returns:
        List of {"field", "message"} errors, empty when valid
    """
    errors: List[Dict[str, str]] = []

    if not str(values.get("collection_id") or "").strip():
        errors.append({"field": "collection_id", "message": "Collection ID is required"})

    if not str(values.get("full_name") or "").strip():
        errors.append({"field": "full_name", "message": "Full name is required"})

    email = str(values.get("email") or "").strip()
    if not email:
        errors.append({"field": "email", "message": "Email is required"})
    elif not _EMAIL_RE.match(email):
        errors.append({"field": "email", "message": "Please enter a valid email address"})

    date_added = values.get("date_added")
    if date_added and not format_date_for_cms(str(date_added)):
        errors.append({"field": "date_added", "message": "Invalid date format"})

    return errors


def transform_to_create_payload(values: Mapping[str, Any], now_iso: Optional[str] = None) -> Dict[str, Any]:
    """
    Transform guestbook values into a Webflow create-item payload.

    Generates the slug and edit code when absent and defaults date-added to now.
    """
    slug = str(values.get("slug") or "").strip() or generate_slug()
    edit_code = str(values.get("edit_code") or "").strip() or generate_edit_code()
    name = str(values.get("full_name") or "").strip()

    date_added = format_date_for_cms(values.get("date_added")) if values.get("date_added") else None
    if not date_added:
        date_added = now_iso or to_iso_now()

    field_data: Dict[str, Any] = {
        "name": name,
        "slug": slug,
        "first-name": name,
        "email": values.get("email"),
        "guestbook-id": values.get("guestbook_id"),
        "guestbook-first-meeting": values.get("guestbook_first_meeting"),
        "location": values.get("guestbook_location"),
        "relationship": values.get("guestbook_relationship"),
        "guestbook-message": values.get("guestbook_message"),
        "date-added": date_added,
        "guestbook-edit-code": values.get("guestbook_edit_code"),
        "active": parse_boolean(values.get("active", True)),
        "edit-code": edit_code,
    }
    profile_image = values.get("profile_image")
    if profile_image:
        field_data["photo"] = {"url": str(profile_image), "alt": f"{name}'s photo"}

    return {
        "fieldData": {k: v for k, v in field_data.items() if v is not None},
        "isArchived": parse_boolean(values.get("archived", False)),
        "isDraft": parse_boolean(values.get("draft", False)),
    }


def transform_to_update_payload(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Transform guestbook values into a Webflow update payload with only the provided fields."""
    name = str(values.get("full_name") or "").strip()
    field_data: Dict[str, Any] = {}

    if name:
        field_data["name"] = name
        field_data["first-name"] = name

    simple_fields = (
        ("slug", "slug"),
        ("email", "email"),
        ("guestbook_id", "guestbook-id"),
        ("guestbook_first_meeting", "guestbook-first-meeting"),
        ("guestbook_location", "location"),
        ("guestbook_relationship", "relationship"),
        ("guestbook_message", "guestbook-message"),
        ("guestbook_edit_code", "guestbook-edit-code"),
        ("edit_code", "edit-code"),
    )
    for key, field_slug in simple_fields:
        if values.get(key):
            field_data[field_slug] = values[key]

    if values.get("profile_image"):
        photo: Dict[str, Any] = {"url": str(values["profile_image"])}
        if name:
            photo["alt"] = f"{name}'s photo"
        field_data["photo"] = photo

    if values.get("date_added"):
        date_added = format_date_for_cms(values["date_added"])
        if date_added:
            field_data["date-added"] = date_added

    if values.get("active") is not None:
        field_data["active"] = parse_boolean(values["active"])

    payload: Dict[str, Any] = {"fieldData": field_data}
    if values.get("archived") is not None:
        payload["isArchived"] = parse_boolean(values["archived"])
    if values.get("draft") is not None:
        payload["isDraft"] = parse_boolean(values["draft"])
    return payload


def to_iso_now() -> str:
    """Current time as an ISO instant."""
    return to_iso(utc_now())
