"""CMS entities - Domain models for Webflow CMS items and uploaded images."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CmsItem:
    """CmsItem entity - immutable view of a Webflow CMS item."""
    id: str
    field_data: Dict[str, Any] = field(default_factory=dict)
    is_archived: bool = False
    is_draft: bool = False
    cms_locale_id: Optional[str] = None
    created_on: Optional[str] = None
    last_updated: Optional[str] = None
    last_published: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "CmsItem":
        """Build from a Webflow API item payload."""
        return cls(
            id=data.get("id", ""),
            field_data=data.get("fieldData") or {},
            is_archived=bool(data.get("isArchived", False)),
            is_draft=bool(data.get("isDraft", False)),
            cms_locale_id=data.get("cmsLocaleId"),
            created_on=data.get("createdOn"),
            last_updated=data.get("lastUpdated"),
            last_published=data.get("lastPublished"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the Webflow API shape."""
        return {
            "id": self.id,
            "cmsLocaleId": self.cms_locale_id,
            "lastPublished": self.last_published,
            "lastUpdated": self.last_updated,
            "createdOn": self.created_on,
            "isArchived": self.is_archived,
            "isDraft": self.is_draft,
            "fieldData": self.field_data,
        }


@dataclass(frozen=True)
class UploadedAsset:
    """Asset hosted by the Webflow Assets API."""
    file_id: str
    url: str
    alt: Optional[str] = None

    def to_image_field(self, default_alt: str) -> Dict[str, Any]:
        """Convert to a CMS image field referencing the asset."""
        return {"fileId": self.file_id, "url": self.url, "alt": self.alt or default_alt}


@dataclass(frozen=True)
class ImageData:
    """Image staged in object storage."""
    url: str
    alt: str
    file_key: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to the JSON shape shared with the browser widgets."""
        return {"url": self.url, "alt": self.alt, "fileKey": self.file_key}
