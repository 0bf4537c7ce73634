"""Pydantic models for image staging and attachment."""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class UploadUrlRequest(BaseModel):
    """Request model for a presigned upload URL."""
    file_name: Optional[str] = Field(None, alias="fileName", description="Original file name")
    file_type: Optional[str] = Field(None, alias="fileType", description="MIME type of the file")

    model_config = ConfigDict(populate_by_name=True)


class ImageRef(BaseModel):
    """Image staged in object storage."""
    url: str = Field(..., description="Public URL")
    alt: Optional[str] = Field(None, description="Alt text")
    file_key: Optional[str] = Field(None, alias="fileKey", description="Object storage key")

    model_config = ConfigDict(populate_by_name=True)


class AttachImagesRequest(BaseModel):
    """Request model for attaching staged images to a timeline item."""
    item_id: Optional[str] = Field(None, alias="itemId", description="Timeline CMS item ID")
    images: Optional[Dict[str, Optional[ImageRef]]] = Field(
        None,
        description="Images keyed by photo1 / photo2"
    )

    model_config = ConfigDict(populate_by_name=True)
