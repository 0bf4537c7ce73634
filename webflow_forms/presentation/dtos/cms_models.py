"""Pydantic models for CMS item operations."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateItemRequest(BaseModel):
    """Request model for creating a CMS item."""
    field_data: Dict[str, Any] = Field(..., alias="fieldData", description="Item field values keyed by field slug")
    is_archived: Optional[bool] = Field(None, alias="isArchived", description="Create the item archived")
    is_draft: Optional[bool] = Field(None, alias="isDraft", description="Create the item as a draft")
    # Accepted for compatibility with existing clients; not forwarded to Webflow
    locale_id: Optional[str] = Field(None, alias="localeId", description="CMS locale ID")

    model_config = ConfigDict(populate_by_name=True)


class UpdateItemRequest(BaseModel):
    """Request model for updating a CMS item."""
    field_data: Dict[str, Any] = Field(..., alias="fieldData", description="Field values to change")
    is_archived: Optional[bool] = Field(None, alias="isArchived", description="Archive flag")
    is_draft: Optional[bool] = Field(None, alias="isDraft", description="Draft flag")
    # Accepted for compatibility with existing clients; not forwarded to Webflow
    locale_id: Optional[str] = Field(None, alias="localeId", description="CMS locale ID")

    model_config = ConfigDict(populate_by_name=True)
