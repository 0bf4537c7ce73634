"""Presentation DTOs package."""
from .cms_models import CreateItemRequest, UpdateItemRequest
from .image_models import UploadUrlRequest, ImageRef, AttachImagesRequest

__all__ = [
    "CreateItemRequest",
    "UpdateItemRequest",
    "UploadUrlRequest",
    "ImageRef",
    "AttachImagesRequest",
]
