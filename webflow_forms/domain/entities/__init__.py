"""Domain entities package."""
from .parsed_date import ParsedDate
from .image_orientation import ImageOrientation, CardSizeConfig
from .cms_item import CmsItem, UploadedAsset, ImageData

__all__ = [
    "ParsedDate",
    "ImageOrientation",
    "CardSizeConfig",
    "CmsItem",
    "UploadedAsset",
    "ImageData",
]
