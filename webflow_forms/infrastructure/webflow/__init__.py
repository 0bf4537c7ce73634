"""Webflow API infrastructure package."""
from .cms_client import WebflowApiError, WebflowClient, get_webflow_client, publish_quietly
from .asset_client import upload_asset

__all__ = [
    "WebflowApiError",
    "WebflowClient",
    "get_webflow_client",
    "publish_quietly",
    "upload_asset",
]
