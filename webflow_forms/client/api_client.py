"""Forms API client - HTTP client for the webflow-forms endpoints."""
import logging
import os
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, urlparse

import requests

from ..application.services.form_transformer import (
    transform_to_create_payload,
    transform_to_update_payload,
    validate_guestbook_form,
)
from ..domain.entities.cms_item import ImageData

logger = logging.getLogger(__name__)


class FormsApiError(RuntimeError):
    """Error response from the forms API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _get_api_base_url() -> str:
    """Get forms API base URL from environment variable."""
    return os.getenv("FORMS_API_BASE_URL", "http://localhost:8000").rstrip("/")


def _strip_extension(file_name: str) -> str:
    return file_name.rsplit(".", 1)[0] if "." in file_name else file_name


class FormsApiClient:
    """Client for the guestbook, timeline, memory, image and CMS routes."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 30, session: Optional[requests.Session] = None):
        self.base_url = (base_url or _get_api_base_url()).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _json(self, method: str, endpoint: str, **kwargs: Any) -> Dict[str, Any]:
        """Call a JSON endpoint and return the decoded body."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"API connection error to {url}: {e}")
            raise FormsApiError(f"Network error calling {endpoint}: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            message = body.get("error") if isinstance(body, dict) else None
            logger.error(f"API call failed: {url} (status_code={response.status_code}, response={response.text})")
            raise FormsApiError(message or f"HTTP {response.status_code}: {response.reason}", response.status_code)
        return body

    def _data(self, body: Dict[str, Any], failure: str) -> Dict[str, Any]:
        if not body.get("success") or not body.get("data"):
            raise FormsApiError(body.get("error") or failure)
        return body["data"]

    def upload_image(self, data: bytes, file_name: str, content_type: str) -> ImageData:
        """Stage an image in object storage; alt text is the file name without extension."""
        body = self._json("POST", "/api/images/upload", files={"file": (file_name, data, content_type)})
        if not body.get("success") or not body.get("publicUrl"):
            raise FormsApiError(body.get("error") or "Upload failed")
        return ImageData(url=body["publicUrl"], alt=_strip_extension(file_name), file_key=body.get("fileKey") or "")

    def request_upload_url(self, file_name: str, file_type: str) -> Dict[str, Any]:
        """Get a presigned upload URL."""
        return self._json("POST", "/api/images/upload-url", json={"fileName": file_name, "fileType": file_type})

    def create_item(self, collection_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = self._json("POST", f"/api/cms/{collection_id}/create", json=payload)
        return self._data(body, "Failed to create item")

    def update_item(self, collection_id: str, item_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = self._json("PATCH", f"/api/cms/{collection_id}/{item_id}", json=payload)
        return self._data(body, "Failed to update item")

    def get_item(self, collection_id: str, item_id: str) -> Dict[str, Any]:
        body = self._json("GET", f"/api/cms/{collection_id}/{item_id}")
        return self._data(body, "Failed to fetch item")

    def list_items(self, collection_id: str, limit: int = 20, offset: int = 0) -> Dict[str, Any]:
        return self._json("GET", f"/api/cms/{collection_id}", params={"limit": limit, "offset": offset})

    def attach_images(self, item_id: str, images: Mapping[str, ImageData]) -> Dict[str, Any]:
        """Attach staged images (keys photo1 / photo2) to a timeline item."""
        payload = {"itemId": item_id, "images": {key: image.to_dict() for key, image in images.items()}}
        return self._json("POST", "/api/timeline/attach-images", json=payload)

    def get_guestbook_count(self) -> int:
        body = self._json("GET", "/api/guestbook/count")
        return int(body.get("count") or 0)

    def submit_form(
        self,
        endpoint: str,
        fields: Mapping[str, str],
        files: Optional[Mapping[str, Tuple[str, bytes, str]]] = None
    ) -> Dict[str, str]:
        """
        Post an HTML form and read the outcome from the redirect.

        Returns:
            Query parameters of the redirect (e.g. {"success": "true", "eventNumber": "7"})

        Raises:
            FormsApiError: If the redirect reports an error or no redirect is returned
        """
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.post(
                url,
                data=dict(fields),
                files=dict(files) if files else None,
                allow_redirects=False,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise FormsApiError(f"Network error calling {endpoint}: {e}") from e

        location = response.headers.get("Location")
        if response.status_code not in (301, 302, 303, 307, 308) or not location:
            raise FormsApiError(f"Unexpected response from {endpoint}: HTTP {response.status_code}", response.status_code)

        result = dict(parse_qsl(urlparse(location).query))
        if result.get("error") == "true":
            raise FormsApiError(result.get("message") or "Submission failed", response.status_code)
        return result

    def submit_guestbook_form(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate guestbook values, then create the item or update it when item_id is set.

        Raises:
            ValueError: If validation fails
        """
        errors = validate_guestbook_form(values)
        if errors:
            raise ValueError(f"Validation failed: {', '.join(e['message'] for e in errors)}")

        collection_id = str(values["collection_id"]).strip()
        item_id = str(values.get("item_id") or "").strip()
        if item_id:
            payload = transform_to_update_payload(values)
            if values.get("locale_id"):
                payload["localeId"] = values["locale_id"]
            return self.update_item(collection_id, item_id, payload)

        payload = transform_to_create_payload(values)
        if values.get("locale_id"):
            payload["localeId"] = values["locale_id"]
        return self.create_item(collection_id, payload)
