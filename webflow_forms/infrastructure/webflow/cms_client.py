"""Webflow CMS client - thin wrapper over the Webflow Data API v2."""
import logging
from typing import Any, Dict, List, Optional

import requests

from ...config.config import get_http_timeout, get_webflow_api_host, get_webflow_token
from ...domain.entities.cms_item import CmsItem

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class WebflowApiError(RuntimeError):
    """Error returned by (or while calling) the Webflow API."""

    def __init__(self, status_code: int, message: str, body: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.body = body


class WebflowClient:
    """Webflow Data API client bound to one access token."""

    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        if not access_token:
            raise ValueError("access_token is required")
        self.base_url = (base_url or get_webflow_api_host()).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        })

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Send a request and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, params=params, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Webflow API connection error to {url}: {e}")
            raise WebflowApiError(502, f"Webflow API unreachable: {e}") from e

        if response.status_code >= 400:
            body: Any
            try:
                body = response.json()
            except ValueError:
                body = response.text
            message = body.get("message") if isinstance(body, dict) and body.get("message") else (response.reason or "Webflow API error")
            logger.error(f"Webflow API call failed: {method} {url} (status_code={response.status_code}, response={body})")
            raise WebflowApiError(response.status_code, message, body)

        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    def create_item(self, collection_id: str, payload: Dict[str, Any]) -> CmsItem:
        """Create a staged item in a collection."""
        data = self._request("POST", f"/collections/{collection_id}/items", payload=payload)
        item = CmsItem.from_api(data)
        logger.info(f"Created CMS item {item.id} in collection {collection_id}")
        return item

    def update_item(self, collection_id: str, item_id: str, payload: Dict[str, Any]) -> CmsItem:
        """Update a staged item."""
        data = self._request("PATCH", f"/collections/{collection_id}/items/{item_id}", payload=payload)
        logger.info(f"Updated CMS item {item_id} in collection {collection_id}")
        return CmsItem.from_api(data)

    def get_item(self, collection_id: str, item_id: str) -> CmsItem:
        """Get a staged item."""
        return CmsItem.from_api(self._request("GET", f"/collections/{collection_id}/items/{item_id}"))

    def get_item_live(self, collection_id: str, item_id: str) -> CmsItem:
        """Get a published item."""
        return CmsItem.from_api(self._request("GET", f"/collections/{collection_id}/items/{item_id}/live"))

    def list_items(self, collection_id: str, limit: int = MAX_PAGE_SIZE, offset: int = 0) -> Dict[str, Any]:
        """List staged items; returns the raw page with "items" and "pagination"."""
        params = {"limit": min(limit, MAX_PAGE_SIZE), "offset": offset}
        return self._request("GET", f"/collections/{collection_id}/items", params=params)

    def list_items_live(self, collection_id: str, limit: int = MAX_PAGE_SIZE, offset: int = 0) -> Dict[str, Any]:
        """List published items; returns the raw page with "items" and "pagination"."""
        params = {"limit": min(limit, MAX_PAGE_SIZE), "offset": offset}
        return self._request("GET", f"/collections/{collection_id}/items/live", params=params)

    def list_all_items(self, collection_id: str, live: bool = False) -> List[CmsItem]:
        """Page through every item of a collection."""
        items: List[CmsItem] = []
        offset = 0
        while True:
            if live:
                page = self.list_items_live(collection_id, limit=MAX_PAGE_SIZE, offset=offset)
            else:
                page = self.list_items(collection_id, limit=MAX_PAGE_SIZE, offset=offset)
            batch = page.get("items") or []
            if not batch:
                break
            items.extend(CmsItem.from_api(raw) for raw in batch)
            logger.debug(f"Fetched {len(batch)} items (offset: {offset})")
            if len(batch) < MAX_PAGE_SIZE:
                break
            offset += MAX_PAGE_SIZE
        return items

    def publish_item(self, collection_id: str, item_id: str) -> Dict[str, Any]:
        """Publish a staged item to the live site."""
        result = self._request("POST", f"/collections/{collection_id}/items/publish", payload={"itemIds": [item_id]})
        logger.info(f"Published CMS item {item_id}")
        return result

    def count_live_items(self, collection_id: str) -> int:
        """Total number of published items in a collection."""
        page = self.list_items_live(collection_id, limit=1, offset=0)
        pagination = page.get("pagination") or {}
        return int(pagination.get("total") or 0)

    def create_asset(self, site_id: str, file_name: str, file_hash: str) -> Dict[str, Any]:
        """Register an asset and get its S3 upload details."""
        return self._request("POST", f"/sites/{site_id}/assets", payload={"fileName": file_name, "fileHash": file_hash})


def get_webflow_client(access_token: Optional[str] = None) -> WebflowClient:
    """
    Create a Webflow client from configuration.

    Raises:
        RuntimeError: If no API token is configured
    """
    token = access_token or get_webflow_token()
    return WebflowClient(access_token=token, base_url=get_webflow_api_host(), timeout=get_http_timeout())


def publish_quietly(client: WebflowClient, collection_id: str, item_id: str) -> bool:
    """Publish an item, logging instead of raising when publishing fails."""
    if not item_id:
        return False
    try:
        client.publish_item(collection_id, item_id)
        return True
    except WebflowApiError as e:
        logger.warning(f"Error publishing item {item_id} (item still saved): {e.message}")
        return False
