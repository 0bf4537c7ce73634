"""Webflow Assets client - Uploads files to a site's asset library."""
import hashlib
import logging
from typing import Any, Dict, List, Tuple

import requests

from ...domain.entities.cms_item import UploadedAsset
from .cms_client import WebflowApiError, WebflowClient

logger = logging.getLogger(__name__)

# Upload detail keys in the order S3 expects them; the file part goes last
S3_FIELD_ORDER = [
    "acl",
    "bucket",
    "xAmzAlgorithm",
    "xAmzCredential",
    "xAmzDate",
    "key",
    "policy",
    "xAmzSignature",
    "successActionStatus",
    "contentType",
    "cacheControl",
]

S3_FIELD_NAMES = {
    "xAmzAlgorithm": "X-Amz-Algorithm",
    "xAmzCredential": "X-Amz-Credential",
    "xAmzDate": "X-Amz-Date",
    "xAmzSignature": "X-Amz-Signature",
    "successActionStatus": "success_action_status",
    "contentType": "Content-Type",
    "cacheControl": "Cache-Control",
    "policy": "Policy",
    "acl": "acl",
    "bucket": "bucket",
    "key": "key",
}


def convert_to_s3_field_name(camel_case: str) -> str:
    """Convert a camelCase upload detail key to its S3 form field name."""
    return S3_FIELD_NAMES.get(camel_case, camel_case)


def build_s3_form_fields(upload_details: Dict[str, Any]) -> List[Tuple[str, str]]:
    """
    Build ordered S3 POST form fields from Webflow upload details - pure function.

    Accepts both camelCase keys and keys already in S3 form; unknown keys are
    appended after the known ones.
    """
    normalized: Dict[str, Any] = {}
    reverse = {v: k for k, v in S3_FIELD_NAMES.items()}
    for key, value in (upload_details or {}).items():
        normalized[reverse.get(key, key)] = value

    fields: List[Tuple[str, str]] = []
    for camel_key in S3_FIELD_ORDER:
        value = normalized.pop(camel_key, None)
        if value is not None:
            fields.append((convert_to_s3_field_name(camel_key), str(value)))
    for key, value in normalized.items():
        if value is not None:
            fields.append((key, str(value)))
    return fields


def md5_hex(data: bytes) -> str:
    """MD5 digest Webflow uses to deduplicate assets."""
    return hashlib.md5(data).hexdigest()


def upload_asset(client: WebflowClient, site_id: str, file_name: str, data: bytes) -> UploadedAsset:
    """
    Upload a file to the Webflow Assets API.

    Computes the MD5 hash, creates the asset, then POSTs the bytes to the
    returned S3 upload URL.

    Args:
        client: Webflow client
        site_id: Webflow site ID
        file_name: Original file name
        data: File bytes

    Returns:
        UploadedAsset with the asset ID and hosted URL

    Raises:
        WebflowApiError: If asset creation or the S3 upload fails
    """
    file_hash = md5_hex(data)
    logger.info(f"Creating asset {file_name} (md5 {file_hash})")
    asset = client.create_asset(site_id, file_name, file_hash)

    upload_url = asset.get("uploadUrl")
    if not upload_url or not asset.get("id"):
        raise WebflowApiError(502, "Asset response missing uploadUrl or id", asset)

    form_fields = build_s3_form_fields(asset.get("uploadDetails") or {})
    try:
        response = requests.post(
            upload_url,
            data=form_fields,
            files={"file": (file_name, data)},
            timeout=client.timeout,
        )
    except requests.exceptions.RequestException as e:
        raise WebflowApiError(502, f"S3 upload failed: {e}") from e

    if response.status_code >= 400:
        raise WebflowApiError(response.status_code, f"S3 upload failed: {response.status_code} - {response.text}")

    logger.info(f"Uploaded asset {asset['id']} to {asset.get('hostedUrl')}")
    return UploadedAsset(file_id=asset["id"], url=asset.get("hostedUrl") or "", alt=file_name)
