"""Cloudflare R2 integration service (S3-compatible API)."""
import logging
import secrets
import string
import time
from typing import Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...config.config import get_r2_config

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp")
MAX_UPLOAD_BYTES = int(1.5 * 1024 * 1024)
UPLOAD_URL_EXPIRES_SECONDS = 3600

_KEY_CHARS = string.ascii_lowercase + string.digits


class StorageError(RuntimeError):
    """Object storage operation failed."""


def build_file_key(file_name: str, now_ms: Optional[int] = None, prefix: str = "images") -> str:
    """
    Build a unique object key - e.g. ``images/1718000000000-ab12cd.jpg``.

    The extension is taken from the file name, lowercased, defaulting to jpg.
    """
    millis = now_ms if now_ms is not None else int(time.time() * 1000)
    random_part = "".join(secrets.choice(_KEY_CHARS) for _ in range(6))
    extension = file_name.rsplit(".", 1)[-1].lower() if file_name and "." in file_name else ""
    return f"{prefix}/{millis}-{random_part}.{extension or 'jpg'}"


def _error_details(e: ClientError) -> str:
    error_code = e.response.get('Error', {}).get('Code', 'Unknown')
    error_message = e.response.get('Error', {}).get('Message', str(e))
    return f"{error_code} - {error_message}"


class R2Storage:
    """R2 bucket accessed through the S3 API."""

    def __init__(self, config: Dict[str, str], client=None):
        self.bucket_name = config["R2_BUCKET_NAME"]
        self.public_base_url = config["R2_PUBLIC_URL"].rstrip("/")
        self.client = client or boto3.client(
            "s3",
            endpoint_url=f"https://{config['R2_ACCOUNT_ID']}.r2.cloudflarestorage.com",
            aws_access_key_id=config["R2_ACCESS_KEY_ID"],
            aws_secret_access_key=config["R2_SECRET_ACCESS_KEY"],
            region_name="auto",
        )

    def public_url(self, key: str) -> str:
        """Public URL of an object."""
        return f"{self.public_base_url}/{key}"

    def put_object(self, key: str, data: bytes, content_type: str) -> str:
        """Write bytes to the bucket and return the public URL."""
        try:
            self.client.put_object(Bucket=self.bucket_name, Key=key, Body=data, ContentType=content_type)
        except ClientError as e:
            raise StorageError(f"Failed to upload object to R2: {_error_details(e)}") from e
        except BotoCoreError as e:
            raise StorageError(f"R2 service error while uploading {key}: {str(e)}") from e
        logger.info(f"Uploaded {len(data)} bytes to r2://{self.bucket_name}/{key}")
        return self.public_url(key)

    def generate_upload_url(self, key: str, content_type: str, expires_in: int = UPLOAD_URL_EXPIRES_SECONDS) -> str:
        """Presigned PUT URL for a direct browser upload."""
        try:
            return self.client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket_name, "Key": key, "ContentType": content_type},
                ExpiresIn=expires_in,
            )
        except ClientError as e:
            raise StorageError(f"Failed to generate upload URL: {_error_details(e)}") from e
        except BotoCoreError as e:
            raise StorageError(f"R2 service error while signing {key}: {str(e)}") from e


def get_r2_storage() -> R2Storage:
    """
    Create R2 storage from configuration.

    Raises:
        RuntimeError: If R2 settings are missing
    """
    return R2Storage(get_r2_config())
