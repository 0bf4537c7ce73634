"""Image compression - Shrinks photos before upload using Pillow."""
import io
import logging
from typing import Tuple

from PIL import Image

logger = logging.getLogger(__name__)

TARGET_BYTES = 1024 * 1024
MAX_DIMENSION = 1920
INITIAL_QUALITY = 80
MIN_QUALITY = 30
QUALITY_STEP = 10


def _jpeg_name(file_name: str) -> str:
    stem = file_name.rsplit(".", 1)[0] if "." in file_name else file_name
    return f"{stem or 'image'}.jpg"


def compress_image(data: bytes, file_name: str) -> Tuple[bytes, str, str]:
    """
    Compress an image to about 1MB.

    Images already within the target are returned unchanged. Larger images
    are scaled so the long edge is at most 1920px and re-encoded as JPEG,
    stepping quality down from 80 until the result fits or the floor is hit.

    Args:
        data: Original image bytes
        file_name: Original file name

    Returns:
        (bytes, file_name, content_type)

    Raises:
        ValueError: If the data is not a readable image
    """
    if len(data) <= TARGET_BYTES:
        content_type = Image.MIME.get(_format_of(data), "application/octet-stream")
        return data, file_name, content_type

    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, Image.DecompressionBombError) as e:
        raise ValueError(f"Not a readable image: {file_name}") from e

    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    image.thumbnail((MAX_DIMENSION, MAX_DIMENSION))

    quality = INITIAL_QUALITY
    while True:
        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=quality, optimize=True)
        compressed = buffer.getvalue()
        if len(compressed) <= TARGET_BYTES or quality <= MIN_QUALITY:
            break
        quality -= QUALITY_STEP

    logger.info(
        f"Compressed {file_name}: {len(data)} -> {len(compressed)} bytes "
        f"({image.width}x{image.height}, quality {quality})"
    )
    return compressed, _jpeg_name(file_name), "image/jpeg"


def _format_of(data: bytes) -> str:
    try:
        with Image.open(io.BytesIO(data)) as image:
            return image.format or ""
    except OSError:
        return ""
