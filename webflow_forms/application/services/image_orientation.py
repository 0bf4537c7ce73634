"""Image orientation service - Classifies image aspect ratio from raw header bytes."""
import logging
import struct
from typing import Tuple

from ...domain.entities.image_orientation import CardSizeConfig, ImageOrientation

logger = logging.getLogger(__name__)

JPEG_SIGNATURE = b"\xff\xd8"
JPEG_SOF0 = b"\xff\xc0"
PNG_SIGNATURE = b"\x89PNG"

PORTRAIT_MAX_RATIO = 0.9
LANDSCAPE_MIN_RATIO = 1.1

# Option IDs of the "memory-card-size" field in the memory journal collection
CARD_SIZE_CONFIGS = {
    ImageOrientation.SQUARE: CardSizeConfig(option_id="375ee74ef6f5816b9380663364279dfe", tag="1x1", columns=1, rows=1),
    ImageOrientation.PORTRAIT: CardSizeConfig(option_id="9dfbeb13c30a7c8c40996b86a9b8591a", tag="1x2", columns=1, rows=2),
    ImageOrientation.LANDSCAPE: CardSizeConfig(option_id="418938b7e9fde5527405832f988389da", tag="2x1", columns=2, rows=1),
}


def read_dimensions(buffer: bytes) -> Tuple[int, int]:
    """
    Read (width, height) from a JPEG SOF0 segment or PNG IHDR chunk - pure function.

    Only the first SOF0 marker is considered; progressive JPEGs and EXIF
    rotation are not handled.

    Returns:
        (width, height), or (0, 0) when the format is not recognized
    """
    if not buffer:
        return 0, 0

    if buffer.startswith(JPEG_SIGNATURE):
        # The marker is followed by length (2), precision (1), height (2), width (2)
        index = buffer.find(JPEG_SOF0, 2)
        if index == -1 or index + 9 > len(buffer):
            return 0, 0
        height, width = struct.unpack_from(">HH", buffer, index + 5)
        return width, height

    if buffer.startswith(PNG_SIGNATURE):
        if len(buffer) < 24:
            return 0, 0
        width, height = struct.unpack_from(">II", buffer, 16)
        return width, height

    return 0, 0


def classify_aspect_ratio(width: int, height: int) -> ImageOrientation:
    """Map dimensions to an orientation bucket; zero dimensions are square."""
    if width <= 0 or height <= 0:
        return ImageOrientation.SQUARE

    aspect_ratio = width / height
    if aspect_ratio < PORTRAIT_MAX_RATIO:
        return ImageOrientation.PORTRAIT
    if aspect_ratio > LANDSCAPE_MIN_RATIO:
        return ImageOrientation.LANDSCAPE
    return ImageOrientation.SQUARE


def detect_orientation(buffer: bytes) -> ImageOrientation:
    """
    Detect image orientation from raw bytes - pure function.

    Falls back to square whenever dimensions cannot be read.

    Args:
        buffer: Raw JPEG or PNG bytes

    Returns:
        ImageOrientation bucket
    """
    try:
        width, height = read_dimensions(buffer)
    except struct.error as e:
        logger.warning(f"Could not read image header, defaulting to square: {e}")
        return ImageOrientation.SQUARE

    if width == 0 or height == 0:
        logger.info("Could not detect dimensions, defaulting to square")
        return ImageOrientation.SQUARE

    orientation = classify_aspect_ratio(width, height)
    logger.info(f"Dimensions: {width}x{height}, aspect ratio {width / height:.2f}, detected {orientation.value}")
    return orientation


def get_card_size_config(orientation: ImageOrientation) -> CardSizeConfig:
    """Get the memory card layout for an orientation."""
    return CARD_SIZE_CONFIGS.get(orientation, CARD_SIZE_CONFIGS[ImageOrientation.SQUARE])
