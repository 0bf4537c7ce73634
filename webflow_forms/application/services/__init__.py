"""Application services package."""
from .date_parser import parse_flexible_date, parse_date_or_default, format_date
from .image_orientation import detect_orientation, get_card_size_config
from .sequence_service import next_sequential_id

__all__ = [
    "parse_flexible_date",
    "parse_date_or_default",
    "format_date",
    "detect_orientation",
    "get_card_size_config",
    "next_sequential_id",
]
