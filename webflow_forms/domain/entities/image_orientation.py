"""ImageOrientation entity - Domain model for image aspect buckets and card layouts."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ImageOrientation(str, Enum):
    """Image orientation enumeration."""
    SQUARE = "square"
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @property
    def card_tag(self) -> str:
        """Card size tag used by the memory journal collection."""
        return _CARD_TAGS[self]


_CARD_TAGS = {
    ImageOrientation.SQUARE: "1x1",
    ImageOrientation.PORTRAIT: "1x2",
    ImageOrientation.LANDSCAPE: "2x1",
}


@dataclass(frozen=True)
class CardSizeConfig:
    """Card size settings written to a memory journal CMS item."""
    option_id: str
    tag: str
    columns: int
    rows: int

    def to_field_data(self) -> Dict[str, Any]:
        """Convert to CMS field data (option field, tag switches and layout hints)."""
        field_data: Dict[str, Any] = {"memory-card-size": self.option_id}
        for tag in _CARD_TAGS.values():
            field_data[tag] = tag == self.tag
        field_data["css-columns"] = self.columns
        field_data["css-rows"] = self.rows
        return field_data
