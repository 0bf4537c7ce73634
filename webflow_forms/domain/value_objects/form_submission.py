"""Form submission value object."""
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple


@dataclass(frozen=True)
class SubmittedFile:
    """File part of a multipart form submission - immutable."""
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class FormSubmission:
    """
    Form submission value object - immutable.

    Holds the text fields and file parts of one HTTP form post. Logical
    values are looked up through an ordered alias tuple so the form field
    naming variants used by the different Webflow forms are handled in one
    place.
    """
    fields: Dict[str, str] = field(default_factory=dict)
    files: Dict[str, SubmittedFile] = field(default_factory=dict)

    def get(self, name: str, default: str = "") -> str:
        """Get a single text field, stripped."""
        value = self.fields.get(name)
        if value is None:
            return default
        value = value.strip()
        return value if value else default

    def resolve(self, aliases: Sequence[str], default: str = "") -> str:
        """Return the first non-empty value among the aliases, in order."""
        for name in aliases:
            value = self.get(name)
            if value:
                return value
        return default

    def get_file(self, name: str) -> Optional[SubmittedFile]:
        """Get a non-empty uploaded file by field name."""
        uploaded = self.files.get(name)
        if uploaded is None or uploaded.size == 0:
            return None
        return uploaded

    def keys(self) -> Tuple[str, ...]:
        """All submitted field names, text fields first."""
        return tuple(self.fields.keys()) + tuple(k for k in self.files.keys() if k not in self.fields)

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "FormSubmission":
        """Create from a plain dictionary of text fields."""
        return cls(fields={k: "" if v is None else str(v) for k, v in data.items()})
