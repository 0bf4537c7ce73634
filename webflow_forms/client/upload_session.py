"""Upload session - Images staged by the browser, kept per form session."""
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..domain.entities.cms_item import ImageData

logger = logging.getLogger(__name__)


class UploadSession:
    """
    Staged images of one form session, keyed by upload field ID (e.g. "photo1").

    State lives on the instance; ``load`` and ``save`` move it to and from a
    JSON file between steps of a multi-step form.
    """

    def __init__(self, images: Optional[Dict[str, ImageData]] = None):
        self._images: Dict[str, ImageData] = dict(images or {})

    def put(self, upload_id: str, image: ImageData) -> None:
        self._images[upload_id] = image

    def get(self, upload_id: str) -> Optional[ImageData]:
        return self._images.get(upload_id)

    def remove(self, upload_id: str) -> None:
        self._images.pop(upload_id, None)

    def clear(self) -> None:
        self._images.clear()

    def __len__(self) -> int:
        return len(self._images)

    def __contains__(self, upload_id: str) -> bool:
        return upload_id in self._images

    def images(self) -> Dict[str, ImageData]:
        return dict(self._images)

    def hidden_fields(self, upload_id: str) -> Dict[str, str]:
        """Form fields carrying a staged image: {id}_url, {id}_alt, {id}_fileKey."""
        image = self._images.get(upload_id)
        if image is None:
            return {}
        return {
            f"{upload_id}_url": image.url,
            f"{upload_id}_alt": image.alt,
            f"{upload_id}_fileKey": image.file_key,
        }

    def all_hidden_fields(self) -> Dict[str, str]:
        fields: Dict[str, str] = {}
        for upload_id in self._images:
            fields.update(self.hidden_fields(upload_id))
        return fields

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {upload_id: image.to_dict() for upload_id, image in self._images.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, str]]) -> "UploadSession":
        images = {
            upload_id: ImageData(url=raw.get("url", ""), alt=raw.get("alt", ""), file_key=raw.get("fileKey", ""))
            for upload_id, raw in (data or {}).items()
            if raw and raw.get("url")
        }
        return cls(images)

    def save(self, path: Union[str, Path]) -> None:
        """Write the session to a JSON file."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)
        logger.debug(f"Saved {len(self)} staged images to {path}")

    @classmethod
    def load(cls, path: Union[str, Path]) -> "UploadSession":
        """Read a session from a JSON file; a missing file gives an empty session."""
        file_path = Path(path)
        if not file_path.exists():
            return cls()
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        session = cls.from_dict(data)
        logger.debug(f"Loaded {len(session)} staged images from {path}")
        return session
