"""Object storage infrastructure package."""
from .r2_storage import R2Storage, StorageError, get_r2_storage

__all__ = [
    "R2Storage",
    "StorageError",
    "get_r2_storage",
]
