"""
Storage backends for folio.

Provides async key-value storage with a pluggable backend interface
(local filesystem by default).
"""

from .base import (
    StorageBackend,
    StorageError,
    StorageKeyError,
    StorageMetadata,
    StoragePermissionError,
)
from .local import LocalStorage

__all__ = [
    "LocalStorage",
    "StorageBackend",
    "StorageError",
    "StorageKeyError",
    "StorageMetadata",
    "StoragePermissionError",
]
