"""
Abstract base class for storage backends.

A backend is a durable key-value slot store: each key holds one opaque
blob, written and read as a whole.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from folio.core.exceptions import FolioError


@dataclass
class StorageMetadata:
    """Metadata for a stored blob."""

    key: str
    size: int
    modified_at: datetime
    content_type: str


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    def __init__(self, **config):
        self.config = config

    @abstractmethod
    async def save(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> StorageMetadata:
        """Save data to storage, replacing any previous value."""

    @abstractmethod
    async def load(self, key: str) -> bytes:
        """Load data from storage. Raises StorageKeyError if not found."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a key exists in storage."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete an object. Returns True if deleted, False if didn't exist."""


class StorageError(FolioError):
    """Base exception for storage errors."""


class StorageKeyError(StorageError, KeyError):
    """Raised when a storage key doesn't exist."""


class StoragePermissionError(StorageError):
    """Raised when storage operation is not permitted."""
