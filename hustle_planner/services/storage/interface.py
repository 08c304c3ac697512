"""
Abstract Storage Interface

DESIGN DECISION: We define two small abstract layers:
1. StorageBackend - raw string key/value storage, the counterpart of
   browser local storage. Swappable (in-memory for tests, JSON file
   for real use).
2. RecordStore - a JSON document store that repositories read whole
   snapshots from and write whole snapshots to.

The interface is intentionally simple - there are no transactions and
no partial updates. The last writer wins.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class StorageBackend(ABC):
    """
    Raw persistent string storage.

    Implementations raise BackendWriteError when a write cannot be
    made durable. Reads never raise; a missing key is None.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored string or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is a no-op."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """All keys currently stored."""
        pass


class RecordStore(ABC):
    """
    JSON document store used by repositories.

    Both the plain and the obfuscated store implement this, so a
    repository does not care whether its snapshot is masked.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[Any]:
        """
        Load the document stored under ``key``.

        Returns:
            The deserialized document, or None if it is absent or
            cannot be decoded
        """
        pass

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """
        Overwrite the document stored under ``key``.

        Failures are logged, never raised.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the document stored under ``key``."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class BackendWriteError(StorageError):
    """The backend could not persist a write."""
    pass


class RecordNotFoundError(StorageError):
    """Entity not found in its snapshot."""
    pass


class DuplicateRecordError(StorageError):
    """Attempted to insert a record whose id already exists."""
    pass
