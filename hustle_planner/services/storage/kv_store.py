"""
Key-Value Store

Typed JSON get/set over a raw StorageBackend. Every key is prefixed
with the store's namespace.

There is no error channel: a value that cannot be decoded reads as the
caller's default, and a write the backend rejects is logged and dropped.
"""

import json
from typing import Any, Optional, TypeVar

from hustle_planner.audit import AuditLogger
from hustle_planner.services.storage.interface import (
    RecordStore,
    StorageBackend,
    StorageError,
)


T = TypeVar("T")


class KeyValueStore(RecordStore):
    """JSON round-tripping store over a namespaced backend."""

    def __init__(
        self,
        backend: StorageBackend,
        namespace: str = "",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._backend = backend
        self._namespace = namespace
        self._audit = audit_logger or AuditLogger()

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    def _key(self, key: str) -> str:
        return self._namespace + key

    # ------------------------------------------------------------------
    # Typed JSON API
    # ------------------------------------------------------------------

    def get(self, key: str, default: T = None) -> T:
        """Return the decoded value, or ``default`` if absent or unparsable."""
        raw = self._backend.get(self._key(key))
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError as e:
            self._audit.log_snapshot_unreadable(key, str(e))
            return default

    def set(self, key: str, value: Any) -> None:
        """Serialize ``value`` to JSON and store it."""
        try:
            raw = json.dumps(value, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            self._audit.log_storage_write_failed(key, str(e))
            return
        self.set_raw(key, raw)

    def remove(self, key: str) -> None:
        try:
            self._backend.remove(self._key(key))
        except StorageError as e:
            self._audit.log_storage_write_failed(key, str(e))

    def clear(self) -> None:
        """
        Remove every key under this store's namespace.

        With an empty namespace that is the whole backend.
        """
        for key in self.keys():
            self.remove(key)

    # ------------------------------------------------------------------
    # Raw string API (used by layers that do their own encoding)
    # ------------------------------------------------------------------

    def get_raw(self, key: str) -> Optional[str]:
        return self._backend.get(self._key(key))

    def set_raw(self, key: str, raw: str) -> None:
        try:
            self._backend.set(self._key(key), raw)
        except StorageError as e:
            self._audit.log_storage_write_failed(key, str(e))

    def keys(self) -> list[str]:
        """Keys under this namespace, with the namespace stripped."""
        prefix = self._namespace
        return [
            key[len(prefix):]
            for key in self._backend.keys()
            if key.startswith(prefix)
        ]

    # ------------------------------------------------------------------
    # RecordStore
    # ------------------------------------------------------------------

    def load(self, key: str) -> Optional[Any]:
        return self.get(key, None)

    def save(self, key: str, value: Any) -> None:
        self.set(key, value)

    def delete(self, key: str) -> None:
        self.remove(key)
