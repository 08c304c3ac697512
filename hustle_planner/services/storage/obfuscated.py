"""
Obfuscated Store

IMPORTANT: This is a reversible obfuscation, NOT encryption. It keeps
financial records from being readable at a glance in the raw storage
file. Anyone holding the storage file also holds the key.

Transform: JSON -> XOR every byte with the repeating key -> base64.

The key is generated once per storage profile, persisted unmasked and
never rotated. Rotating it (or switching to real encryption) would make
previously written data unreadable, so any such change needs a
migration step.
"""

import base64
import binascii
import json
import secrets
from typing import Any, Optional

from hustle_planner.audit import AuditLogger
from hustle_planner.services.storage.interface import RecordStore
from hustle_planner.services.storage.kv_store import KeyValueStore


def mask(data: bytes, key: str) -> bytes:
    """
    XOR ``data`` with the repeating ``key``.

    Applying mask twice with the same key returns the input.
    """
    key_bytes = key.encode("utf-8")
    if not key_bytes:
        raise ValueError("Obfuscation key must not be empty")
    size = len(key_bytes)
    return bytes(b ^ key_bytes[i % size] for i, b in enumerate(data))


def generate_key() -> str:
    """A random ASCII key, so output stays browser-compatible."""
    return secrets.token_urlsafe(24)


class ObfuscatedStore(RecordStore):
    """Masked JSON store layered over a KeyValueStore."""

    def __init__(
        self,
        kv_store: KeyValueStore,
        prefix: str = "secure_hustle_",
        key_storage_key: str = "_sk",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._kv = kv_store
        self._prefix = prefix
        self._key_storage_key = key_storage_key
        self._audit = audit_logger or AuditLogger()

    def _get_or_create_key(self) -> str:
        key = self._kv.get_raw(self._key_storage_key)
        if not key:
            key = generate_key()
            self._kv.set_raw(self._key_storage_key, key)
            self._audit.log_obfuscation_key_created(self._key_storage_key)
        return key

    def encode(self, value: Any) -> str:
        serialized = json.dumps(value, separators=(",", ":"))
        masked = mask(serialized.encode("utf-8"), self._get_or_create_key())
        return base64.b64encode(masked).decode("ascii")

    def decode(self, encoded: str) -> Optional[Any]:
        """Reverse encode(); None if any stage fails."""
        try:
            masked = base64.b64decode(encoded, validate=True)
            serialized = mask(masked, self._get_or_create_key()).decode("utf-8")
            return json.loads(serialized)
        except (binascii.Error, ValueError):
            return None

    def set_item(self, key: str, value: Any) -> None:
        try:
            encoded = self.encode(value)
        except (TypeError, ValueError) as e:
            self._audit.log_storage_write_failed(self._prefix + key, str(e))
            return
        self._kv.set_raw(self._prefix + key, encoded)

    def get_item(self, key: str) -> Optional[Any]:
        encoded = self._kv.get_raw(self._prefix + key)
        if not encoded:
            return None

        value = self.decode(encoded)
        if value is None:
            self._audit.log_snapshot_unreadable(self._prefix + key, "cannot de-obfuscate")
        return value

    def remove_item(self, key: str) -> None:
        self._kv.remove(self._prefix + key)

    def clear(self) -> None:
        """Remove only this store's keys; the obfuscation key stays."""
        for key in self._kv.keys():
            if key.startswith(self._prefix):
                self._kv.remove(key)

    # RecordStore

    def load(self, key: str) -> Optional[Any]:
        return self.get_item(key)

    def save(self, key: str, value: Any) -> None:
        self.set_item(key, value)

    def delete(self, key: str) -> None:
        self.remove_item(key)
