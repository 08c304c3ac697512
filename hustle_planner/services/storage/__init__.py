"""
Storage Services Package

Provides the raw backends, the JSON key-value store and the obfuscated
store used for financial records.
"""

from hustle_planner.services.storage.interface import (
    BackendWriteError,
    DuplicateRecordError,
    RecordNotFoundError,
    RecordStore,
    StorageBackend,
    StorageError,
)
from hustle_planner.services.storage.backends import (
    InMemoryBackend,
    JsonFileBackend,
)
from hustle_planner.services.storage.kv_store import KeyValueStore
from hustle_planner.services.storage.obfuscated import (
    ObfuscatedStore,
    generate_key,
    mask,
)

__all__ = [
    # Interfaces
    "RecordStore",
    "StorageBackend",
    # Exceptions
    "BackendWriteError",
    "DuplicateRecordError",
    "RecordNotFoundError",
    "StorageError",
    # Implementations
    "InMemoryBackend",
    "JsonFileBackend",
    "KeyValueStore",
    "ObfuscatedStore",
    "generate_key",
    "mask",
]
