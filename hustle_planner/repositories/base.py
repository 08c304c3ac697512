"""
Snapshot Repositories

Every collection is stored as ONE JSON array under one storage key.
Mutations are load -> modify in memory -> save the whole array; there is
no partial persistence.

CONCURRENCY: The load-modify-save cycle is guarded by a re-entrant lock
per storage key, so concurrent mutations inside one process cannot lose
each other's updates. Two processes sharing a storage file can still
race, and the last writer wins.
"""

import threading
from contextlib import contextmanager
from typing import Any, Callable, ClassVar, Generic, Iterator, Optional, TypeVar, Union

from pydantic import ValidationError

from hustle_planner.audit import AuditLogger
from hustle_planner.models.records import Record, StoredModel
from hustle_planner.services.storage import (
    DuplicateRecordError,
    RecordNotFoundError,
    RecordStore,
)
from hustle_planner.validation import RecordValidator


M = TypeVar("M", bound=StoredModel)
R = TypeVar("R", bound=Record)


_LOCKS: dict[str, threading.RLock] = {}
_LOCKS_GUARD = threading.Lock()


def lock_for(storage_key: str) -> threading.RLock:
    """The process-wide lock guarding one storage key."""
    with _LOCKS_GUARD:
        if storage_key not in _LOCKS:
            _LOCKS[storage_key] = threading.RLock()
        return _LOCKS[storage_key]


class SnapshotRepository(Generic[M]):
    """
    Load/save wrapper around one stored collection.

    Subclasses set ``model``, ``storage_key`` and ``entity_type``.
    """

    model: ClassVar[type[StoredModel]]
    storage_key: ClassVar[str]
    entity_type: ClassVar[str]

    def __init__(
        self,
        store: RecordStore,
        validator: Optional[RecordValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit = audit_logger or AuditLogger()
        self._validator = validator or RecordValidator(self._audit)
        self._lock = lock_for(self.storage_key)

    def load_all(self) -> list[M]:
        """
        Load the full snapshot.

        Returns an empty list if nothing is stored. Individual records
        that no longer validate are skipped, not fatal.
        """
        records, _ = self._load_snapshot()
        return records

    def save_all(self, records: list[M]) -> None:
        """Overwrite the full snapshot."""
        self._store.save(self.storage_key, [record.to_storage() for record in records])

    def _load_snapshot(self) -> tuple[list[M], list[Any]]:
        """Split the stored array into parsed records and raw items that failed to parse."""
        raw = self._store.load(self.storage_key)
        if raw is None:
            return [], []
        if not isinstance(raw, list):
            self._audit.log_snapshot_unreadable(self.storage_key, "snapshot is not a list")
            return [], []

        records = []
        rejected = []
        for index, item in enumerate(raw):
            try:
                records.append(self.model.model_validate(item))
            except ValidationError as e:
                self._audit.log_record_skipped(self.storage_key, index, str(e))
                rejected.append(item)
        return records, rejected

    @contextmanager
    def _editing(self) -> Iterator[list[M]]:
        """
        Critical section for a mutation.

        The yielded list is saved when the block exits normally; an
        exception inside the block leaves the stored snapshot untouched.
        Stored items that fail to parse are written back verbatim after
        the edited records.
        """
        with self._lock:
            records, rejected = self._load_snapshot()
            yield records
            self._store.save(
                self.storage_key,
                [record.to_storage() for record in records] + rejected,
            )

    def _coerce(self, data: Union[M, dict[str, Any]]) -> M:
        if isinstance(data, self.model):
            return data
        return self._validator.parse(self.model, data)


class RecordRepository(SnapshotRepository[R]):
    """Snapshot repository for records with a unique ``id``."""

    def get(self, record_id: str) -> Optional[R]:
        return next((r for r in self.load_all() if r.id == record_id), None)

    def require(self, record_id: str) -> R:
        record = self.get(record_id)
        if record is None:
            raise RecordNotFoundError(f"{self.entity_type} {record_id} not found")
        return record

    def add(self, data: Union[R, dict[str, Any]]) -> R:
        """
        Validate and append a record.

        Raises:
            RecordValidationError: If ``data`` is a dict that fails validation
            DuplicateRecordError: If the id is already taken
        """
        record = self._coerce(data)
        with self._editing() as records:
            if any(r.id == record.id for r in records):
                raise DuplicateRecordError(f"{self.entity_type} {record.id} already exists")
            records.append(record)
        self._audit.log_record_created(self.entity_type, record.id)
        return record

    def update(self, record_id: str, changes: dict[str, Any]) -> R:
        """
        Apply ``changes`` (keyed by field name) to a stored record.

        The merged record is re-validated; the id cannot change.
        """
        with self._editing() as records:
            index = self._index_of(records, record_id)
            merged = records[index].model_dump()
            merged.update(changes)
            merged["id"] = record_id
            records[index] = self._validator.parse(self.model, merged)
            updated = records[index]
        self._audit.log_record_updated(
            self.entity_type, record_id, {"fields": sorted(changes)}
        )
        return updated

    def delete(self, record_id: str) -> R:
        with self._editing() as records:
            removed = records.pop(self._index_of(records, record_id))
        self._audit.log_record_deleted(self.entity_type, record_id)
        return removed

    def _modify(self, record_id: str, change: Callable[[R], R]) -> R:
        """Replace one record with ``change(record)`` inside the lock."""
        with self._editing() as records:
            index = self._index_of(records, record_id)
            records[index] = change(records[index])
            return records[index]

    def _index_of(self, records: list[R], record_id: str) -> int:
        for index, record in enumerate(records):
            if record.id == record_id:
                return index
        raise RecordNotFoundError(f"{self.entity_type} {record_id} not found")
