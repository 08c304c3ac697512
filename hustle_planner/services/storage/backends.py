"""
Storage Backends

DESIGN DECISION: The whole store is one JSON document mapping key to
string, exactly like browser local storage. The file backend rewrites
the document atomically on every change:
- Personal data volumes are tiny, so whole-file writes are fine
- os.replace() means a crash never leaves a half-written file
- Transient OS errors (locked file on a synced folder) are retried

TRADEOFFS:
- Two processes sharing one file race; the last writer wins
- A failed write leaves the in-memory view ahead of the disk
"""

import json
import os
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from hustle_planner.services.storage.interface import (
    BackendWriteError,
    StorageBackend,
)


logger = structlog.get_logger(__name__)


class InMemoryBackend(StorageBackend):
    """Dict-backed storage. Used in tests and for throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileBackend(StorageBackend):
    """
    Storage persisted to a single JSON file.

    The file is read once on construction; every mutation rewrites it.
    An unreadable file is renamed to ``<name>.corrupt-<timestamp>`` and
    the store starts empty, so the original bytes are never overwritten.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._lock = threading.Lock()
        self._data = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("storage_file_unreadable", path=str(self._path), error=str(e))
            self._quarantine()
            return {}

        if not isinstance(document, dict):
            logger.warning("storage_file_malformed", path=str(self._path))
            self._quarantine()
            return {}

        return {str(k): v for k, v in document.items() if isinstance(v, str)}

    def _quarantine(self) -> Path:
        """Move an unreadable file aside so the next write cannot replace it."""
        stamp = datetime.now().strftime("%Y%m%dT%H%M%S%f")
        target = self._path.with_name(f"{self._path.name}.corrupt-{stamp}")
        try:
            os.replace(self._path, target)
        except OSError as e:
            raise BackendWriteError(
                f"Could not move unreadable {self._path} aside: {e}"
            ) from e
        logger.warning("storage_file_quarantined", path=str(self._path), moved_to=str(target))
        return target

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _write(self, document: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(document, f)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self._path)

    def _flush(self) -> None:
        try:
            self._write(dict(self._data))
        except OSError as e:
            raise BackendWriteError(f"Could not write {self._path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
            self._flush()

    def remove(self, key: str) -> None:
        with self._lock:
            if self._data.pop(key, None) is not None:
                self._flush()

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data)
