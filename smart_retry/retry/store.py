"""Failure record storage.

Storage interface and implementations for the log of requests that
ultimately failed. Every operation works on the whole collection: the
JSON file backend reads the full array and writes it back on each mutation.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional, Protocol

from pydantic import ValidationError

from smart_retry.errors import FailureStoreError
from smart_retry.logging import get_module_logger
from smart_retry.retry.models import FailureRecord

logger = get_module_logger()

DEFAULT_LOG_FILENAME = "smart-retry-log.json"


class FailureStore(Protocol):
    """Storage interface for failure records.

    Records keep insertion order, oldest first. Absence is reported with
    None/False rather than an exception.

    Methods:
        save: Append a record and persist the collection
        load_all: Return every record, oldest first
        find_by_id: Return the record with the given id, or None
        remove: Delete the record with the given id
        clear: Delete every record
        count: Number of stored records
    """

    async def save(self, record: FailureRecord) -> None:
        """Append a record to the end of the log.

        Args:
            record: FailureRecord to persist
        """
        ...

    async def load_all(self) -> List[FailureRecord]:
        """Return all records, oldest first."""
        ...

    async def find_by_id(self, record_id: str) -> Optional[FailureRecord]:
        """Return the record with the given id.

        Args:
            record_id: Id of the record

        Returns:
            The matching record, or None if not found
        """
        ...

    async def remove(self, record_id: str) -> bool:
        """Delete the record with the given id.

        Args:
            record_id: Id of the record to delete

        Returns:
            True if a record was removed, False if none matched
        """
        ...

    async def clear(self) -> None:
        """Delete every record."""
        ...

    async def count(self) -> int:
        """Return the number of stored records."""
        ...


class JsonFileFailureStore:
    """FailureStore backed by a single pretty-printed JSON array on disk.

    Each mutation loads the whole array, changes it and writes it back
    through a temporary file that replaces the original. Read-modify-write
    cycles are serialized within one store instance; separate processes
    sharing the file can still overwrite each other's appends.

    Attributes:
        file_path: Location of the JSON log
    """

    def __init__(self, file_path: str | os.PathLike | None = None) -> None:
        """Initialize the store, creating an empty log if none exists.

        Args:
            file_path: Log location. Defaults to smart-retry-log.json in the
                current working directory at construction time.
        """
        self._path = Path(file_path) if file_path else Path.cwd() / DEFAULT_LOG_FILENAME
        self._lock = asyncio.Lock()
        self._ensure_file_exists()

    @property
    def file_path(self) -> Path:
        return self._path

    def _ensure_file_exists(self) -> None:
        if self._path.exists():
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._write_entries([])
        logger.info("failure_log_created", path=str(self._path))

    def _read_entries(self) -> List[Any]:
        self._ensure_file_exists()
        try:
            content = self._path.read_text(encoding="utf-8")
            entries = json.loads(content)
        except json.JSONDecodeError as e:
            raise FailureStoreError(
                f"Failure log is not valid JSON: {e}", path=str(self._path)
            ) from e
        except UnicodeDecodeError as e:
            raise FailureStoreError(
                f"Failure log is not valid UTF-8: {e}", path=str(self._path)
            ) from e

        if not isinstance(entries, list):
            raise FailureStoreError(
                "Failure log must contain a JSON array", path=str(self._path)
            )
        return entries

    def _write_entries(self, entries: List[Any]) -> None:
        payload = json.dumps(entries, indent=2, ensure_ascii=False)
        fd, tmp_path = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self._path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def _load_records(self) -> List[FailureRecord]:
        try:
            return [FailureRecord.model_validate(entry) for entry in self._read_entries()]
        except ValidationError as e:
            raise FailureStoreError(
                f"Failure log contains an invalid record: {e}", path=str(self._path)
            ) from e

    def _store_records(self, records: List[FailureRecord]) -> None:
        self._write_entries([record.to_dict() for record in records])

    def _append(self, record: FailureRecord) -> int:
        records = self._load_records()
        records.append(record)
        self._store_records(records)
        return len(records)

    def _remove(self, record_id: str) -> bool:
        records = self._load_records()
        remaining = [record for record in records if record.id != record_id]
        if len(remaining) == len(records):
            return False
        self._store_records(remaining)
        return True

    async def save(self, record: FailureRecord) -> None:
        """Append a record and persist the full log."""
        async with self._lock:
            total = await asyncio.to_thread(self._append, record)
        logger.info(
            "failure_record_saved",
            record_id=record.id,
            url=record.url,
            attempts=record.attempts,
            total_records=total,
        )

    async def load_all(self) -> List[FailureRecord]:
        """Return all records, oldest first."""
        async with self._lock:
            return await asyncio.to_thread(self._load_records)

    async def find_by_id(self, record_id: str) -> Optional[FailureRecord]:
        """Return the first record with a matching id, or None."""
        for record in await self.load_all():
            if record.id == record_id:
                return record
        return None

    async def remove(self, record_id: str) -> bool:
        """Delete the record with the given id."""
        async with self._lock:
            removed = await asyncio.to_thread(self._remove, record_id)
        if removed:
            logger.info("failure_record_removed", record_id=record_id)
        else:
            logger.debug("failure_record_remove_not_found", record_id=record_id)
        return removed

    async def clear(self) -> None:
        """Replace the log with an empty array."""
        async with self._lock:
            await asyncio.to_thread(self._write_entries, [])
        logger.info("failure_log_cleared", path=str(self._path))

    async def count(self) -> int:
        """Return the number of stored records."""
        return len(await self.load_all())


class InMemoryFailureStore:
    """In-process implementation of FailureStore.

    Suitable for development and tests; records are lost when the process
    exits.
    """

    def __init__(self) -> None:
        self._records: List[FailureRecord] = []
        self._lock = asyncio.Lock()

    async def save(self, record: FailureRecord) -> None:
        """Append a record."""
        async with self._lock:
            self._records.append(record)
            logger.info(
                "failure_record_saved",
                record_id=record.id,
                url=record.url,
                attempts=record.attempts,
                total_records=len(self._records),
            )

    async def load_all(self) -> List[FailureRecord]:
        """Return a copy of all records, oldest first."""
        async with self._lock:
            return list(self._records)

    async def find_by_id(self, record_id: str) -> Optional[FailureRecord]:
        """Return the record with a matching id, or None."""
        async with self._lock:
            return next((r for r in self._records if r.id == record_id), None)

    async def remove(self, record_id: str) -> bool:
        """Delete the record with the given id."""
        async with self._lock:
            remaining = [r for r in self._records if r.id != record_id]
            if len(remaining) == len(self._records):
                return False
            self._records = remaining
            logger.info("failure_record_removed", record_id=record_id)
            return True

    async def clear(self) -> None:
        """Delete every record."""
        async with self._lock:
            self._records = []

    async def count(self) -> int:
        """Return the number of stored records."""
        async with self._lock:
            return len(self._records)
