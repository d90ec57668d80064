"""
JSON File Storage Implementation

The whole history lives in one file: a JSON array of saved records,
most recent first. Every mutation rewrites the full collection.

Format of each entry:
    {"id": "...", "timestamp": 1735689600000, "clientName": "...",
     "data": {"basic": {...}, "liabilities": {...}, "expenses": {...},
              "coverage": {...}}}

DESIGN DECISION: A corrupted or unparseable file is treated as an
EMPTY collection. The error is logged, never raised. The next save
overwrites the corrupted file.

The file carries no schema version. Reading is tolerant: missing
fields take their defaults and unknown fields are ignored.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog
from pydantic import TypeAdapter, ValidationError

from src.models.history import SavedRecord
from src.services.storage.interface import (
    DuplicateError,
    RecordStorageInterface,
    StorageError,
)


_COLLECTION = TypeAdapter(list[SavedRecord])


class JsonFileRecordStorage(RecordStorageInterface):
    """Saved records persisted as a single JSON document on disk."""

    def __init__(self, path: Path):
        self._path = Path(path)
        self._logger = structlog.get_logger("gap_calculator.storage").bind(
            backend="json_file",
            path=str(self._path),
        )

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> list[SavedRecord]:
        """Load the collection; any failure degrades to empty."""
        if not self._path.exists():
            return []

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            self._logger.error("history_read_failed", error=str(e))
            return []
        except UnicodeDecodeError as e:
            self._logger.error("history_corrupted", error=str(e))
            return []

        if not raw.strip():
            return []

        try:
            return _COLLECTION.validate_json(raw)
        except ValidationError as e:
            self._logger.error(
                "history_corrupted",
                error_count=e.error_count(),
                error=str(e),
            )
            return []

    def _write(self, records: list[SavedRecord]) -> None:
        """Replace the file atomically with the given collection."""
        payload = json.dumps(
            [record.to_wire() for record in records],
            ensure_ascii=False,
            indent=2,
        )
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write history file {self._path}: {e}")

    def get(self, record_id: str) -> Optional[SavedRecord]:
        for record in self._read():
            if record.id == record_id:
                return record
        return None

    def put(self, record: SavedRecord) -> None:
        records = self._read()
        if any(existing.id == record.id for existing in records):
            raise DuplicateError(f"Record already exists: {record.id}")
        records.insert(0, record)
        self._write(records)

    def delete(self, record_id: str) -> bool:
        records = self._read()
        remaining = [record for record in records if record.id != record_id]
        if len(remaining) == len(records):
            return False
        # Ids are unique, so exactly one entry was dropped
        self._write(remaining)
        return True

    def list(self) -> list[SavedRecord]:
        return self._read()
