"""In-memory record storage, used for tests and when no backend is configured."""

from typing import Optional

from src.models.history import SavedRecord
from src.services.storage.interface import DuplicateError, RecordStorageInterface


class InMemoryRecordStorage(RecordStorageInterface):
    """
    Keeps the collection in a plain list, newest first.

    Entries go in and come out as deep copies, so a caller editing a
    returned record's data never rewrites history.
    """

    def __init__(self, records: Optional[list[SavedRecord]] = None):
        self._records: list[SavedRecord] = [
            record.model_copy(deep=True) for record in records or []
        ]

    def _find(self, record_id: str) -> Optional[SavedRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def get(self, record_id: str) -> Optional[SavedRecord]:
        record = self._find(record_id)
        return record.model_copy(deep=True) if record is not None else None

    def put(self, record: SavedRecord) -> None:
        if self._find(record.id) is not None:
            raise DuplicateError(f"Record already exists: {record.id}")
        self._records.insert(0, record.model_copy(deep=True))

    def delete(self, record_id: str) -> bool:
        for idx, record in enumerate(self._records):
            if record.id == record_id:
                del self._records[idx]
                return True
        return False

    def list(self) -> list[SavedRecord]:
        return [record.model_copy(deep=True) for record in self._records]
