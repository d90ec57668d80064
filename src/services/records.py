"""
Record Store

Saves, loads, searches and deletes client history on top of any
RecordStorageInterface.

GUARANTEES:
- save() always creates a NEW entry (fresh id, current timestamp);
  saving the same client twice keeps both
- Nothing is written when validation fails
- delete() only removes an entry when explicitly confirmed
- load() hands back a copy; editing it never touches history
"""

from typing import Optional

from src.activity import ActivityLogger
from src.models.history import SavedRecord
from src.models.record import FinancialRecord
from src.models.results import ValidationResult
from src.services.storage.interface import RecordStorageInterface, StorageError
from src.validation import RecordValidator


class RecordValidationError(Exception):
    """
    Save blocked by validation.

    `message` is safe to show to the user as-is.
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        self.message = result.error_message
        super().__init__(self.message)


class RecordStore:
    """
    Client history service.

    Single-actor: one session reads and writes the collection,
    so there is no locking.
    """

    def __init__(
        self,
        storage: RecordStorageInterface,
        validator: Optional[RecordValidator] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or RecordValidator()
        self._activity = activity_logger or ActivityLogger()

    def save(self, record: FinancialRecord, name: str) -> SavedRecord:
        """
        Snapshot `record` into history under `name`.

        Returns:
            The new SavedRecord, now first in list()

        Raises:
            RecordValidationError: If `name` is empty (nothing is persisted)
            StorageError: If the backend write fails
        """
        result = self._validator.validate(record, name)
        if not result.is_valid:
            self._activity.log_save_rejected(
                name,
                [issue.model_dump() for issue in result.issues if issue.severity == "error"],
            )
            raise RecordValidationError(result)

        saved = SavedRecord(
            client_name=name,
            data=record.model_copy(deep=True),
        )

        try:
            self._storage.put(saved)
        except StorageError as e:
            self._activity.log_storage_error("save", str(e))
            raise

        self._activity.log_record_saved(saved.id, saved.client_name)
        return saved

    def delete(self, record_id: str, *, confirmed: bool) -> bool:
        """
        Remove one entry from history.

        Args:
            record_id: ID of the entry to remove
            confirmed: The user explicitly confirmed the delete

        Returns:
            True if an entry was removed. False if not confirmed or if
            the ID does not exist (neither is an error).
        """
        if not confirmed:
            self._activity.log_delete_not_confirmed(record_id)
            return False

        try:
            removed = self._storage.delete(record_id)
        except StorageError as e:
            self._activity.log_storage_error("delete", str(e))
            raise

        if removed:
            self._activity.log_record_deleted(record_id)
        return removed

    def load(self, record_id: str) -> Optional[FinancialRecord]:
        """
        Return the stored snapshot for `record_id`, or None if absent.

        The result is a deep copy; the store is not modified.
        """
        saved = self._storage.get(record_id)
        if saved is None:
            return None

        self._activity.log_record_loaded(saved.id, saved.client_name)
        return saved.data.model_copy(deep=True)

    def get(self, record_id: str) -> Optional[SavedRecord]:
        """The full history entry for `record_id`, or None."""
        return self._storage.get(record_id)

    def search(self, query: str = "") -> list[SavedRecord]:
        """
        Entries matching `query`, most recent first.

        Client name matches case-insensitively; contact number matches
        as a literal substring. An empty query returns everything.
        """
        results = [record for record in self._storage.list() if record.matches(query)]
        self._activity.log_search_executed(query, len(results))
        return results

    def list(self) -> list[SavedRecord]:
        """All entries, most recent first."""
        return self._storage.list()
