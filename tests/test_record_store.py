"""
Tests for the client history service
"""

from unittest.mock import MagicMock

import pytest

from src.activity import ActivityLogger
from src.models.record import FinancialRecord
from src.services.records import RecordStore, RecordValidationError
from src.services.storage import InMemoryRecordStorage, StorageError


def make_record(name: str = "", contact: str = "", income: float = 0) -> FinancialRecord:
    record = FinancialRecord()
    record.basic.full_name = name
    record.basic.contact_number = contact
    record.basic.annual_income = income
    return record


@pytest.fixture
def activity() -> MagicMock:
    return MagicMock(spec=ActivityLogger)


@pytest.fixture
def store(activity) -> RecordStore:
    return RecordStore(InMemoryRecordStorage(), activity_logger=activity)


class TestSave:
    """Tests for RecordStore.save."""

    def test_save_prepends(self, store):
        first = store.save(make_record("Ali"), "Ali")
        second = store.save(make_record("Siti"), "Siti")
        assert [r.id for r in store.list()] == [second.id, first.id]

    def test_same_name_saved_twice_keeps_both(self, store):
        first = store.save(make_record("Ali"), "Ali")
        second = store.save(make_record("Ali"), "Ali")
        assert first.id != second.id
        assert len(store.list()) == 2

    def test_blank_name_rejected_and_nothing_written(self, store, activity):
        with pytest.raises(RecordValidationError) as exc_info:
            store.save(make_record(), "")

        assert exc_info.value.message == "Please enter the client's name before saving."
        assert store.list() == []
        activity.log_save_rejected.assert_called_once()

    def test_saved_snapshot_is_independent(self, store):
        record = make_record("Ali", income=50000)
        saved = store.save(record, "Ali")

        record.basic.annual_income = 99999
        assert store.get(saved.id).data.basic.annual_income == 50000

    def test_storage_failure_is_logged_and_raised(self, activity):
        storage = MagicMock(spec=InMemoryRecordStorage)
        storage.put.side_effect = StorageError("disk full")
        store = RecordStore(storage, activity_logger=activity)

        with pytest.raises(StorageError):
            store.save(make_record("Ali"), "Ali")
        activity.log_storage_error.assert_called_once_with("save", "disk full")


class TestDelete:
    """Tests for RecordStore.delete."""

    def test_delete_middle_entry(self, store, activity):
        """Three saves of one client, delete the middle: the others remain in order."""
        first = store.save(make_record("Ali"), "Ali")
        middle = store.save(make_record("Ali"), "Ali")
        last = store.save(make_record("Ali"), "Ali")

        assert store.delete(middle.id, confirmed=True)
        assert [r.id for r in store.list()] == [last.id, first.id]
        activity.log_record_deleted.assert_called_once_with(middle.id)

    def test_unconfirmed_delete_does_nothing(self, store, activity):
        saved = store.save(make_record("Ali"), "Ali")

        assert not store.delete(saved.id, confirmed=False)
        assert len(store.list()) == 1
        activity.log_delete_not_confirmed.assert_called_once_with(saved.id)

    def test_absent_id_is_not_an_error(self, store):
        store.save(make_record("Ali"), "Ali")
        assert not store.delete("missing", confirmed=True)
        assert len(store.list()) == 1


class TestLoadAndSearch:
    """Tests for RecordStore.load and RecordStore.search."""

    def test_load_returns_equal_copy(self, store):
        record = make_record("Ali", contact="0123", income=60000)
        saved = store.save(record, "Ali")

        loaded = store.load(saved.id)
        assert loaded == record
        assert loaded is not saved.data

    def test_editing_loaded_record_leaves_history(self, store):
        saved = store.save(make_record("Ali", income=60000), "Ali")
        loaded = store.load(saved.id)
        loaded.basic.annual_income = 1

        assert store.get(saved.id).data.basic.annual_income == 60000

    def test_editing_listed_entry_leaves_history(self, store):
        """Entries from list() / search() / get() are snapshots, not handles."""
        saved = store.save(make_record("Ali"), "Ali")

        store.list()[0].data.liabilities.car_loan = 999
        store.search("ali")[0].data.liabilities.car_loan = 999
        store.get(saved.id).data.liabilities.car_loan = 999

        assert store.load(saved.id).liabilities.car_loan == 0

    def test_load_absent_returns_none(self, store):
        assert store.load("missing") is None

    def test_search_by_name_and_contact(self, store):
        ali = store.save(make_record("Ali Hassan", contact="012-3456789"), "Ali Hassan")
        siti = store.save(make_record("Siti Aminah", contact="019-8765432"), "Siti Aminah")

        assert [r.id for r in store.search("ali")] == [ali.id]
        assert [r.id for r in store.search("019")] == [siti.id]
        assert [r.id for r in store.search("")] == [siti.id, ali.id]
        assert store.search("nobody") == []

    def test_search_is_logged(self, store, activity):
        store.search("ali")
        activity.log_search_executed.assert_called_once_with("ali", 0)
