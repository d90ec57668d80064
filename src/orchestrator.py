"""
Main Orchestrator for the Gap Calculator

This module ties together all the components and defines the
end-to-end flows for:
1. Editing (keystroke → normalizer → record → metrics)
2. History (save / load / search / delete)
3. Export (record → snapshot → adapter)

DESIGN DECISION: The session enforces the boundaries:
- The record being edited is owned here, not by the history
- Metrics are recomputed from the record on every read
- Nothing reaches history without an explicit save
- Nothing leaves history without a confirmed delete
"""

from typing import Optional

import structlog

from src.activity import ActivityLogger, configure_logging
from src.calculation import assess_gap, calculate_gap, coverage_ratios
from src.config import get_settings
from src.config.settings import Settings
from src.models.history import SavedRecord
from src.models.record import (
    FinancialRecord,
    Gender,
    ReplacementYears,
    money_field_paths,
)
from src.models.results import CoverageRatios, DerivedMetrics, GapAssessment
from src.normalization import DateField, MoneyField
from src.services.export import (
    ExportAdapter,
    ExportResult,
    ExportSnapshot,
    suggested_filename,
)
from src.services.records import RecordStore
from src.services.storage import (
    InMemoryRecordStorage,
    JsonFileRecordStorage,
    RecordStorageInterface,
)


class GapAnalysisSession:
    """
    The active advisor session.

    Owns:
    - the FinancialRecord being edited
    - one MoneyField per money input and a DateField for date of birth

    Flow:
    1. UI edits go through the field normalizers
    2. Accepted edits are committed into the record
    3. metrics / ratios / assessment are derived on every read
    4. save() snapshots the record into history under the client name
    """

    def __init__(
        self,
        record_store: RecordStore,
        activity_logger: Optional[ActivityLogger] = None,
        default_replacement_years: int = 5,
    ):
        self._store = record_store
        self._activity = activity_logger or ActivityLogger()
        self._default_years = ReplacementYears(default_replacement_years)
        self._record = self._blank_record()

        self._money_fields: dict[tuple[str, str], MoneyField] = {
            (section, name): MoneyField(on_change=self._committer(section, name))
            for section, name in money_field_paths()
        }
        self._dob_field = DateField(on_change=self._commit_dob)

    # -------------------------------------------------------------------------
    # Record ownership
    # -------------------------------------------------------------------------

    def _blank_record(self) -> FinancialRecord:
        record = FinancialRecord()
        record.coverage.ci_income_replacement_years = self._default_years
        return record

    def _committer(self, section: str, name: str):
        def commit(value: float) -> None:
            setattr(getattr(self._record, section), name, value)
        return commit

    def _commit_dob(self, value) -> None:
        self._record.basic.dob = value

    def _resync_fields(self) -> None:
        """Push committed values back into every field after reset / load."""
        for (section, name), field in self._money_fields.items():
            field.sync(getattr(getattr(self._record, section), name))
        self._dob_field.sync(self._record.basic.dob)

    @property
    def record(self) -> FinancialRecord:
        return self._record

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def money_field(self, section: str, name: str) -> MoneyField:
        """
        The normalizer behind one money input.

        Raises:
            KeyError: If (section, name) is not a money field
        """
        return self._money_fields[(section, name)]

    def edit_money(self, section: str, name: str, text: str) -> bool:
        """Apply a raw edit to a money input. False if rejected."""
        return self.money_field(section, name).edit(text)

    @property
    def dob_field(self) -> DateField:
        return self._dob_field

    def set_full_name(self, value: str) -> None:
        self._record.basic.full_name = value

    def set_contact_number(self, value: str) -> None:
        self._record.basic.contact_number = value

    def set_gender(self, value: Gender) -> None:
        self._record.basic.gender = value

    def set_replacement_years(self, years: int) -> None:
        """
        Raises:
            ValueError: If years is not 3, 4 or 5
        """
        self._record.coverage.ci_income_replacement_years = ReplacementYears(years)

    def reset(self) -> None:
        """Start a new calculation with a blank form."""
        self._record = self._blank_record()
        self._resync_fields()
        self._activity.log_session_reset()

    # -------------------------------------------------------------------------
    # Derived values (recomputed on every read)
    # -------------------------------------------------------------------------

    @property
    def metrics(self) -> DerivedMetrics:
        return calculate_gap(self._record)

    @property
    def ratios(self) -> CoverageRatios:
        return coverage_ratios(self._record, self.metrics)

    @property
    def assessment(self) -> GapAssessment:
        return assess_gap(self.metrics)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def save(self) -> SavedRecord:
        """
        Save the current record under the client's full name.

        Raises:
            RecordValidationError: If the full name is empty
        """
        return self._store.save(self._record, self._record.basic.full_name)

    def load(self, record_id: str) -> bool:
        """
        Replace the form with a saved record.

        Returns:
            False if the record does not exist (form unchanged)
        """
        loaded = self._store.load(record_id)
        if loaded is None:
            return False
        self._record = loaded
        self._resync_fields()
        return True

    def history(self, query: str = "") -> list[SavedRecord]:
        return self._store.search(query)

    def delete(self, record_id: str, *, confirmed: bool) -> bool:
        return self._store.delete(record_id, confirmed=confirmed)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def snapshot(self) -> ExportSnapshot:
        return ExportSnapshot.capture(self._record)

    def export(self, adapter: ExportAdapter) -> ExportResult:
        """
        Hand a consistent snapshot to an export adapter.

        Adapter exceptions are converted into a failed ExportResult;
        the session never depends on the export succeeding.
        """
        snapshot = self.snapshot()
        filename = suggested_filename(snapshot, adapter.extension)

        try:
            result = adapter.export(snapshot)
        except Exception as e:
            self._activity.log_export_failed(filename, str(e))
            return ExportResult(
                success=False,
                filename=filename,
                error_message=str(e),
            )

        if result.success:
            self._activity.log_export_completed(result.filename, result.mime_type or "")
        else:
            self._activity.log_export_failed(
                result.filename, result.error_message or "unknown error"
            )
        return result


def create_record_storage(settings: Settings) -> RecordStorageInterface:
    """
    Build the configured storage backend.

    Falls back to in-memory storage if Google Sheets cannot be set up,
    so the calculator still works (without persistent history).
    """
    storage_settings = settings.storage
    logger = structlog.get_logger("gap_calculator.setup")

    if storage_settings.backend == "memory":
        return InMemoryRecordStorage()

    if storage_settings.backend == "google_sheets":
        try:
            from src.services.storage.google_sheets import (
                GoogleSheetsClient,
                GoogleSheetsRecordStorage,
            )
            return GoogleSheetsRecordStorage(GoogleSheetsClient(settings.google_sheets))
        except Exception as e:
            # Storage not configured - continue without it
            logger.warning("storage_not_configured", backend="google_sheets", error=str(e))
            return InMemoryRecordStorage()

    return JsonFileRecordStorage(storage_settings.json_path)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[RecordStorageInterface] = None,
) -> tuple[GapAnalysisSession, RecordStore]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (defaults to get_settings())
        storage: Explicit storage backend; overrides the configured one.
                 Pass InMemoryRecordStorage() for tests.

    Returns:
        (session, record_store)
    """
    settings = settings or get_settings()
    app_settings = settings.app
    configure_logging(app_settings.log_level)

    activity_logger = ActivityLogger()
    record_store = RecordStore(
        storage if storage is not None else create_record_storage(settings),
        activity_logger=activity_logger,
    )
    session = GapAnalysisSession(
        record_store,
        activity_logger=activity_logger,
        default_replacement_years=app_settings.default_replacement_years,
    )
    return session, record_store
