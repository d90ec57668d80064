"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is offered as a shared history backend:
1. Advisors can browse saved clients directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)

TRADEOFFS:
- Not suitable for high-volume data (one advisor's client book is fine)
- No transactions (single writer is assumed)
- Limited query capabilities (we filter in Python)

Layout: one row per saved record, newest directly under the header.
The FinancialRecord is stored as camelCase JSON in the last column.
"""

import json
from typing import Optional

import gspread
import structlog
from google.oauth2.service_account import Credentials
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.config import get_settings
from src.config.settings import GoogleSheetsSettings
from src.models.history import SavedRecord
from src.services.storage.interface import (
    DuplicateError,
    RecordStorageInterface,
    StorageConnectionError,
    StorageError,
)


# Column mappings for the history sheet
RECORD_COLUMNS = [
    "id",
    "timestamp",
    "clientName",
    "data_json",
]

# Row 1 is the header
FIRST_DATA_ROW = 2


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise StorageConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise StorageConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise StorageConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def get_records_sheet(self) -> gspread.Worksheet:
        """Get or create the history worksheet."""
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(self._settings.records_sheet_name)
        except gspread.WorksheetNotFound:
            # Create the sheet with headers
            sheet = spreadsheet.add_worksheet(
                title=self._settings.records_sheet_name,
                rows=1000,
                cols=len(RECORD_COLUMNS),
            )
            sheet.append_row(RECORD_COLUMNS)
        return sheet


def record_to_row(record: SavedRecord) -> list:
    """Convert a SavedRecord to a spreadsheet row."""
    wire = record.to_wire()
    return [
        wire["id"],
        str(wire["timestamp"]),
        wire["clientName"],
        json.dumps(wire["data"], ensure_ascii=False),
    ]


def row_to_record(row: list) -> SavedRecord:
    """
    Convert a spreadsheet row to a SavedRecord.

    Raises:
        ValueError: If the row is malformed (pydantic's ValidationError
            and json's JSONDecodeError are both ValueErrors)
    """
    if len(row) < len(RECORD_COLUMNS):
        raise ValueError(f"Expected {len(RECORD_COLUMNS)} columns, got {len(row)}")

    return SavedRecord.model_validate({
        "id": row[0],
        "timestamp": int(row[1]),
        "clientName": row[2],
        "data": json.loads(row[3]),
    })


class GoogleSheetsRecordStorage(RecordStorageInterface):
    """
    Google Sheets implementation of saved-record storage.

    Malformed rows are skipped with a warning, mirroring how the file
    backend degrades a corrupted collection.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()
        self._logger = structlog.get_logger("gap_calculator.storage").bind(
            backend="google_sheets",
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _fetch_rows(self) -> list[list]:
        """All data rows, header excluded."""
        sheet = self._client.get_records_sheet()
        return sheet.get_all_values()[1:]

    def _find_row_index(self, record_id: str) -> Optional[int]:
        for idx, row in enumerate(self._fetch_rows(), start=FIRST_DATA_ROW):
            if row and row[0] == record_id:
                return idx
        return None

    def get(self, record_id: str) -> Optional[SavedRecord]:
        for record in self.list():
            if record.id == record_id:
                return record
        return None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_not_exception_type(DuplicateError),
        reraise=True,
    )
    def put(self, record: SavedRecord) -> None:
        """Insert a saved record directly below the header."""
        try:
            if self._find_row_index(record.id) is not None:
                raise DuplicateError(f"Record already exists: {record.id}")
            sheet = self._client.get_records_sheet()
            sheet.insert_row(
                record_to_row(record),
                index=FIRST_DATA_ROW,
                value_input_option="RAW",
            )
        except DuplicateError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save record: {e}")

    def delete(self, record_id: str) -> bool:
        """Delete a saved record by ID."""
        try:
            idx = self._find_row_index(record_id)
            if idx is None:
                return False
            self._client.get_records_sheet().delete_rows(idx)
            return True
        except Exception as e:
            raise StorageError(f"Failed to delete record: {e}")

    def list(self) -> list[SavedRecord]:
        """All saved records in sheet order (newest first)."""
        try:
            rows = self._fetch_rows()
        except Exception as e:
            self._logger.error("history_read_failed", error=str(e))
            return []

        records = []
        for row_number, row in enumerate(rows, start=FIRST_DATA_ROW):
            if not row or not row[0]:  # Skip empty rows
                continue
            try:
                records.append(row_to_record(row))
            except (ValueError, ValidationError) as e:
                self._logger.warning(
                    "history_row_skipped",
                    row=row_number,
                    error=str(e),
                )
        return records
