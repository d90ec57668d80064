"""Services package."""

from src.services.export import (
    CsvReportAdapter,
    ExportAdapter,
    ExportError,
    ExportResult,
    ExportSnapshot,
)
from src.services.records import RecordStore, RecordValidationError
from src.services.storage import (
    DuplicateError,
    InMemoryRecordStorage,
    JsonFileRecordStorage,
    RecordStorageInterface,
    StorageConnectionError,
    StorageError,
)

__all__ = [
    # Export
    "CsvReportAdapter",
    "ExportAdapter",
    "ExportError",
    "ExportResult",
    "ExportSnapshot",
    # History
    "RecordStore",
    "RecordValidationError",
    # Storage
    "DuplicateError",
    "InMemoryRecordStorage",
    "JsonFileRecordStorage",
    "RecordStorageInterface",
    "StorageConnectionError",
    "StorageError",
]
