"""Export adapter interface package."""

from src.services.export.interface import (
    ExportAdapter,
    ExportError,
    ExportResult,
    ExportSnapshot,
    suggested_filename,
)
from src.services.export.csv_report import CsvReportAdapter

__all__ = [
    "CsvReportAdapter",
    "ExportAdapter",
    "ExportError",
    "ExportResult",
    "ExportSnapshot",
    "suggested_filename",
]
