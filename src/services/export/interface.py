"""
Export Adapter Interface

Report renderers (spreadsheet, PDF) live outside the core. The core's
only job is to hand them a consistent snapshot and read back a
success / failure signal.

CRITICAL: An ExportSnapshot can only be captured from a record; its
metrics are computed from that exact copy. A renderer can never be
given metrics that disagree with the record beside them.
"""

import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.calculation import calculate_gap
from src.models.history import now_utc
from src.models.record import FinancialRecord
from src.models.results import DerivedMetrics


class ExportError(Exception):
    """Raised by an adapter when rendering fails."""
    pass


class ExportSnapshot(BaseModel):
    """Immutable (record, metrics) pair handed to an export adapter."""
    model_config = ConfigDict(frozen=True)

    record: FinancialRecord
    metrics: DerivedMetrics
    generated_at: datetime = Field(default_factory=now_utc)

    @classmethod
    def capture(cls, record: FinancialRecord) -> "ExportSnapshot":
        """Copy `record` and compute its metrics from the copy."""
        frozen_record = record.model_copy(deep=True)
        return cls(record=frozen_record, metrics=calculate_gap(frozen_record))


class ExportResult(BaseModel):
    """Completion / failure signal from an adapter."""

    success: bool
    filename: str
    content: Optional[bytes] = None
    mime_type: Optional[str] = None
    error_message: Optional[str] = None


class ExportAdapter(ABC):
    """
    A renderer that turns a snapshot into a downloadable artifact.

    Implementations may raise ExportError (or anything else); the
    session converts exceptions into a failed ExportResult.
    """

    #: File extension without the dot, e.g. "xlsx"
    extension: str = "bin"

    @abstractmethod
    def export(self, snapshot: ExportSnapshot) -> ExportResult:
        pass


def suggested_filename(snapshot: ExportSnapshot, extension: str) -> str:
    """
    "<Client_Name>_Analysis.<ext>", with whitespace runs turned into "_".

    Falls back to "Client" when the name is blank.
    """
    name = re.sub(r"\s+", "_", snapshot.record.basic.full_name.strip()) or "Client"
    return f"{name}_Analysis.{extension}"
