"""
Saved Record Model

A saved record is a named, timestamped, immutable snapshot of a
FinancialRecord kept in the client history.

DESIGN DECISION: Saved records are never updated in place. Saving the
same client again creates a new entry, so history is preserved. The
only way to remove an entry is an explicit, confirmed delete.

Wire format (one entry of the persisted collection):
    {"id": str, "timestamp": int epoch ms, "clientName": str, "data": {...}}
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

from src.models.record import FinancialRecord


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_utc() -> datetime:
    """Current instant, truncated to the millisecond precision we persist."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def new_record_id() -> str:
    return str(uuid4())


class SavedRecord(BaseModel):
    """
    One entry in the client history.

    CRITICAL: Only the RecordStore creates these, and only on an
    explicit save. The data snapshot is a deep copy taken at save time.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: str = Field(
        default_factory=new_record_id,
        min_length=1,
        description="Opaque unique identifier"
    )
    timestamp: datetime = Field(
        default_factory=now_utc,
        description="When the record was saved (UTC)"
    )
    client_name: str = Field(
        ...,
        description="Copy of basic.full_name at save time"
    )
    data: FinancialRecord = Field(
        ...,
        description="Snapshot of the record as saved"
    )

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_epoch_millis(cls, v):
        """Accept integer epoch milliseconds as stored on disk."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return EPOCH + timedelta(milliseconds=v)
        if isinstance(v, datetime) and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_serializer("timestamp")
    def serialize_epoch_millis(self, v: datetime) -> int:
        return (v - EPOCH) // timedelta(milliseconds=1)

    @property
    def contact_number(self) -> str:
        return self.data.basic.contact_number

    def matches(self, query: str) -> bool:
        """
        Search predicate.

        Client name matches case-insensitively, contact number as a
        literal substring. An empty query matches everything.
        """
        if not query:
            return True
        return (
            query.lower() in self.client_name.lower()
            or query in self.contact_number
        )

    def to_wire(self) -> dict:
        """Dump in the persisted collection layout."""
        return self.model_dump(mode="json", by_alias=True)
