"""
Activity Event Models

Significant actions (saving, deleting, loading, exporting) are emitted
as typed events and written to the structured log.

DESIGN DECISION: Events are logged locally only. The saved history
itself is the only record kept of past computations, so nothing here
is persisted.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """
    Types of events we log.

    Each step of the save / load / export flow has its own event type.
    """
    # History
    RECORD_SAVED = "record_saved"
    SAVE_REJECTED = "save_rejected"
    RECORD_DELETED = "record_deleted"
    DELETE_NOT_CONFIRMED = "delete_not_confirmed"
    RECORD_LOADED = "record_loaded"
    SEARCH_EXECUTED = "search_executed"

    # Storage health
    STORAGE_ERROR = "storage_error"

    # Export
    EXPORT_COMPLETED = "export_completed"
    EXPORT_FAILED = "export_failed"

    # Session
    SESSION_RESET = "session_reset"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """
    A single activity event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: ActivityEventType = Field(
        ...,
        description="Type of event"
    )
    severity: ActivitySeverity = Field(
        default=ActivitySeverity.INFO,
        description="Event severity"
    )

    # Context - which saved record is this about?
    record_id: Optional[str] = Field(
        default=None,
        description="ID of the saved record this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "record_id": self.record_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.record_saved(record_id, client_name)
        event = ActivityEventBuilder.export_failed(filename, error)
    """

    @staticmethod
    def record_saved(record_id: str, client_name: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.RECORD_SAVED,
            record_id=record_id,
            description=f"Record saved for client: {client_name}",
            details={"client_name": client_name},
            is_user_action=True,
        )

    @staticmethod
    def save_rejected(client_name: str, issues: list[dict]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SAVE_REJECTED,
            severity=ActivitySeverity.WARNING,
            description=f"Save rejected with {len(issues)} issues",
            details={
                "client_name": client_name,
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def record_deleted(record_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.RECORD_DELETED,
            record_id=record_id,
            description="Record deleted from history",
            is_user_action=True,
        )

    @staticmethod
    def delete_not_confirmed(record_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DELETE_NOT_CONFIRMED,
            severity=ActivitySeverity.WARNING,
            record_id=record_id,
            description="Delete requested without confirmation; nothing removed",
        )

    @staticmethod
    def record_loaded(record_id: str, client_name: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.RECORD_LOADED,
            record_id=record_id,
            description=f"Record loaded for client: {client_name}",
            details={"client_name": client_name},
            is_user_action=True,
        )

    @staticmethod
    def search_executed(query: str, result_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SEARCH_EXECUTED,
            severity=ActivitySeverity.DEBUG,
            description=f"History search returned {result_count} results",
            details={
                "query": query,
                "result_count": result_count,
            },
        )

    @staticmethod
    def storage_error(operation: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORAGE_ERROR,
            severity=ActivitySeverity.ERROR,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={"operation": operation},
        )

    @staticmethod
    def export_completed(filename: str, mime_type: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPORT_COMPLETED,
            description=f"Export completed: {filename}",
            details={
                "filename": filename,
                "mime_type": mime_type,
            },
            is_user_action=True,
        )

    @staticmethod
    def export_failed(filename: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPORT_FAILED,
            severity=ActivitySeverity.ERROR,
            description=f"Export failed: {filename}",
            error_message=error_message,
            details={"filename": filename},
        )

    @staticmethod
    def session_reset() -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SESSION_RESET,
            description="Form reset to a blank record",
            is_user_action=True,
        )
