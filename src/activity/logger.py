"""
Activity Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Traceability of saves, deletes and exports
2. Debugging capability
3. Visibility into degraded storage (corrupted history files)

The activity logger:
- Runs synchronously, in line with the rest of the core
- Never raises; a failing log call must not break a save or export
- Writes structured JSON lines through structlog
"""

import logging
from typing import Optional

import structlog

from src.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivitySeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog output to stderr at the given level.

    structlog hands rendered lines to the standard library, so the
    stdlib root logger decides what is actually emitted.
    """
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))


class ActivityLogger:
    """
    Central activity logging service.

    Logs typed events to the structured local log only.
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self._logger = logger or structlog.get_logger("gap_calculator.activity")

    def log(self, event: ActivityEvent) -> None:
        """Log an activity event at a level matching its severity."""
        log_dict = event.to_log_dict()

        try:
            if event.severity == ActivitySeverity.ERROR:
                self._logger.error("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.WARNING:
                self._logger.warning("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.DEBUG:
                self._logger.debug("activity_event", **log_dict)
            else:
                self._logger.info("activity_event", **log_dict)
        except Exception as e:
            # Log failure but don't raise
            logging.getLogger(__name__).error("activity log failed: %s", e)

    def log_record_saved(self, record_id: str, client_name: str) -> None:
        """Log a successful save."""
        self.log(ActivityEventBuilder.record_saved(record_id, client_name))

    def log_save_rejected(self, client_name: str, issues: list[dict]) -> None:
        """Log a save blocked by validation."""
        self.log(ActivityEventBuilder.save_rejected(client_name, issues))

    def log_record_deleted(self, record_id: str) -> None:
        """Log a confirmed delete."""
        self.log(ActivityEventBuilder.record_deleted(record_id))

    def log_delete_not_confirmed(self, record_id: str) -> None:
        """Log a delete that was requested but not confirmed."""
        self.log(ActivityEventBuilder.delete_not_confirmed(record_id))

    def log_record_loaded(self, record_id: str, client_name: str) -> None:
        """Log a record loaded back into the form."""
        self.log(ActivityEventBuilder.record_loaded(record_id, client_name))

    def log_search_executed(self, query: str, result_count: int) -> None:
        """Log a history search."""
        self.log(ActivityEventBuilder.search_executed(query, result_count))

    def log_storage_error(self, operation: str, error_message: str) -> None:
        """Log a storage backend failure."""
        self.log(ActivityEventBuilder.storage_error(operation, error_message))

    def log_export_completed(self, filename: str, mime_type: str) -> None:
        """Log a finished export."""
        self.log(ActivityEventBuilder.export_completed(filename, mime_type))

    def log_export_failed(self, filename: str, error_message: str) -> None:
        """Log a failed export."""
        self.log(ActivityEventBuilder.export_failed(filename, error_message))

    def log_session_reset(self) -> None:
        """Log a form reset."""
        self.log(ActivityEventBuilder.session_reset())
