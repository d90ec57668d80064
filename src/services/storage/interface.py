"""
Abstract Storage Interface

DESIGN DECISION: The saved-record collection sits behind an abstract
interface instead of ambient global state. This allows us to:
1. Keep history in a JSON file, Google Sheets, or a real database
2. Use in-memory storage for testing
3. Keep the RecordStore logic decoupled from storage implementation

The interface is intentionally simple - a mapping of id to SavedRecord
with get / put / delete / list. Ordering is part of the contract:
put() prepends, list() returns most recent first.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.models.history import SavedRecord


class RecordStorageInterface(ABC):
    """
    Abstract interface for saved-record storage.

    Any storage implementation (JSON file, Google Sheets, etc.)
    must implement these methods.
    """

    @abstractmethod
    def get(self, record_id: str) -> Optional[SavedRecord]:
        """
        Retrieve a saved record by its ID.

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    def put(self, record: SavedRecord) -> None:
        """
        Add a new record at the front of the collection and persist it.

        Raises:
            DuplicateError: If a record with the same ID exists
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """
        Remove the record with this ID.

        Returns:
            True if a record was removed, False if the ID was absent
        """
        pass

    @abstractmethod
    def list(self) -> list[SavedRecord]:
        """
        All saved records, most recent first.

        A corrupted or unreadable collection is returned as empty.
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a record whose ID already exists."""
    pass


class StorageConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
