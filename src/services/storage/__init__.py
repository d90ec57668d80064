"""
Storage Services Package

Provides the abstract record storage interface and its implementations:
in-memory (tests), a JSON file (default), and Google Sheets.
"""

from src.services.storage.interface import (
    DuplicateError,
    RecordStorageInterface,
    StorageConnectionError,
    StorageError,
)
from src.services.storage.memory import InMemoryRecordStorage
from src.services.storage.json_file import JsonFileRecordStorage

__all__ = [
    # Interface
    "RecordStorageInterface",
    # Exceptions
    "DuplicateError",
    "StorageConnectionError",
    "StorageError",
    # Implementations
    "InMemoryRecordStorage",
    "JsonFileRecordStorage",
]
