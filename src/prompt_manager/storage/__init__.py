"""Storage adapters for prompt text and parameter history."""

from prompt_manager.storage.base import ID_PATTERN, PromptRecord, StorageAdapter, validate_id
from prompt_manager.storage.filesystem import FileSystemAdapter
from prompt_manager.storage.memory import InMemoryAdapter

__all__ = [
    "ID_PATTERN",
    "FileSystemAdapter",
    "InMemoryAdapter",
    "PromptRecord",
    "StorageAdapter",
    "validate_id",
]
