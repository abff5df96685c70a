"""Persisted store implementations."""

from .file_store import FileKeyValueStore
from .key_value_store import IKeyValueStore
from .memory_store import MemoryKeyValueStore

__all__ = ["FileKeyValueStore", "IKeyValueStore", "MemoryKeyValueStore"]
