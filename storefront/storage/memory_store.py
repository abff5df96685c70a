"""
In-memory key/value store.

Holds serialized values in a plain dictionary. A single instance shared by
several cart stores behaves like browser storage shared by several tabs: every
session reads and writes the same keys with no coordination between them.
"""

from typing import Dict, Optional

import structlog

from .key_value_store import IKeyValueStore

logger = structlog.get_logger(__name__)


class MemoryKeyValueStore(IKeyValueStore):
    """
    Dictionary-backed store.

    Attributes:
        data: Mapping of key to serialized value
        reads: Number of get_item calls
        writes: Number of set_item calls
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        """
        Initialize memory store.

        Args:
            initial: Optional values to pre-populate the store with
        """
        self.data: Dict[str, str] = dict(initial or {})
        self.reads = 0
        self.writes = 0

    def get_item(self, key: str) -> Optional[str]:
        self.reads += 1
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value
        logger.debug("store_write", key=key, size=len(value))

    def remove_item(self, key: str) -> None:
        self.data.pop(key, None)

    def clear(self) -> None:
        """Remove every key."""
        count = len(self.data)
        self.data.clear()
        logger.info("store_cleared", count=count)

    def get_stats(self) -> Dict[str, int]:
        """
        Get store statistics.

        Returns:
            Dictionary with key count and read/write counters
        """
        return {
            "keys": len(self.data),
            "reads": self.reads,
            "writes": self.writes,
        }
