"""
Persisted store interface (Abstract Base Class).

Defines the string key/value contract the cart store persists through,
independent of where the values actually live.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IKeyValueStore(ABC):
    """
    Abstract key/value store holding serialized strings.

    Implementations raise ``StorageDecodeException`` when a stored value
    exists but cannot be read and ``StorageWriteException`` when a write is
    refused. Absent keys are not an error: ``get_item`` returns None.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the raw value stored under key.

        Args:
            key: Storage key

        Returns:
            Stored string, or None when the key is absent
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Replace the value stored under key.

        Args:
            key: Storage key
            value: Serialized value
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Delete key if present.

        Args:
            key: Storage key
        """
        pass
