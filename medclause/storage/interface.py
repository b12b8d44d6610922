"""
Storage Interface - Abstract key/value storage behind the application state.
"""

from abc import ABC, abstractmethod
from typing import Optional, List


class StorageInterface(ABC):
    """
    Abstract key/value storage.
    Keys are relative paths (e.g. "state/userData"); values are text.
    """

    @abstractmethod
    async def save(self, key: str, content: str) -> bool:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Storage key
            content: Text to store

        Returns:
            bool: True if the value was written
        """
        pass

    @abstractmethod
    async def load(self, key: str) -> Optional[str]:
        """
        Load the value stored under a key.

        Returns:
            Optional[str]: Stored text, or None if the key is absent
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether a key is present."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            bool: True if a value was removed
        """
        pass

    @abstractmethod
    async def list(self, prefix: str = "") -> List[str]:
        """List the keys stored below a prefix."""
        pass
