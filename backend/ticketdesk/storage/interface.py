"""
Storage Interface - Abstract base class for all key-value storage implementations.
This interface lets the session and ticket stores run against files, memory, etc.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Raised by storage implementations when the backend cannot be read or written."""

    def __init__(self, key: str, message: str):
        self.key = key
        self.message = message
        super().__init__(f"{key}: {message}")


class StorageInterface(ABC):
    """
    Abstract storage interface that defines the contract for all storage implementations.
    Every record is a string value stored under a string key.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Load the value stored under a key.

        Args:
            key: Record key (e.g., "ticketapp_tickets")

        Returns:
            Optional[str]: Stored value, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Record key
            value: Serialized record

        Raises:
            StorageError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Remove the value stored under a key. Removing an absent key is a no-op.

        Args:
            key: Record key

        Raises:
            StorageError: If the backend cannot be written
        """
        pass
