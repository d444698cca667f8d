"""
In-memory Storage Implementation.
Records live in a plain dict for the lifetime of the process.
"""

from typing import Dict, Optional

from .interface import StorageInterface


class MemoryStorage(StorageInterface):
    """Dict-backed storage, used for tests and ephemeral runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._records: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._records.get(key)

    def set(self, key: str, value: str) -> None:
        self._records[key] = value

    def remove(self, key: str) -> None:
        self._records.pop(key, None)

    def keys(self) -> list[str]:
        """List stored keys."""
        return sorted(self._records)
