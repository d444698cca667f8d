"""
Local Filesystem Storage Implementation.
This implementation keeps one file per key in a base directory.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .interface import StorageError, StorageInterface

logger = logging.getLogger(__name__)


class LocalStorage(StorageInterface):
    """
    Local filesystem storage implementation.
    Each key maps to a UTF-8 file "<key>.json" inside the base directory.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Base directory for all stored records
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Convert a record key to a full absolute path within base directory."""
        full_path = (self.base_dir / f"{key}.json").resolve()

        # Security check: ensure path is within base_dir
        if full_path.parent != self.base_dir:
            raise StorageError(key, "invalid key - path traversal detected")

        return full_path

    def get(self, key: str) -> Optional[str]:
        """Load a record from the local filesystem."""
        full_path = self._get_full_path(key)
        if not full_path.exists():
            return None

        try:
            return full_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error loading record {key}: {e}")
            raise StorageError(key, str(e)) from e

    def set(self, key: str, value: str) -> None:
        """Save a record to the local filesystem, replacing it atomically."""
        full_path = self._get_full_path(key)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.base_dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(value)
                os.replace(tmp_name, full_path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error(f"Error saving record {key}: {e}")
            raise StorageError(key, str(e)) from e

    def remove(self, key: str) -> None:
        """Delete a record from the local filesystem."""
        full_path = self._get_full_path(key)
        try:
            full_path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Error deleting record {key}: {e}")
            raise StorageError(key, str(e)) from e
