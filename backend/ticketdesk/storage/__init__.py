"""Storage module - provides interface and implementations for record persistence."""

from .interface import StorageInterface, StorageError
from .local_storage import LocalStorage
from .memory_storage import MemoryStorage
from .factory import create_storage

__all__ = ['StorageInterface', 'StorageError', 'LocalStorage', 'MemoryStorage', 'create_storage']
