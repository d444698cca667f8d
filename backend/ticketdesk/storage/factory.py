"""
Storage Factory - Creates the configured storage backend.
"""

from .interface import StorageInterface
from .local_storage import LocalStorage
from .memory_storage import MemoryStorage


def create_storage(storage_type: str = "local", local_storage_path: str = "./data") -> StorageInterface:
    """
    Create a storage instance based on configuration.

    Args:
        storage_type: Backend name ("local" or "memory")
        local_storage_path: Base directory for the local backend

    Returns:
        StorageInterface instance
    """
    if storage_type == "local":
        return LocalStorage(local_storage_path)

    elif storage_type == "memory":
        return MemoryStorage()

    else:
        raise ValueError(f"Unsupported storage type: {storage_type}")
