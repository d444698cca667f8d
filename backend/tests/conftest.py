"""
Shared test fixtures and configuration.
"""

import pytest
import os
from datetime import datetime, timedelta, timezone

# Set test environment variables before importing app modules
os.environ.setdefault("STORAGE_TYPE", "memory")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("DEBUG", "true")

from ticketdesk.core import SessionManager, TicketStore  # noqa: E402
from ticketdesk.storage import MemoryStorage, StorageError  # noqa: E402


class FakeClock:
    """Controllable time source."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FlakyStorage(MemoryStorage):
    """Memory storage whose operations can be switched to fail."""

    def __init__(self):
        super().__init__()
        self.fail_get = False
        self.fail_set = False
        self.fail_remove = False

    def get(self, key):
        if self.fail_get:
            raise StorageError(key, "backend unavailable")
        return super().get(key)

    def set(self, key, value):
        if self.fail_set:
            raise StorageError(key, "quota exceeded")
        super().set(key, value)

    def remove(self, key):
        if self.fail_remove:
            raise StorageError(key, "backend unavailable")
        super().remove(key)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def flaky_storage():
    return FlakyStorage()


@pytest.fixture
def session_manager(storage, clock):
    manager = SessionManager(storage, clock=clock)
    manager.start()
    return manager


@pytest.fixture
def ticket_store(storage, clock):
    store = TicketStore(storage, clock=clock)
    store.load()
    return store
