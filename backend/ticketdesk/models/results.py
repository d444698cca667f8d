"""
Result Models - Structured outcomes of ticket store operations.
Failures are returned here rather than raised so callers can show every error at once.
"""

from typing import List, Optional
from pydantic import BaseModel

from .ticket import Ticket, ValidationError


class LoadError(BaseModel):
    """The persisted collection could not be read; the store fell back to empty."""
    message: str


class PersistenceError(BaseModel):
    """A write failed; in-memory state was kept."""
    message: str


class LoadResult(BaseModel):
    """Outcome of TicketStore.load()."""
    tickets: List[Ticket]
    error: Optional[LoadError] = None


class TicketResult(BaseModel):
    """Outcome of TicketStore.create() / TicketStore.update()."""
    ticket: Optional[Ticket] = None
    errors: List[ValidationError] = []
    not_found: bool = False
    persistence_error: Optional[PersistenceError] = None

    @property
    def success(self) -> bool:
        return self.ticket is not None

    @property
    def error_codes(self) -> list:
        return [error.code for error in self.errors]


class DeleteResult(BaseModel):
    """Outcome of TicketStore.delete()."""
    success: bool
    not_found: bool = False
    persistence_error: Optional[PersistenceError] = None
