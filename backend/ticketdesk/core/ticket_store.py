"""
Ticket Store - Validated CRUD over the ticket collection.
The whole collection is held in memory and written back as one record on every change.
"""

import logging
from typing import List, Optional

import pydantic

from ..config import settings
from ..models import (
    DeleteResult,
    LoadError,
    LoadResult,
    PersistenceError,
    Ticket,
    TicketErrorCode,
    TicketInput,
    TicketPriority,
    TicketResult,
    TicketStats,
    TicketStatus,
    ValidationError,
)
from ..storage import StorageError, StorageInterface
from ..utils.clock import Clock, next_id, utc_now

logger = logging.getLogger(__name__)

_TicketList = pydantic.TypeAdapter(List[Ticket])

STATUS_VALUES = {status.value for status in TicketStatus}
PRIORITY_VALUES = {priority.value for priority in TicketPriority}


def validate_ticket_input(
    data: TicketInput,
    title_max_length: Optional[int] = None,
    description_max_length: Optional[int] = None
) -> List[ValidationError]:
    """
    Check every field of a ticket input.

    Args:
        data: Caller supplied fields
        title_max_length: Maximum title length (defaults to settings)
        description_max_length: Maximum description length (defaults to settings)

    Returns:
        List[ValidationError]: All violations, empty if the input is valid
    """
    if title_max_length is None:
        title_max_length = settings.title_max_length
    if description_max_length is None:
        description_max_length = settings.description_max_length

    errors: List[ValidationError] = []
    title = data.title or ""
    description = data.description or ""

    if not title.strip():
        errors.append(ValidationError(field="title", code=TicketErrorCode.TITLE_REQUIRED))
    elif len(title) > title_max_length:
        errors.append(ValidationError(field="title", code=TicketErrorCode.TITLE_TOO_LONG))

    if len(description) > description_max_length:
        errors.append(ValidationError(field="description", code=TicketErrorCode.DESCRIPTION_TOO_LONG))

    if data.status not in STATUS_VALUES:
        errors.append(ValidationError(field="status", code=TicketErrorCode.INVALID_STATUS))

    if data.priority not in PRIORITY_VALUES:
        errors.append(ValidationError(field="priority", code=TicketErrorCode.INVALID_PRIORITY))

    return errors


def _find_invariant_violation(tickets: List[Ticket]) -> Optional[str]:
    """Describe the first repeated id or createdAt > updatedAt in a collection, if any."""
    seen = set()
    for ticket in tickets:
        if ticket.id in seen:
            return f"duplicate id {ticket.id}"
        seen.add(ticket.id)
        if ticket.created_at > ticket.updated_at:
            return f"ticket {ticket.id} updated before it was created"
    return None


class TicketStore:
    """
    Owns the ticket collection and is the only writer of its persisted record.
    """

    def __init__(
        self,
        storage: StorageInterface,
        clock: Clock = utc_now,
        storage_key: Optional[str] = None
    ):
        """
        Initialize the ticket store.

        Args:
            storage: Storage implementation holding the tickets record
            clock: Time source returning aware UTC datetimes
            storage_key: Record key (defaults to settings.tickets_storage_key)
        """
        self.storage = storage
        self.clock = clock
        self.storage_key = storage_key or settings.tickets_storage_key
        self._tickets: List[Ticket] = []
        self._last_id = 0

    @property
    def tickets(self) -> List[Ticket]:
        """Copy of the in-memory collection, in creation order."""
        return list(self._tickets)

    def list_tickets(self) -> List[Ticket]:
        return self.tickets

    def get(self, ticket_id: int) -> Optional[Ticket]:
        """Get a ticket by id, or None."""
        index = self._index_of(ticket_id)
        return self._tickets[index] if index is not None else None

    def load(self) -> LoadResult:
        """
        Replace the in-memory collection with the persisted one.

        A missing record yields an empty collection. An unreadable or corrupt
        record also yields an empty collection, with the reason in result.error.

        Returns:
            LoadResult: Loaded tickets and optional LoadError
        """
        try:
            raw = self.storage.get(self.storage_key)
        except StorageError as e:
            logger.error(f"Error loading tickets: {e}")
            self._tickets = []
            return LoadResult(tickets=[], error=LoadError(message=str(e)))

        if raw is None:
            self._tickets = []
            return LoadResult(tickets=[])

        try:
            tickets = _TicketList.validate_json(raw)
        except pydantic.ValidationError as e:
            logger.error(f"Error loading tickets: corrupt record ({e.error_count()} error(s))")
            self._tickets = []
            return LoadResult(tickets=[], error=LoadError(message="Stored tickets could not be parsed"))

        problem = _find_invariant_violation(tickets)
        if problem is not None:
            logger.error(f"Error loading tickets: corrupt record ({problem})")
            self._tickets = []
            return LoadResult(tickets=[], error=LoadError(message=f"Stored tickets are inconsistent: {problem}"))

        self._tickets = tickets
        logger.debug(f"Loaded {len(tickets)} ticket(s)")
        return LoadResult(tickets=self.tickets)

    def create(self, data: TicketInput) -> TicketResult:
        """
        Validate and add a new ticket.

        Args:
            data: Ticket fields

        Returns:
            TicketResult: The new ticket, or every validation error
        """
        errors = validate_ticket_input(data)
        if errors:
            return TicketResult(errors=errors)

        now = self.clock()
        last_id = max((ticket.id for ticket in self._tickets), default=0)
        ticket = Ticket(
            id=next_id(now, max(last_id, self._last_id)),
            title=data.title,
            description=data.description or "",
            status=TicketStatus(data.status),
            priority=TicketPriority(data.priority),
            created_at=now,
            updated_at=now,
        )

        self._tickets.append(ticket)
        self._last_id = ticket.id
        logger.info(f"Created ticket {ticket.id}")
        return TicketResult(ticket=ticket, persistence_error=self._save())

    def update(self, ticket_id: int, data: TicketInput) -> TicketResult:
        """
        Replace the mutable fields of an existing ticket.

        Args:
            ticket_id: Ticket id
            data: New ticket fields

        Returns:
            TicketResult: The updated ticket, not_found, or every validation error
        """
        index = self._index_of(ticket_id)
        if index is None:
            return TicketResult(not_found=True)

        errors = validate_ticket_input(data)
        if errors:
            return TicketResult(errors=errors)

        current = self._tickets[index]
        ticket = Ticket(
            id=current.id,
            title=data.title,
            description=data.description or "",
            status=TicketStatus(data.status),
            priority=TicketPriority(data.priority),
            created_at=current.created_at,
            updated_at=max(self.clock(), current.updated_at),
        )

        self._tickets[index] = ticket
        logger.info(f"Updated ticket {ticket.id}")
        return TicketResult(ticket=ticket, persistence_error=self._save())

    def delete(self, ticket_id: int) -> DeleteResult:
        """
        Remove a ticket.

        Args:
            ticket_id: Ticket id

        Returns:
            DeleteResult: success, or not_found if no ticket has that id
        """
        index = self._index_of(ticket_id)
        if index is None:
            return DeleteResult(success=False, not_found=True)

        del self._tickets[index]
        logger.info(f"Deleted ticket {ticket_id}")
        return DeleteResult(success=True, persistence_error=self._save())

    def stats(self) -> TicketStats:
        """Count tickets by status."""
        stats = TicketStats(total=len(self._tickets))
        for ticket in self._tickets:
            if ticket.status == TicketStatus.OPEN:
                stats.open += 1
            elif ticket.status == TicketStatus.IN_PROGRESS:
                stats.in_progress += 1
            else:
                stats.closed += 1
        return stats

    def _index_of(self, ticket_id: int) -> Optional[int]:
        for index, ticket in enumerate(self._tickets):
            if ticket.id == ticket_id:
                return index
        return None

    def _save(self) -> Optional[PersistenceError]:
        """Write the whole collection. In-memory state is kept if the write fails."""
        try:
            payload = _TicketList.dump_json(self._tickets, by_alias=True).decode('utf-8')
            self.storage.set(self.storage_key, payload)
        except (StorageError, ValueError) as e:
            logger.error(f"Error saving tickets: {e}")
            return PersistenceError(message=str(e))
        return None
