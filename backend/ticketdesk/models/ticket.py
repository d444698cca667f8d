"""
Ticket Models - Defines the ticket record, caller input, and validation codes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class TicketStatus(str, Enum):
    """Lifecycle status of a ticket."""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


class TicketPriority(str, Enum):
    """Ticket priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TicketErrorCode(str, Enum):
    """Structured error codes returned by the ticket store."""
    TITLE_REQUIRED = "title_required"
    TITLE_TOO_LONG = "title_too_long"
    DESCRIPTION_TOO_LONG = "description_too_long"
    INVALID_STATUS = "invalid_status"
    INVALID_PRIORITY = "invalid_priority"
    NOT_FOUND = "not_found"


class ValidationError(BaseModel):
    """A single field-level validation failure."""
    field: str
    code: TicketErrorCode


class TicketInput(BaseModel):
    """
    Mutable ticket fields supplied by a caller on create/update.

    Status and priority stay plain strings here so that unknown values
    reach validation and come back as error codes.
    """
    title: Optional[str] = ""
    description: Optional[str] = ""
    status: Optional[str] = TicketStatus.OPEN.value
    priority: Optional[str] = TicketPriority.MEDIUM.value


class Ticket(BaseModel):
    """Ticket as held in memory and persisted in the tickets record."""
    id: int
    title: str
    description: str = ""
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        populate_by_name = True

    @field_validator("description", mode="before")
    @classmethod
    def _empty_description(cls, value):
        return value or ""

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, value):
        # Older records were written without a priority
        return value or TicketPriority.MEDIUM

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class TicketStats(BaseModel):
    """Ticket counts by status."""
    total: int = 0
    open: int = 0
    in_progress: int = Field(default=0, alias="inProgress")
    closed: int = 0

    class Config:
        populate_by_name = True
