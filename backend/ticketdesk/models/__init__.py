"""Models module."""

from .ticket import (
    Ticket, TicketInput, TicketStats, TicketStatus, TicketPriority,
    TicketErrorCode, ValidationError
)
from .results import LoadError, PersistenceError, LoadResult, TicketResult, DeleteResult
from .session import Session, SessionState, AuthError, AuthResult

__all__ = [
    'Ticket', 'TicketInput', 'TicketStats', 'TicketStatus', 'TicketPriority',
    'TicketErrorCode', 'ValidationError',
    'LoadError', 'PersistenceError', 'LoadResult', 'TicketResult', 'DeleteResult',
    'Session', 'SessionState', 'AuthError', 'AuthResult'
]
