"""Core module - contains the session manager and ticket store."""

from .session_manager import SessionManager
from .ticket_store import TicketStore, validate_ticket_input

__all__ = ['SessionManager', 'TicketStore', 'validate_ticket_input']
