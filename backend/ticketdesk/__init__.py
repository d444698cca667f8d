"""TicketDesk - support ticket tracker with demo login sessions."""

__version__ = "1.0.0"
