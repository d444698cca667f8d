"""
API dependencies - access to the application's session manager and ticket store.
"""

from fastapi import Depends, HTTPException, Request, status

from ..core import SessionManager, TicketStore
from ..models import Session


def get_session_manager(request: Request) -> SessionManager:
    """Session manager owned by the running application."""
    return request.app.state.session_manager


def get_ticket_store(request: Request) -> TicketStore:
    """Ticket store owned by the running application."""
    return request.app.state.ticket_store


def require_session(
    session_manager: SessionManager = Depends(get_session_manager)
) -> Session:
    """
    Dependency to gate protected routes on an active, non-expired session.

    Raises:
        HTTPException: 401 if anonymous, telling the client to show the auth view
    """
    session = session_manager.current_session()
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return session


def serialize_session(session: Session) -> dict:
    """Session as it appears on the wire (camelCase keys)."""
    return session.model_dump(mode="json", by_alias=True)
