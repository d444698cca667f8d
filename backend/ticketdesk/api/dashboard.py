"""
Dashboard API endpoint - ticket statistics for the signed-in user.
"""

from fastapi import APIRouter, Depends

from ..core import TicketStore
from ..models import Session
from .dependencies import get_ticket_store, require_session, serialize_session

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
async def get_dashboard(
    session: Session = Depends(require_session),
    store: TicketStore = Depends(get_ticket_store)
):
    """Reload tickets and return counts by status."""
    result = store.load()
    return {
        "session": serialize_session(session),
        "stats": store.stats().model_dump(by_alias=True),
        "loadError": result.error.message if result.error else None,
    }
