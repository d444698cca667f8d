"""
Ticket API endpoints - CRUD over the shared ticket collection.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..core import TicketStore
from ..models import TicketInput, TicketResult
from .dependencies import get_ticket_store, require_session

router = APIRouter(
    prefix="/tickets",
    tags=["tickets"],
    dependencies=[Depends(require_session)],
)

PERSISTENCE_WARNING_HEADER = "X-Persistence-Warning"


def _ticket_response(result: TicketResult) -> dict:
    """Translate a TicketResult into a response body, raising on failure."""
    if result.not_found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ticket not found",
        )
    if result.errors:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=[error.model_dump(mode="json") for error in result.errors],
        )

    body = {"ticket": result.ticket.model_dump(mode="json", by_alias=True)}
    if result.persistence_error is not None:
        body["warning"] = result.persistence_error.message
    return body


@router.get("")
async def list_tickets(store: TicketStore = Depends(get_ticket_store)):
    """
    Reload and list all tickets.

    A corrupt stored collection comes back empty with loadError set.
    """
    result = store.load()
    return {
        "tickets": [ticket.model_dump(mode="json", by_alias=True) for ticket in result.tickets],
        "loadError": result.error.message if result.error else None,
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_ticket(data: TicketInput, store: TicketStore = Depends(get_ticket_store)):
    """
    Create a ticket.

    Raises:
        HTTPException: 422 listing every field error
    """
    return _ticket_response(store.create(data))


@router.put("/{ticket_id}")
async def update_ticket(
    ticket_id: int,
    data: TicketInput,
    store: TicketStore = Depends(get_ticket_store)
):
    """
    Replace a ticket's fields.

    Raises:
        HTTPException: 404 if the ticket does not exist, 422 listing every field error
    """
    return _ticket_response(store.update(ticket_id, data))


@router.delete("/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket(ticket_id: int, store: TicketStore = Depends(get_ticket_store)):
    """
    Delete a ticket.

    Raises:
        HTTPException: 404 if the ticket does not exist
    """
    result = store.delete(ticket_id)
    if result.not_found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ticket not found",
        )

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    if result.persistence_error is not None:
        response.headers[PERSISTENCE_WARNING_HEADER] = result.persistence_error.message
    return response
