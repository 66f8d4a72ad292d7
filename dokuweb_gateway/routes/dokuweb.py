"""
Doku@WEB API Routes

Thin adapter over DokuwebClient: every request builds its own client from
configured credentials, authenticates, runs one operation and returns the
result as JSON.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import AsyncIterator

from dokuweb_gateway.config import Settings, get_settings
from dokuweb_gateway.exceptions import (
    AuthenticationError,
    DokuwebError,
    ElementNotFoundError,
    PreconditionError,
)
from dokuweb_gateway.models.ticket import CreateTicketRequest
from dokuweb_gateway.services.dokuweb import DokuwebClient
from dokuweb_gateway.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/dokuweb", tags=["dokuweb"])


async def get_dokuweb_client(
    settings: Settings = Depends(get_settings)
) -> AsyncIterator[DokuwebClient]:
    """Per-request client built from settings"""
    if not settings.dokuweb_configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Doku@WEB credentials not configured"
        )

    client = DokuwebClient.from_settings(settings)
    try:
        yield client
    finally:
        await client.aclose()


def to_http_exception(error: DokuwebError) -> HTTPException:
    """Map a client error onto an HTTP status"""
    if isinstance(error, AuthenticationError):
        code = (
            status.HTTP_401_UNAUTHORIZED
            if error.status_code in (401, 403)
            else status.HTTP_502_BAD_GATEWAY
        )
    elif isinstance(error, ElementNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, PreconditionError):
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        code = status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail=str(error))


@router.get("/token")
async def get_token(client: DokuwebClient = Depends(get_dokuweb_client)):
    """
    Fetch a fresh auth token
    """
    try:
        auth_token = await client.authenticate()
    except DokuwebError as e:
        logger.error(f"Token request failed: {e}")
        raise to_http_exception(e)

    return {"authToken": auth_token}


@router.post("/tickets", status_code=status.HTTP_201_CREATED)
async def create_ticket(
    request: CreateTicketRequest,
    client: DokuwebClient = Depends(get_dokuweb_client)
):
    """
    Create a ticket

    Example:
        >>> POST /api/dokuweb/tickets
        >>> {
        ...     "subject": "Test Ticket",
        ...     "partner_id": "1000.4711.00123.01",
        ...     "keyword": "Mieterhöhung",
        ...     "options": {"channel": "EMAIL"}
        ... }
    """
    try:
        await client.authenticate()
        new_ticket = await client.create_ticket(
            subject=request.subject,
            partner_id=request.partner_id,
            keyword=request.keyword,
            options=request.options,
        )
    except DokuwebError as e:
        logger.error(f"Ticket creation failed: {e}")
        raise to_http_exception(e)

    return {"newTicket": new_ticket.model_dump()}


@router.get("/keywords")
async def list_keywords(
    channel: str = "",
    ticket_system: str = "",
    client: DokuwebClient = Depends(get_dokuweb_client)
):
    """
    List available keywords, optionally filtered by channel and ticket system
    """
    try:
        await client.authenticate()
        keywords = await client.get_keywords(channel=channel, ticket_system=ticket_system)
    except DokuwebError as e:
        logger.error(f"Keyword listing failed: {e}")
        raise to_http_exception(e)

    return {"keywords": keywords}


@router.get("/tickets/{ticket_id}")
async def get_ticket(
    ticket_id: str,
    client: DokuwebClient = Depends(get_dokuweb_client)
):
    """
    Get ticket details
    """
    try:
        await client.authenticate()
        ticket = await client.get_ticket_details(ticket_id)
    except DokuwebError as e:
        logger.error(f"Ticket lookup failed for {ticket_id}: {e}")
        raise to_http_exception(e)

    return {"ticket": ticket}


@router.get("/tickets")
async def search_tickets(
    creator: str = Query(..., min_length=1, description="Login matched against CREATE_BY"),
    start: int = Query(1, ge=1),
    max_results: int = Query(10, ge=1, le=5000, alias="max"),
    client: DokuwebClient = Depends(get_dokuweb_client)
):
    """
    Search tickets by creator login
    """
    try:
        await client.authenticate()
        tickets = await client.search_tickets_by_creator(
            creator, start=start, max_results=max_results
        )
    except DokuwebError as e:
        logger.error(f"Ticket search failed for {creator}: {e}")
        raise to_http_exception(e)

    return {"tickets": tickets}
