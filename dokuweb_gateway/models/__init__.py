"""
Pydantic models for the Doku@WEB Gateway
"""

from dokuweb_gateway.models.ticket import (
    TicketOptions,
    CreateTicketRequest,
    CreatedTicket,
)

__all__ = [
    "TicketOptions",
    "CreateTicketRequest",
    "CreatedTicket",
]
