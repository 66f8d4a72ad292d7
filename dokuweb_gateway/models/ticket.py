"""
Ticket data models
"""
from pydantic import BaseModel, Field
from typing import Optional


class TicketOptions(BaseModel):
    """Optional createTicket fields (empty string means "not set")"""
    category: str = ""
    channel: str = "POST"
    description: str = ""
    type: str = "1"
    ticket_group: str = ""
    field_values: str = Field("", description="sFieldvalues JSON string")
    priority: str = ""
    ticket_system: str = ""


class CreateTicketRequest(BaseModel):
    """Request body for ticket creation"""
    subject: str = Field(..., min_length=1, description="Ticket subject (Betreff)")
    partner_id: str = Field(..., min_length=1, description="Partner ID, e.g. 1000.4711.00123.01")
    keyword: str = Field(..., min_length=1, description="Existing keyword (Schlagwort)")
    options: Optional[TicketOptions] = None


class CreatedTicket(BaseModel):
    """Identifiers returned by createTicket"""
    ticketid: str
    ticketnr: str
