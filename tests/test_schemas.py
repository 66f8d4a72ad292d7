"""
Tests for Pydantic models to verify validation logic
"""
import pytest
from pydantic import ValidationError

from dokuweb_gateway.models import CreateTicketRequest, CreatedTicket, TicketOptions


class TestTicketOptions:
    """Test createTicket option defaults"""

    def test_defaults(self):
        options = TicketOptions()

        assert options.channel == "POST"
        assert options.type == "1"
        assert options.category == ""
        assert options.field_values == ""
        assert options.ticket_system == ""


class TestCreateTicketRequest:
    """Test request body validation"""

    def test_valid_request(self, sample_ticket_request):
        request = CreateTicketRequest(**sample_ticket_request)

        assert request.partner_id == "1000.4711.00123.01"
        assert request.options.category == "Technik"
        assert request.options.channel == "POST"

    def test_options_optional(self):
        request = CreateTicketRequest(subject="S", partner_id="P", keyword="K")

        assert request.options is None

    @pytest.mark.parametrize("field", ["subject", "partner_id", "keyword"])
    def test_required_fields_not_empty(self, sample_ticket_request, field):
        sample_ticket_request[field] = ""

        with pytest.raises(ValidationError):
            CreateTicketRequest(**sample_ticket_request)


def test_created_ticket_dump():
    assert CreatedTicket(ticketid="55", ticketnr="TK-2024-001").model_dump() == {
        "ticketid": "55",
        "ticketnr": "TK-2024-001",
    }
