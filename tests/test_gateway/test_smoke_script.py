"""
Tests for the Doku@WEB smoke script
"""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from dokuweb_gateway.exceptions import AuthenticationError
from dokuweb_gateway.models.ticket import CreatedTicket
from dokuweb_gateway.scripts import dokuweb_smoke


@pytest.fixture
def fake_client():
    fake = MagicMock()
    fake.__aenter__ = AsyncMock(return_value=fake)
    fake.__aexit__ = AsyncMock(return_value=None)
    fake.authenticate = AsyncMock(return_value="TOKEN123")
    fake.get_keywords = AsyncMock(return_value=[{"KEYWORD": "Mieterhöhung", "CATEGORY": "Miete"}])
    fake.search_tickets_by_creator = AsyncMock(return_value=[])
    fake.get_ticket_details = AsyncMock(return_value={"ticketid": "55"})
    fake.create_ticket = AsyncMock(return_value=CreatedTicket(ticketid="55", ticketnr="TK-1"))
    with patch.object(dokuweb_smoke.DokuwebClient, "from_settings", return_value=fake):
        yield fake


def test_parse_args_defaults():
    args = dokuweb_smoke.parse_args([])

    assert args.channel == ""
    assert args.max == 10
    assert args.create is False


def test_read_only_run(fake_client):
    assert dokuweb_smoke.main(["--creator", "mmuster", "--max", "5", "--ticket-id", "55"]) == 0

    fake_client.search_tickets_by_creator.assert_awaited_once_with("mmuster", max_results=5)
    fake_client.get_ticket_details.assert_awaited_once_with("55")
    fake_client.create_ticket.assert_not_called()


def test_create_requires_partner_and_keyword(fake_client):
    assert dokuweb_smoke.main(["--create"]) == 2
    fake_client.create_ticket.assert_not_called()


def test_create_ticket(fake_client):
    assert dokuweb_smoke.main(["--create", "--partner", "P", "--keyword", "K"]) == 0
    fake_client.create_ticket.assert_awaited_once_with("Test Ticket", "P", "K")


def test_client_error_exit_code(fake_client):
    fake_client.authenticate.side_effect = AuthenticationError(401, "Unauthorized")

    assert dokuweb_smoke.main([]) == 1
