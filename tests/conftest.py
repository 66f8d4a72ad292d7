"""
Pytest configuration and fixtures
"""
import pytest
from typing import Dict, Any


@pytest.fixture
def sample_ticket_request() -> Dict[str, Any]:
    """Sample createTicket request body"""
    return {
        "subject": "Heizung defekt",
        "partner_id": "1000.4711.00123.01",
        "keyword": "Mieterhöhung",
        "options": {
            "category": "Technik",
            "description": "Heizung im 2. OG fällt seit Montag aus.",
            "priority": "2",
        },
    }
