"""
pytest configuration for gateway tests
"""


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "requires_dokuweb: mark test as requiring a reachable Doku@WEB instance"
    )
