"""
Tests for health check and root endpoints
"""
import pytest
from fastapi.testclient import TestClient
from dokuweb_gateway import __version__
from dokuweb_gateway.main import app

client = TestClient(app)


class TestBasicHealthCheck:
    """Test basic health check endpoint"""

    def test_basic_health_returns_200(self):
        """Basic health check should always return 200"""
        response = client.get("/api/health")
        assert response.status_code == 200

    def test_basic_health_response_structure(self):
        """Basic health check should have correct response structure"""
        data = client.get("/api/health").json()

        assert "status" in data
        assert "timestamp" in data
        assert "version" in data
        assert "uptime_seconds" in data
        assert "dokuweb_configured" in data

    def test_status_reflects_configuration(self):
        """Degraded without credentials, healthy with them"""
        data = client.get("/api/health").json()

        expected = "healthy" if data["dokuweb_configured"] else "degraded"
        assert data["status"] == expected

    def test_basic_health_version(self):
        data = client.get("/api/health").json()

        assert data["version"] == __version__

    def test_basic_health_uptime_non_negative(self):
        data = client.get("/api/health").json()

        assert data["uptime_seconds"] >= 0


class TestAppIntegration:
    """Integration tests for app wiring"""

    def test_root_endpoint(self):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Doku@WEB Gateway API"
        assert data["version"] == __version__

    def test_process_time_header(self):
        """Logging middleware stamps non-health responses"""
        response = client.get("/")
        assert "x-process-time" in response.headers

    def test_openapi_docs_include_routes(self):
        response = client.get("/openapi.json")
        assert response.status_code == 200
        paths = response.json()["paths"]

        assert "/api/health" in paths
        assert "/api/dokuweb/token" in paths
        assert "/api/dokuweb/keywords" in paths
        assert "/api/dokuweb/tickets" in paths
        assert "/api/dokuweb/tickets/{ticket_id}" in paths


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
