"""
Tests for health check endpoints.

These tests verify:
- Basic health endpoint returns 200
- Readiness check reports database connection status
- Health degrades gracefully when MongoDB is down
"""

from unittest.mock import AsyncMock


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health_endpoint_returns_200_when_api_running(self, client):
        """Basic health check should return 200 if API is up."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_lists_api_information(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "AuthVault API"


class TestReadinessEndpoint:
    """Tests for GET /health/ready endpoint."""

    def test_readiness_returns_healthy_when_mongodb_responds(self, client, app, monkeypatch):
        """Readiness check should report healthy when MongoDB answers ping."""
        monkeypatch.setattr(app.state.connection, "ping", AsyncMock(return_value=None))

        response = client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["mongodb"] == "healthy"

    def test_readiness_reports_mongodb_unhealthy_when_connection_fails(self, client, app, monkeypatch):
        """Readiness should report MongoDB unhealthy without leaking the cause."""
        monkeypatch.setattr(
            app.state.connection,
            "ping",
            AsyncMock(side_effect=Exception("Connection refused by db-host-7")),
        )

        response = client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["checks"]["mongodb"] == "unhealthy"
        assert "db-host-7" not in response.text

    def test_readiness_includes_cause_in_debug(self, client, app, monkeypatch):
        app.state.settings = app.state.settings.model_copy(update={"debug": True})
        monkeypatch.setattr(
            app.state.connection,
            "ping",
            AsyncMock(side_effect=Exception("Connection refused")),
        )

        data = client.get("/health/ready").json()

        assert data["checks"]["mongodb"] == "unhealthy: Connection refused"

    def test_readiness_response_includes_all_check_keys(self, client, app, monkeypatch):
        monkeypatch.setattr(app.state.connection, "ping", AsyncMock(side_effect=Exception("test")))

        data = client.get("/health/ready").json()

        assert "checks" in data
        assert "api" in data["checks"]
        assert "mongodb" in data["checks"]
