"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for testing the
services and the FastAPI routes against an in-memory MongoDB.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient


# =============================================================================
# Notifier
# =============================================================================

class RecordingNotifier:
    """Notifier that keeps every code it is asked to deliver."""

    def __init__(self):
        self.sent: list[dict] = []

    async def send_recovery_code(self, identity, code, expires_at) -> None:
        self.sent.append({
            "user_id": identity.id,
            "email": identity.email,
            "code": code,
            "expires_at": expires_at,
        })

    @property
    def last_code(self) -> str:
        return self.sent[-1]["code"]


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def auth_service(credential_store, hasher, issuer):
    from authvault.services.auth_service import AuthService

    return AuthService(credential_store, hasher, issuer)


@pytest.fixture
def recovery_service(credential_store, hasher, notifier, test_settings, clock):
    from authvault.services.recovery_service import RecoveryService

    return RecoveryService(
        credential_store,
        hasher,
        notifier,
        test_settings,
        clock=clock,
    )


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def mock_connection(test_settings):
    """MongoConnection wrapping an in-memory client."""
    from mongomock_motor import AsyncMongoMockClient

    from authvault.database.connections import MongoConnection

    return MongoConnection(
        uri=test_settings.mongo_uri,
        db_name=test_settings.mongo_db_name,
        client=AsyncMongoMockClient(),
    )


@pytest.fixture
def app(test_settings, mock_connection, notifier, clock):
    """Create the FastAPI app wired to the mock database."""
    from authvault.main import create_app

    return create_app(
        settings=test_settings,
        connection=mock_connection,
        notifier=notifier,
        clock=clock,
    )


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Entering the client runs the lifespan, so indexes exist before requests.
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture
def registered_user(client, test_user_data) -> dict:
    """Register the default test user through the API."""
    response = client.post("/auth/register", json=test_user_data)
    assert response.status_code == 201
    return response.json()


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, error_code: str):
        assert response.status_code == status_code
        data = response.json()
        assert data["error_code"] == error_code
        assert "detail" in data
    return _assert
