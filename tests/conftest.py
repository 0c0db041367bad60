"""
Global test fixtures for AuthVault.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Test settings with a cheap bcrypt work factor
- A controllable clock for expiry tests
- Test user data
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import pytest_asyncio

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# Settings
# =============================================================================

@pytest.fixture
def test_settings():
    """Settings for tests: fast hashing, codes exposed in responses."""
    from authvault.config import Settings

    return Settings(
        environment="test",
        mongo_uri="mongodb://unused:27017",
        mongo_db_name="auth_db",
        jwt_secret_key="test-secret-key-with-enough-length-0123456789",
        bcrypt_rounds=4,
        expose_recovery_code=True,
    )


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    from mongomock_motor import AsyncMongoMockClient

    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_auth_db(mock_async_mongo_client):
    """Provide mock auth_db database with the real indexes."""
    db = mock_async_mongo_client["auth_db"]
    await db.users.create_index("email", unique=True)
    yield db


@pytest_asyncio.fixture
async def credential_store(mock_auth_db):
    """CredentialStore over the mock auth_db."""
    from authvault.repositories.credential_store import CredentialStore

    return CredentialStore(mock_auth_db)


# =============================================================================
# Security Fixtures
# =============================================================================

@pytest.fixture
def hasher(test_settings):
    from authvault.core.security import PasswordHasher

    return PasswordHasher.from_settings(test_settings)


@pytest.fixture
def issuer(test_settings):
    from authvault.core.security import SessionIssuer

    return SessionIssuer.from_settings(test_settings)


# =============================================================================
# Clock
# =============================================================================

class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    """A clock frozen at the current time until advanced."""
    return FakeClock(datetime.now(timezone.utc))


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Basic test user data for registration."""
    return {
        "name": "Ann",
        "email": "a@x.com",
        "password": "pw1234",
    }
