"""
Tests for database connections and initialization.

These tests cover:
- MongoConnection open/close lifecycle
- Index creation during application startup
- Settings defaults for recovery policy
"""

from unittest.mock import MagicMock, patch

import pytest


class TestMongoConnection:
    """Tests for MongoConnection lifecycle."""

    @pytest.mark.asyncio
    async def test_open_creates_client_from_uri(self):
        from authvault.database.connections import MongoConnection

        with patch("authvault.database.connections.AsyncIOMotorClient") as mock_client:
            mock_instance = MagicMock()
            mock_client.return_value = mock_instance

            connection = MongoConnection(uri="mongodb://test:27017", db_name="auth_db")
            await connection.open()

            mock_client.assert_called_once_with("mongodb://test:27017")
            assert connection.client is mock_instance
            assert connection.is_open

    @pytest.mark.asyncio
    async def test_open_is_idempotent(self):
        from authvault.database.connections import MongoConnection

        with patch("authvault.database.connections.AsyncIOMotorClient") as mock_client:
            connection = MongoConnection(uri="mongodb://test:27017", db_name="auth_db")
            await connection.open()
            await connection.open()

            mock_client.assert_called_once()

    @pytest.mark.asyncio
    async def test_close_cleans_up(self):
        from authvault.database.connections import MongoConnection

        mock_client = MagicMock()
        connection = MongoConnection(uri="mongodb://test:27017", db_name="auth_db", client=mock_client)

        await connection.close()
        await connection.close()

        mock_client.close.assert_called_once()
        assert not connection.is_open

    def test_database_requires_open_connection(self):
        from authvault.database.connections import MongoConnection

        connection = MongoConnection(uri="mongodb://test:27017", db_name="auth_db")

        with pytest.raises(RuntimeError):
            connection.database

    def test_from_settings(self, test_settings):
        from authvault.database.connections import MongoConnection

        connection = MongoConnection.from_settings(test_settings)

        assert connection.uri == test_settings.mongo_uri
        assert connection.db_name == "auth_db"
        assert not connection.is_open


class TestStartup:
    """Tests for application lifespan."""

    @pytest.mark.asyncio
    async def test_startup_creates_unique_email_index(self, app, mock_connection):
        from fastapi.testclient import TestClient
        from pymongo.errors import DuplicateKeyError

        users = mock_connection.client["auth_db"]["users"]
        with TestClient(app):
            pass

        await users.insert_one({"email": "a@x.com"})
        with pytest.raises(DuplicateKeyError):
            await users.insert_one({"email": "a@x.com"})

    def test_shutdown_closes_connection(self, app, mock_connection):
        from fastapi.testclient import TestClient

        with TestClient(app):
            assert mock_connection.is_open

        assert not mock_connection.is_open


class TestSettings:
    """Tests for recovery-related configuration."""

    def test_recovery_defaults(self):
        from authvault.config import Settings

        settings = Settings(_env_file=None)

        assert settings.otp_expire_minutes == 10
        assert settings.reset_token_expire_minutes == 30
        assert settings.reset_token_bytes == 20

    def test_code_exposed_only_in_development_by_default(self):
        from authvault.config import Settings

        assert Settings(_env_file=None, environment="development").recovery_code_in_response
        assert not Settings(_env_file=None, environment="production").recovery_code_in_response

    def test_explicit_exposure_flag_wins(self):
        from authvault.config import Settings

        assert not Settings(
            _env_file=None, environment="development", expose_recovery_code=False
        ).recovery_code_in_response
        assert Settings(
            _env_file=None, environment="production", expose_recovery_code=True
        ).recovery_code_in_response
