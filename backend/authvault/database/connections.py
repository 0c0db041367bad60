"""
MongoDB connection management.

The connection is an explicit object opened at application startup and
closed at shutdown. Request handlers reach it through ``app.state``.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from authvault.config import Settings

logger = logging.getLogger("authvault.database")


class MongoConnection:
    """Owns the Motor client for one database."""

    def __init__(
        self,
        uri: str,
        db_name: str,
        client: Optional[AsyncIOMotorClient] = None,
    ):
        self.uri = uri
        self.db_name = db_name
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoConnection":
        return cls(uri=settings.mongo_uri, db_name=settings.mongo_db_name)

    @property
    def is_open(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            raise RuntimeError("MongoDB connection is not open")
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self.client[self.db_name]

    async def open(self) -> None:
        """Create the MongoDB client if it does not exist yet."""
        if self._client is None:
            self._client = AsyncIOMotorClient(self.uri)
            logger.info("Connected to MongoDB database '%s'", self.db_name)

    async def ping(self) -> None:
        """Round-trip to the server; raises if MongoDB is unreachable."""
        await self.client.admin.command("ping")

    async def close(self) -> None:
        """Close the client. Safe to call more than once."""
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("MongoDB connection closed")
