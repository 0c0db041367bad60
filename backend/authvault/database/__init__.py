"""
Database module - MongoDB connection and database definitions.
"""
from authvault.database.connections import MongoConnection
from authvault.database.databases import auth_db

__all__ = [
    "MongoConnection",
    "auth_db",
]
