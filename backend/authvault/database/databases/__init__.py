"""
Database definitions and collection constants.
"""
from authvault.database.databases import auth_db

__all__ = ["auth_db"]
