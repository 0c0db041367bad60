"""
Persistence layer.
"""
from authvault.repositories.credential_store import CredentialStore

__all__ = ["CredentialStore"]
