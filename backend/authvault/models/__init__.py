"""
Pydantic models for database documents.
"""
from authvault.models.identity import (
    Identity,
    RecoveryState,
    normalize_email,
    utc_now,
)

__all__ = [
    "Identity",
    "RecoveryState",
    "normalize_email",
    "utc_now",
]
