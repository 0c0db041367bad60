"""
Service layer for business logic.
"""
from authvault.services.auth_service import AuthService
from authvault.services.notifier import LoggingNotifier, RecoveryNotifier
from authvault.services.recovery_service import RecoveryService

__all__ = [
    "AuthService",
    "LoggingNotifier",
    "RecoveryNotifier",
    "RecoveryService",
]
