"""
Dependencies for dependency injection in routes.
"""
from authvault.dependencies.auth import CurrentUser, get_current_user
from authvault.dependencies.services import (
    get_app_settings,
    get_auth_service,
    get_credential_store,
    get_recovery_service,
)

__all__ = [
    "CurrentUser",
    "get_current_user",
    "get_app_settings",
    "get_auth_service",
    "get_credential_store",
    "get_recovery_service",
]
