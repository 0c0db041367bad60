"""
Service dependencies built from the objects the app created at startup.
"""
from fastapi import Depends, Request

from authvault.config import Settings
from authvault.repositories.credential_store import CredentialStore
from authvault.services.auth_service import AuthService
from authvault.services.recovery_service import RecoveryService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_credential_store(request: Request) -> CredentialStore:
    """Dependency to get a CredentialStore bound to the open connection."""
    return CredentialStore(request.app.state.connection.database)


def get_auth_service(
    request: Request,
    store: CredentialStore = Depends(get_credential_store),
) -> AuthService:
    """Dependency to get AuthService instance."""
    state = request.app.state
    return AuthService(store, state.hasher, state.issuer)


def get_recovery_service(
    request: Request,
    store: CredentialStore = Depends(get_credential_store),
    settings: Settings = Depends(get_app_settings),
) -> RecoveryService:
    """Dependency to get RecoveryService instance."""
    state = request.app.state
    return RecoveryService(
        store,
        state.hasher,
        state.notifier,
        settings,
        clock=state.clock,
    )
