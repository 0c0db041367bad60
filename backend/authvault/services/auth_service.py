"""
Authentication service for registration and login.
"""
import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from authvault.core.errors import DuplicateEmailError, InvalidCredentialsError
from authvault.core.security import PasswordHasher, SessionIssuer
from authvault.models.identity import Identity, normalize_email
from authvault.repositories.credential_store import CredentialStore
from authvault.schemas.auth import (
    IdentityResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
)

logger = logging.getLogger("authvault.auth")


class AuthService:
    """Service for registration and login."""

    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        issuer: SessionIssuer,
    ):
        self.store = store
        self.hasher = hasher
        self.issuer = issuer

    async def register(self, request: RegisterRequest) -> IdentityResponse:
        """
        Register a new user.

        Args:
            request: Registration request with name, email and password

        Returns:
            The created identity, without its password hash

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        email = normalize_email(request.email)

        if await self.store.find_by_email(email) is not None:
            raise DuplicateEmailError()

        hashed_password = await run_in_threadpool(self.hasher.hash, request.password)
        identity = await self.store.create(
            Identity(
                name=request.name,
                email=email,
                hashed_password=hashed_password,
            )
        )
        logger.info("Registered user %s", identity.id)

        return IdentityResponse.from_identity(identity)

    async def login(self, request: LoginRequest) -> LoginResponse:
        """
        Authenticate user and return JWT token.

        Args:
            request: Login request with email and password

        Returns:
            LoginResponse with JWT token and the identity

        Raises:
            InvalidCredentialsError: If the email is unknown or the password
                is wrong (indistinguishable on purpose)
        """
        identity = await self.store.find_by_email(normalize_email(request.email))

        if identity is None:
            # Unknown emails cost one bcrypt verify, like a wrong password
            await run_in_threadpool(self.hasher.verify, request.password, self.hasher.dummy_hash)
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        if not await run_in_threadpool(
            self.hasher.verify, request.password, identity.hashed_password
        ):
            logger.info("Rejected login for user %s", identity.id)
            raise InvalidCredentialsError()

        access_token = self.issuer.issue(identity.id)
        logger.info("User %s logged in", identity.id)

        return LoginResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=self.issuer.expires_in,
            user=IdentityResponse.from_identity(identity),
        )

    async def get_identity(self, identity_id: str) -> Optional[IdentityResponse]:
        """
        Get an identity by ID.

        Args:
            identity_id: User ObjectId as string

        Returns:
            Public identity or None if not found
        """
        identity = await self.store.find_by_id(identity_id)
        if identity is None:
            return None
        return IdentityResponse.from_identity(identity)
