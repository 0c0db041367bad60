"""
Security utilities for password hashing and JWT session management.
"""
import secrets
from datetime import datetime, timedelta, timezone
from functools import cached_property
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from authvault.config import Settings
from authvault.core.errors import ServiceUnavailableError

# bcrypt ignores everything past the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72


def exceeds_max_bytes(plain_password: str) -> bool:
    return len(plain_password.encode("utf-8")) > PASSWORD_MAX_BYTES


class PasswordHasher:
    """
    Salted, slow one-way hashing of login passwords (bcrypt via passlib).

    The same plaintext hashed twice yields two different digests; both verify.
    Passwords longer than PASSWORD_MAX_BYTES in UTF-8 are never hashed and
    never verify.
    """

    def __init__(self, rounds: int = 12):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(rounds=settings.bcrypt_rounds)

    def hash(self, plain_password: str) -> str:
        """
        Hash a plain password using bcrypt.

        Args:
            plain_password: The plain text password to hash

        Returns:
            Hashed password string

        Raises:
            ValueError: If the password exceeds PASSWORD_MAX_BYTES
            ServiceUnavailableError: If the bcrypt backend is missing or broken
        """
        if exceeds_max_bytes(plain_password):
            raise ValueError(f"Password exceeds {PASSWORD_MAX_BYTES} bytes")
        try:
            return self.pwd_context.hash(plain_password)
        except RuntimeError as exc:
            raise ServiceUnavailableError(detail=str(exc)) from exc

    @cached_property
    def dummy_hash(self) -> str:
        """A throwaway hash for spending bcrypt time when no account matches."""
        return self.hash(secrets.token_hex(16))

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain password against a hashed password.

        Args:
            plain_password: The plain text password to verify
            hashed_password: The hashed password to compare against

        Returns:
            True if password matches, False otherwise (including when the
            stored value is not a recognised hash)

        Raises:
            ServiceUnavailableError: If the bcrypt backend is missing or broken
        """
        if not hashed_password or exceeds_max_bytes(plain_password):
            return False
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            return False
        except RuntimeError as exc:
            raise ServiceUnavailableError(detail=str(exc)) from exc


class SessionIssuer:
    """Issues and decodes signed, time-boxed bearer credentials (JWT)."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionIssuer":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.jwt_access_token_expire_minutes,
        )

    @property
    def expires_in(self) -> int:
        """Lifetime of an issued credential in seconds."""
        return self.expire_minutes * 60

    def issue(self, identity_id: str, expires_delta: timedelta | None = None) -> str:
        """
        Create a JWT access token bound to an identity.

        Args:
            identity_id: Identity the credential is issued for
            expires_delta: Optional custom expiration time

        Returns:
            Encoded JWT token string
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.expire_minutes)

        now = datetime.now(timezone.utc)
        payload = {
            "sub": identity_id,
            "iat": now,
            "exp": now + expires_delta,
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """
        Decode and validate a JWT token.

        Args:
            token: The JWT token string to decode

        Returns:
            Decoded payload dictionary with keys: sub, exp, iat

        Raises:
            JWTError: If token is invalid or expired
        """
        return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])


__all__ = [
    "JWTError",
    "PASSWORD_MAX_BYTES",
    "PasswordHasher",
    "SessionIssuer",
    "exceeds_max_bytes",
]
