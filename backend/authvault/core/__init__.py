"""
Core module - Security, secret generation, and error types.
"""
from authvault.core.errors import (
    AuthError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidOrExpiredOtpError,
    InvalidOrExpiredTokenError,
    PasswordMismatchError,
    ServiceUnavailableError,
    UserNotFoundError,
    ValidationFailedError,
)
from authvault.core.generators import generate_code, generate_token
from authvault.core.security import PasswordHasher, SessionIssuer

__all__ = [
    "AuthError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "InvalidOrExpiredOtpError",
    "InvalidOrExpiredTokenError",
    "PasswordMismatchError",
    "ServiceUnavailableError",
    "UserNotFoundError",
    "ValidationFailedError",
    "generate_code",
    "generate_token",
    "PasswordHasher",
    "SessionIssuer",
]
