"""
Error taxonomy for the credential and recovery core.

Every failure the services can report is one of these exception types.
Each carries a stable ``error_code`` for clients and the HTTP status the
API layer maps it to. Messages are safe to return to callers: they never
contain passwords, hashes, codes or tokens.
"""
from fastapi import status


class AuthError(Exception):
    """Base exception for the authentication core."""

    error_code: str = "AuthError"
    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Authentication error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error_code": self.error_code, "detail": self.message}


class ValidationFailedError(AuthError):
    """Malformed input rejected before reaching the core."""

    error_code = "ValidationFailed"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    message = "Request validation failed"


class DuplicateEmailError(AuthError):
    error_code = "DuplicateEmail"
    status_code = status.HTTP_409_CONFLICT
    message = "User already exists"


class UserNotFoundError(AuthError):
    error_code = "UserNotFound"
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class InvalidCredentialsError(AuthError):
    """Unknown email and wrong password share this error on purpose."""

    error_code = "InvalidCredentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email or password"


class InvalidOrExpiredOtpError(AuthError):
    error_code = "InvalidOrExpiredOtp"
    message = "Invalid or expired OTP"


class InvalidOrExpiredTokenError(AuthError):
    error_code = "InvalidOrExpiredToken"
    message = "Invalid or expired reset token"


class PasswordMismatchError(AuthError):
    error_code = "PasswordMismatch"
    message = "Passwords do not match"


class ServiceUnavailableError(AuthError):
    """
    Store or hasher failure.

    ``detail`` holds the internal cause and is only surfaced to callers
    when the application runs with ``debug`` enabled.
    """

    error_code = "ServiceUnavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Service temporarily unavailable"

    def __init__(self, message: str | None = None, detail: str | None = None):
        super().__init__(message)
        self.detail = detail
