"""
Authentication and password recovery request/response schemas.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from authvault.core.security import PASSWORD_MAX_BYTES, exceeds_max_bytes
from authvault.models.identity import Identity

PASSWORD_MIN_LENGTH = 4
NAME_MAX_LENGTH = 50


def check_password_length(value: str) -> str:
    if exceeds_max_bytes(value):
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return value


class IdentityResponse(BaseModel):
    """Public view of an identity (never includes secrets)."""
    id: str = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User email")
    created_at: datetime = Field(..., description="Account creation timestamp")

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityResponse":
        return cls(
            id=identity.id,
            name=identity.name,
            email=identity.email,
            created_at=identity.created_at,
        )


class RegisterRequest(BaseModel):
    """Registration request body."""
    name: str = Field(
        ...,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="Display name (max 50 characters)"
    )
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        description="User password (min 4 characters, max 72 bytes)"
    )

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_length(v)


class LoginRequest(BaseModel):
    """Login request body."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class LoginResponse(BaseModel):
    """Login response with JWT token."""
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration time in seconds")
    user: IdentityResponse = Field(..., description="Authenticated user")


class ForgotPasswordRequest(BaseModel):
    """Start password recovery for an email address."""
    email: EmailStr = Field(..., description="User email address")


class ForgotPasswordResponse(BaseModel):
    """
    Result of issuing a one-time code.

    ``code`` is only populated when the service runs with the recovery
    code exposed (development); otherwise it travels through the notifier.
    """
    email: str = Field(..., description="Email the code was issued for")
    message: str = Field(default="OTP generated", description="Status message")
    expires_in: int = Field(..., description="Code validity in seconds")
    code: Optional[str] = Field(None, description="One-time code (development only)")


class VerifyOtpRequest(BaseModel):
    """Exchange a one-time code for a reset token."""
    email: EmailStr = Field(..., description="User email address")
    code: str = Field(..., pattern=r"^\d{4}$", description="4-digit one-time code")


class VerifyOtpResponse(BaseModel):
    """Reset token issued after a successful code verification."""
    reset_token: str = Field(..., description="Single-use password reset token")
    expires_in: int = Field(..., description="Token validity in seconds")
    expires_at: datetime = Field(..., description="Token expiry timestamp")


class ResetPasswordRequest(BaseModel):
    """Redeem a reset token for a new password."""
    email: EmailStr = Field(..., description="User email address")
    token: str = Field(..., min_length=1, description="Reset token from verify-otp")
    new_password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        description="New password (min 4 characters, max 72 bytes)"
    )
    confirm_password: str = Field(..., description="New password confirmation")

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        return check_password_length(v)

    def passwords_match(self) -> bool:
        """Check if password and confirmation match."""
        return self.new_password == self.confirm_password


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str = Field(..., description="Status message")


class ErrorResponse(BaseModel):
    """Error body returned for every core failure."""
    error_code: str = Field(..., description="Stable error kind")
    detail: str = Field(..., description="Human readable message")
