"""
Request and response schemas for API endpoints.
"""
from authvault.schemas.auth import (
    ErrorResponse,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    IdentityResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyOtpRequest,
    VerifyOtpResponse,
)

__all__ = [
    "ErrorResponse",
    "ForgotPasswordRequest",
    "ForgotPasswordResponse",
    "IdentityResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "ResetPasswordRequest",
    "VerifyOtpRequest",
    "VerifyOtpResponse",
]
