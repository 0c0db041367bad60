"""
Authentication router for registration, login and password recovery.

Core failures are raised as AuthError subclasses and rendered by the
application's exception handlers.
"""
from fastapi import APIRouter, Depends, status

from authvault.dependencies.auth import CurrentUser
from authvault.dependencies.services import get_auth_service, get_recovery_service
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
from authvault.services.auth_service import AuthService
from authvault.services.recovery_service import RecoveryService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=IdentityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={409: {"model": ErrorResponse}},
)
async def register(
    body: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user account.

    - **name**: Display name (max 50 characters)
    - **email**: Valid email address (must be unique)
    - **password**: Password (minimum 4 characters)
    """
    return await auth_service.register(body)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login and get access token",
    responses={401: {"model": ErrorResponse}},
)
async def login(
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate with email and password to receive a JWT token.

    Send the token as `Authorization: Bearer <token>` to protected endpoints.
    """
    return await auth_service.login(body)


@router.post(
    "/forgot-password",
    response_model=ForgotPasswordResponse,
    response_model_exclude_none=True,
    summary="Request a password recovery code",
    responses={404: {"model": ErrorResponse}},
)
async def forgot_password(
    body: ForgotPasswordRequest,
    recovery_service: RecoveryService = Depends(get_recovery_service),
):
    """
    Issue a 4-digit one-time code valid for 10 minutes.

    Requesting again replaces any pending code or reset token. The code is
    included in the response only in development mode.
    """
    return await recovery_service.forgot_password(body)


@router.post(
    "/verify-otp",
    response_model=VerifyOtpResponse,
    summary="Exchange a recovery code for a reset token",
    responses={400: {"model": ErrorResponse}},
)
async def verify_otp(
    body: VerifyOtpRequest,
    recovery_service: RecoveryService = Depends(get_recovery_service),
):
    """
    Verify the one-time code and receive a reset token valid for 30 minutes.
    """
    return await recovery_service.verify_otp(body)


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    summary="Set a new password with a reset token",
    responses={400: {"model": ErrorResponse}},
)
async def reset_password(
    body: ResetPasswordRequest,
    recovery_service: RecoveryService = Depends(get_recovery_service),
):
    """
    Redeem a reset token. Each token works exactly once.
    """
    return await recovery_service.reset_password(body)


@router.get(
    "/me",
    response_model=IdentityResponse,
    summary="Get current user info",
)
async def get_current_user_info(current_user: CurrentUser):
    """
    Get information about the currently authenticated user.

    Requires header: `Authorization: Bearer <token>`
    """
    return current_user
