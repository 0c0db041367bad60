"""
Password recovery service.

Each identity moves through three recovery states:

    IDLE --forgot_password--> CODE_ISSUED --verify_otp--> TOKEN_ISSUED
      ^                                                        |
      +--------------------- reset_password -------------------+

``forgot_password`` is accepted from any state and always restarts at
CODE_ISSUED: the new code replaces any pending one and any unredeemed
reset token is dropped. No step can be skipped, because each lookup
requires the secret produced by the previous step.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable

from fastapi.concurrency import run_in_threadpool

from authvault.config import Settings
from authvault.core.errors import (
    InvalidOrExpiredOtpError,
    InvalidOrExpiredTokenError,
    PasswordMismatchError,
    UserNotFoundError,
)
from authvault.core.generators import generate_code, generate_token
from authvault.core.security import PasswordHasher
from authvault.models.identity import normalize_email, utc_now
from authvault.repositories.credential_store import CredentialStore
from authvault.schemas.auth import (
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    MessageResponse,
    ResetPasswordRequest,
    VerifyOtpRequest,
    VerifyOtpResponse,
)
from authvault.services.notifier import RecoveryNotifier

logger = logging.getLogger("authvault.recovery")


class RecoveryService:
    """Service driving the forgot -> verify -> reset sequence."""

    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        notifier: RecoveryNotifier,
        settings: Settings,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.hasher = hasher
        self.notifier = notifier
        self.settings = settings
        self.clock = clock

    @property
    def code_ttl(self) -> timedelta:
        return timedelta(minutes=self.settings.otp_expire_minutes)

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(minutes=self.settings.reset_token_expire_minutes)

    async def forgot_password(self, request: ForgotPasswordRequest) -> ForgotPasswordResponse:
        """
        Issue a fresh one-time code for an identity.

        Args:
            request: Request carrying the account email

        Returns:
            ForgotPasswordResponse; ``code`` is set only when the service is
            configured to expose recovery codes

        Raises:
            UserNotFoundError: If no identity exists for the email
        """
        email = normalize_email(request.email)
        identity = await self.store.find_by_email(email)
        if identity is None:
            raise UserNotFoundError()

        previous_state = identity.recovery_state
        code = generate_code()
        expires_at = self.clock() + self.code_ttl

        identity.recovery_code = code
        identity.recovery_code_expires_at = expires_at
        identity.clear_recovery_token()
        await self.store.save(identity)

        logger.info(
            "Recovery code issued for user %s (%s -> %s)",
            identity.id,
            previous_state.value,
            identity.recovery_state.value,
        )
        await self.notifier.send_recovery_code(identity, code, expires_at)

        return ForgotPasswordResponse(
            email=email,
            message="OTP generated",
            expires_in=int(self.code_ttl.total_seconds()),
            code=code if self.settings.recovery_code_in_response else None,
        )

    async def verify_otp(self, request: VerifyOtpRequest) -> VerifyOtpResponse:
        """
        Exchange a valid one-time code for a reset token.

        The code is consumed: a second verification with the same code fails.

        Raises:
            InvalidOrExpiredOtpError: If the code is wrong, superseded or expired
        """
        now = self.clock()
        identity = await self.store.find_by_email_and_code(
            normalize_email(request.email),
            request.code,
            now,
        )
        if identity is None:
            raise InvalidOrExpiredOtpError()

        token = generate_token(self.settings.reset_token_bytes)
        expires_at = now + self.token_ttl

        identity.recovery_token = token
        identity.recovery_token_expires_at = expires_at
        identity.clear_recovery_code()
        await self.store.save(identity)

        logger.info("Recovery code verified for user %s, reset token issued", identity.id)

        return VerifyOtpResponse(
            reset_token=token,
            expires_in=int(self.token_ttl.total_seconds()),
            expires_at=expires_at,
        )

    async def reset_password(self, request: ResetPasswordRequest) -> MessageResponse:
        """
        Redeem a reset token and set a new password.

        Raises:
            PasswordMismatchError: If new and confirmation passwords differ
            InvalidOrExpiredTokenError: If the token is wrong, used or expired
        """
        if not request.passwords_match():
            raise PasswordMismatchError()

        email = normalize_email(request.email)
        if await self.store.find_by_email_and_token(email, request.token, self.clock()) is None:
            raise InvalidOrExpiredTokenError()

        hashed_password = await run_in_threadpool(self.hasher.hash, request.new_password)

        # Only one of several concurrent redemptions of a token gets a match here
        identity = await self.store.redeem_token(
            email,
            request.token,
            self.clock(),
            hashed_password,
        )
        if identity is None:
            raise InvalidOrExpiredTokenError()

        logger.info("Password reset for user %s", identity.id)

        return MessageResponse(message="Password reset successful")
