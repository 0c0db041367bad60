"""
Identity model for the authentication database.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    """
    Canonical form used for every email lookup and write.

    Emails are trimmed and lower-cased, so ``" Ann@X.com"`` and
    ``"ann@x.com"`` resolve to the same identity.
    """
    return email.strip().lower()


class RecoveryState(str, Enum):
    """Where an identity sits in the password recovery flow."""
    IDLE = "idle"
    CODE_ISSUED = "code_issued"
    TOKEN_ISSUED = "token_issued"


class Identity(BaseModel):
    """
    Identity document model for MongoDB auth_db.users collection.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Unique, normalized email address")
    hashed_password: str = Field(..., description="Bcrypt hashed password")
    recovery_code: Optional[str] = Field(
        None,
        description="Pending one-time code, set only while awaiting verification"
    )
    recovery_code_expires_at: Optional[datetime] = Field(
        None,
        description="Instant after which the one-time code is rejected"
    )
    recovery_token: Optional[str] = Field(
        None,
        description="Reset token, set between code verification and password reset"
    )
    recovery_token_expires_at: Optional[datetime] = Field(
        None,
        description="Instant after which the reset token is rejected"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        description="Account creation timestamp"
    )

    class Config:
        populate_by_name = True

    @property
    def recovery_state(self) -> RecoveryState:
        if self.recovery_code is not None:
            return RecoveryState.CODE_ISSUED
        if self.recovery_token is not None:
            return RecoveryState.TOKEN_ISSUED
        return RecoveryState.IDLE

    def clear_recovery_code(self) -> None:
        self.recovery_code = None
        self.recovery_code_expires_at = None

    def clear_recovery_token(self) -> None:
        self.recovery_token = None
        self.recovery_token_expires_at = None
