"""
Delivery seam for one-time recovery codes.

Sending email or SMS is outside this service. A notifier receives each
freshly issued code so a deployment can plug in its own delivery channel.
"""
import logging
from datetime import datetime
from typing import Protocol

from authvault.models.identity import Identity

logger = logging.getLogger("authvault.notifier")


class RecoveryNotifier(Protocol):
    async def send_recovery_code(
        self,
        identity: Identity,
        code: str,
        expires_at: datetime,
    ) -> None:
        ...


class LoggingNotifier:
    """Default notifier: records the issuance, never the code itself."""

    async def send_recovery_code(
        self,
        identity: Identity,
        code: str,
        expires_at: datetime,
    ) -> None:
        logger.info(
            "Recovery code ready for delivery to user %s (expires %s)",
            identity.id,
            expires_at.isoformat(),
        )
