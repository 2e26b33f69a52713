from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, Sequence

from src.application.interfaces.repositories.recipients import Recipient
from src.infrastructure.push.models import DeliveryChannel, DeliveryResult

logger = logging.getLogger(__name__)


class PushSender(Protocol):
    async def send_to_tokens(
        self, *, tokens: Sequence[str], title: str, body: str, data: dict | None = None
    ) -> None: ...


class PushDeliveryChannel(DeliveryChannel):
    """Sends to every recipient's device tokens, retrying each recipient with backoff."""

    def __init__(
        self,
        push_sender: PushSender,
        *,
        attempts: int = 3,
        delay: float = 2,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.push_sender = push_sender
        self.attempts = max(1, attempts)
        self.delay = delay
        self._sleep = sleep

    async def send(
        self,
        recipients: Sequence[Recipient],
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> DeliveryResult:
        result = DeliveryResult()
        for recipient in recipients:
            if not recipient.tokens:
                continue
            if await self._send_with_retry(recipient, title, body, data):
                result.sent.append(recipient.user_id)
            else:
                result.failed.append(recipient.user_id)
        return result

    async def _send_with_retry(
        self, recipient: Recipient, title: str, body: str, data: dict[str, Any] | None
    ) -> bool:
        delay = self.delay
        for attempt in range(1, self.attempts + 1):
            try:
                await self.push_sender.send_to_tokens(
                    tokens=recipient.tokens, title=title, body=body, data=data
                )
                logger.info(
                    "Push sent: user=%s tokens=%s attempt=%s",
                    recipient.user_id,
                    len(recipient.tokens),
                    attempt,
                )
                return True
            except Exception as e:
                if attempt == self.attempts:
                    logger.error(
                        "Push to user %s failed after %s attempts: %s",
                        recipient.user_id,
                        attempt,
                        e,
                        exc_info=True,
                    )
                    return False
                logger.warning(
                    "Push attempt %s failed (%s), retrying in %ss", attempt, e, delay
                )
                await self._sleep(delay)
                delay *= 2
        return False


class LoggingDeliveryChannel(DeliveryChannel):
    """Used when no push credentials are configured; every send is logged as delivered."""

    async def send(
        self,
        recipients: Sequence[Recipient],
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> DeliveryResult:
        logger.info(
            "Push (logging channel): title=%s recipients=%s body_len=%s",
            title,
            ",".join(r.user_id for r in recipients),
            len(body or ""),
        )
        return DeliveryResult(sent=[r.user_id for r in recipients])
