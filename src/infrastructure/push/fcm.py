from __future__ import annotations

import logging
from typing import Iterable

import httpx

from src.application.errors import DeliveryError

logger = logging.getLogger(__name__)


class FCMClient:
    """Minimal FCM legacy HTTP sender (server key)."""

    def __init__(
        self,
        server_key: str,
        *,
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.server_key = server_key
        self.endpoint = "https://fcm.googleapis.com/fcm/send"
        self.timeout = timeout
        self.transport = transport

    async def send_to_tokens(
        self,
        *,
        tokens: Iterable[str],
        title: str,
        body: str,
        data: dict | None = None,
    ) -> None:
        headers = {
            "Authorization": f"key={self.server_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "registration_ids": list(tokens),
            "notification": {"title": title, "body": body},
            # FCM data values must be strings
            "data": {k: str(v) for k, v in (data or {}).items() if v is not None},
            "priority": "high",
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.post(self.endpoint, headers=headers, json=payload)
        if resp.status_code >= 400:
            logger.error("FCM error %s: %s", resp.status_code, resp.text)
            raise DeliveryError(f"FCM responded {resp.status_code}")
        logger.debug("FCM sent: %s", resp.text)
