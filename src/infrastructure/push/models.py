from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from src.application.interfaces.repositories.recipients import Recipient


@dataclass(slots=True)
class DeliveryResult:
    sent: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def sent_count(self) -> int:
        return len(self.sent)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


class DeliveryChannel:
    """Fire-and-forget fan-out of one notification to a set of recipients."""

    async def send(
        self,
        recipients: Sequence[Recipient],
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> DeliveryResult:  # pragma: no cover - interface
        raise NotImplementedError
