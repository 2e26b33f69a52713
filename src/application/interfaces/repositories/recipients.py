from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(slots=True)
class Recipient:
    user_id: str
    tokens: list[str] = field(default_factory=list)


class RecipientsRepository(Protocol):
    async def list_recipients(self) -> list[Recipient]: ...
