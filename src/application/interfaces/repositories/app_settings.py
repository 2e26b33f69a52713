from __future__ import annotations

from typing import Any, Protocol


class AppSettingsRepository(Protocol):
    async def get(self, key: str) -> dict[str, Any] | None: ...

    async def set(self, key: str, value: dict[str, Any]) -> dict[str, Any]: ...
