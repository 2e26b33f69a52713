from __future__ import annotations

import json

import httpx
import pytest

from src.application.errors import DeliveryError
from src.application.interfaces.repositories.recipients import Recipient
from src.config.settings import Settings
from src.infrastructure.push.channel import LoggingDeliveryChannel, PushDeliveryChannel
from src.infrastructure.push.factory import build_delivery_channel
from src.infrastructure.push.fcm import FCMClient


class FlakySender:
    def __init__(self, failures: dict[str, int]) -> None:
        self.failures = dict(failures)
        self.calls: list[list[str]] = []

    async def send_to_tokens(self, *, tokens, title, body, data=None):
        tokens = list(tokens)
        self.calls.append(tokens)
        key = tokens[0]
        if self.failures.get(key, 0) > 0:
            self.failures[key] -= 1
            raise DeliveryError("temporary failure")


async def test_retries_with_backoff_then_succeeds():
    delays: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    sender = FlakySender({"tok-a": 2})
    channel = PushDeliveryChannel(sender, attempts=3, delay=2, sleep=fake_sleep)

    result = await channel.send([Recipient("a", ["tok-a"])], "Title", "Body")

    assert result.sent == ["a"]
    assert result.failed == []
    assert delays == [2, 4]
    assert len(sender.calls) == 3


async def test_gives_up_after_attempts_per_recipient():
    async def fake_sleep(seconds: float) -> None:
        return None

    sender = FlakySender({"tok-a": 5})
    channel = PushDeliveryChannel(sender, attempts=3, sleep=fake_sleep)

    result = await channel.send(
        [Recipient("a", ["tok-a"]), Recipient("b", ["tok-b"]), Recipient("c", [])],
        "Title",
        "Body",
    )

    assert result.failed == ["a"]
    assert result.sent == ["b"]
    assert result.sent_count + result.failed_count == 2


async def test_fcm_client_posts_string_data():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": 1})

    client = FCMClient("server-key", transport=httpx.MockTransport(handler))
    await client.send_to_tokens(
        tokens=["t1", "t2"], title="Hi", body="There", data={"count": 2, "skip": None}
    )

    assert captured["auth"] == "key=server-key"
    assert captured["body"]["registration_ids"] == ["t1", "t2"]
    assert captured["body"]["data"] == {"count": "2"}


async def test_fcm_client_raises_on_error_status():
    transport = httpx.MockTransport(lambda request: httpx.Response(401, text="bad key"))
    client = FCMClient("server-key", transport=transport)
    with pytest.raises(DeliveryError):
        await client.send_to_tokens(tokens=["t1"], title="Hi", body="There")


def test_factory_falls_back_to_logging_channel():
    settings = Settings.model_validate({"database_url": "sqlite+aiosqlite:///x.db"})
    assert isinstance(build_delivery_channel(settings), LoggingDeliveryChannel)

    with_key = Settings.model_validate(
        {
            "database_url": "sqlite+aiosqlite:///x.db",
            "fcm_server_key": "k",
            "push_retry_attempts": 5,
        }
    )
    channel = build_delivery_channel(with_key)
    assert isinstance(channel, PushDeliveryChannel)
    assert channel.attempts == 5
