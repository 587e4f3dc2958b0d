"""Shared test helpers.

``Scripted`` is an ``httpx.MockTransport`` handler that replays canned
responses in order (the last one repeats) and records every request.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from transmission_client.config import ClientConfig, SessionRetryConfig
from transmission_client.request import RequestEngine
from transmission_rpc.rpc import SESSION_HEADER

Reply = Callable[[httpx.Request], httpx.Response]


def reply(
    status: int,
    *,
    json_body: Any = None,
    content: bytes = b"",
    headers: dict[str, str] | None = None,
) -> Reply:
    def build(request: httpx.Request) -> httpx.Response:
        if json_body is not None:
            return httpx.Response(status, json=json_body, headers=headers)
        return httpx.Response(status, content=content, headers=headers)

    return build


def conflict(token: str = "abc123") -> Reply:
    return reply(409, headers={SESSION_HEADER: token})


class Scripted:
    def __init__(self, *replies: Reply) -> None:
        self._replies = list(replies)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        build = self._replies.pop(0) if len(self._replies) > 1 else self._replies[0]
        return build(request)

    def bodies(self) -> list[Any]:
        return [json.loads(r.content) if r.content else None for r in self.requests]


class FakeSession:
    """Stand-in token provider counting fetches and resets."""

    def __init__(self, token: str = "abc123") -> None:
        self.token = token
        self.fetches = 0
        self.resets = 0

    async def get_token(self) -> str:
        self.fetches += 1
        return self.token

    def reset_token(self) -> None:
        self.resets += 1


class SleepLog:
    """Records requested delays instead of sleeping."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def make(self):
        async def sleep(seconds: float) -> None:
            self.calls.append(seconds)

        return sleep


def mock_http(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url=ClientConfig().base_url,
    )


def make_engine(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    session: Any = None,
    max_retries: int = 3,
    delay: int = 0,
    sleep_log: SleepLog | None = None,
) -> RequestEngine:
    config = ClientConfig(retry=SessionRetryConfig(max_retries=max_retries, delay=delay))
    kwargs: dict[str, Any] = {}
    if sleep_log is not None:
        kwargs["sleep"] = sleep_log.make()
    return RequestEngine(config, session=session, http=mock_http(handler), **kwargs)


@pytest.fixture
def sleep_log() -> SleepLog:
    return SleepLog()
