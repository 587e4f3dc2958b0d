"""Tests for the session token manager."""

import anyio
import httpx
import pytest
from conftest import Scripted, conflict, mock_http, reply

from transmission_client.config import ClientConfig
from transmission_client.session import SessionManager
from transmission_rpc.errors import MissingSessionTokenError
from transmission_rpc.rpc import SESSION_HEADER


def make_session(handler) -> SessionManager:
    config = ClientConfig()
    return SessionManager(mock_http(handler), config.pathname, config.authorization)


@pytest.mark.anyio
async def test_bootstrap_returns_header_value():
    server = Scripted(conflict("abc123"))
    session = make_session(server)

    assert await session.get_token() == "abc123"
    assert session.token == "abc123"


@pytest.mark.anyio
async def test_token_request_is_bodiless_and_authenticated():
    server = Scripted(conflict())
    session = make_session(server)

    await session.get_token()

    (sent,) = server.requests
    assert sent.method == "POST"
    assert sent.url.path == "/transmission/rpc"
    assert sent.content == b""
    assert sent.headers["Authorization"] == ClientConfig().authorization
    assert SESSION_HEADER not in sent.headers


@pytest.mark.anyio
async def test_cached_token_skips_network():
    server = Scripted(conflict())
    session = make_session(server)

    await session.get_token()
    await session.get_token()

    assert len(server.requests) == 1


@pytest.mark.anyio
async def test_reset_forces_new_token_request():
    server = Scripted(conflict("first"), conflict("second"))
    session = make_session(server)

    assert await session.get_token() == "first"
    session.reset_token()
    assert await session.get_token() == "second"
    assert len(server.requests) == 2


@pytest.mark.anyio
async def test_missing_header_raises_with_body():
    server = Scripted(reply(410, content=b"gone"))
    session = make_session(server)

    with pytest.raises(MissingSessionTokenError, match="Unable to obtain a session ID") as exc_info:
        await session.get_token()
    assert exc_info.value.body == b"gone"
    assert session.token is None


@pytest.mark.anyio
async def test_token_accepted_from_any_status():
    server = Scripted(reply(200, headers={SESSION_HEADER: "ok-token"}))
    session = make_session(server)

    assert await session.get_token() == "ok-token"


@pytest.mark.anyio
async def test_transport_error_propagates():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    session = make_session(handler)

    with pytest.raises(httpx.ConnectError):
        await session.get_token()


def test_reset_is_idempotent():
    session = make_session(Scripted(conflict()))
    session.reset_token()
    session.reset_token()
    assert session.token is None


@pytest.mark.anyio
async def test_concurrent_first_use_fetches_once():
    server = Scripted(conflict("shared"))

    async def slow_daemon(request):
        # Hold the reply so every task reaches get_token while the sent is in flight
        await anyio.sleep(0.01)
        return server(request)

    session = make_session(slow_daemon)
    tokens = []

    async def fetch():
        tokens.append(await session.get_token())

    async with anyio.create_task_group() as tg:
        for _ in range(5):
            tg.start_soon(fetch)

    assert tokens == ["shared"] * 5
    assert len(server.requests) == 1
