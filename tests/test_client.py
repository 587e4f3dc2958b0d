"""Tests for the RPC-method layer: payload shaping and error wrapping.

The daemon is faked with ``httpx.MockTransport`` so every outbound
payload can be inspected.
"""

import json
import os
import subprocess
import sys

import httpx
import pytest
from conftest import make_engine

from transmission_client.client import TransmissionClient
from transmission_rpc.errors import (
    InvalidResponseError,
    RpcStatusError,
    TransmissionClientError,
)
from transmission_rpc.fields import ALL_TORRENT_FIELDS
from transmission_rpc.rpc import SESSION_HEADER

TORRENT_ADDED = {"id": 7, "hashString": "c0ffee", "name": "debian.iso"}


class RecordingDaemon:
    """Hands out a session id, records payloads, answers by method."""

    def __init__(self, overrides: dict | None = None) -> None:
        self.payloads: list = []
        self.overrides = overrides or {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if SESSION_HEADER not in request.headers:
            return httpx.Response(409, headers={SESSION_HEADER: "sid"})
        if not request.content:
            self.payloads.append(None)
            return httpx.Response(200, json={"result": "no method name", "arguments": {}})

        payload = json.loads(request.content)
        self.payloads.append(payload)
        method = payload["method"]
        if method in self.overrides:
            return self.overrides[method]
        if method == "torrent-get":
            arguments = {"torrents": [{"id": 1, "name": "a", "status": 4}]}
            if payload["arguments"].get("ids") == "recently-active":
                arguments["removed"] = [2]
            return httpx.Response(200, json={"result": "success", "arguments": arguments})
        if method == "torrent-add":
            return httpx.Response(
                200, json={"result": "success", "arguments": {"torrent-added": TORRENT_ADDED}}
            )
        return httpx.Response(200, json={"result": "success", "arguments": {}})


@pytest.fixture
def daemon():
    return RecordingDaemon()


@pytest.fixture
def client(daemon):
    return TransmissionClient(engine=make_engine(daemon))


# ── Payload shaping ──────────────────────────────────────────────────


@pytest.mark.anyio
async def test_ping_sends_no_body(client, daemon):
    await client.ping()
    assert daemon.payloads == [None]


@pytest.mark.anyio
async def test_list_torrents_defaults(client, daemon):
    torrents = await client.list_torrents()

    assert daemon.payloads == [
        {"method": "torrent-get", "arguments": {"fields": list(ALL_TORRENT_FIELDS)}}
    ]
    assert torrents[0].status == "DOWNLOADING"


@pytest.mark.anyio
async def test_list_torrents_wraps_scalar_id(client, daemon):
    await client.list_torrents(ids="abc", fields=["id", "name"])
    assert daemon.payloads[0]["arguments"] == {"ids": ["abc"], "fields": ["id", "name"]}


@pytest.mark.anyio
async def test_recently_active(client, daemon):
    recent = await client.get_recently_active_torrents(fields=["id"])

    assert daemon.payloads[0]["arguments"] == {"ids": "recently-active", "fields": ["id"]}
    assert recent.removed == [2]
    assert [t.id for t in recent.torrents] == [1]


@pytest.mark.anyio
async def test_add_magnet_payload(client, daemon):
    added = await client.add_magnet(
        "magnet:?xt=urn:btih:c0ffee", download_dir="/data", paused=True, labels=["iso"]
    )

    assert daemon.payloads[0] == {
        "method": "torrent-add",
        "arguments": {
            "filename": "magnet:?xt=urn:btih:c0ffee",
            "download-dir": "/data",
            "paused": True,
            "labels": ["iso"],
        },
    }
    assert added.id == 7
    assert added.hash_string == "c0ffee"


@pytest.mark.anyio
async def test_add_magnet_minimal_payload(client, daemon):
    await client.add_magnet("magnet:?xt=urn:btih:c0ffee")
    assert daemon.payloads[0]["arguments"] == {"filename": "magnet:?xt=urn:btih:c0ffee"}


@pytest.mark.anyio
async def test_remove_torrents_payload(client, daemon):
    await client.remove_torrents(1)
    await client.remove_torrents([1, 2], delete_local_data=True)

    assert daemon.payloads == [
        {"method": "torrent-remove", "arguments": {"ids": [1], "delete-local-data": False}},
        {"method": "torrent-remove", "arguments": {"ids": [1, 2], "delete-local-data": True}},
    ]


@pytest.mark.anyio
async def test_start_torrents_payload(client, daemon):
    await client.start_torrents()
    await client.start_torrents(ids=["h1", "h2"])
    await client.start_torrents(ids=3, now=True)

    assert daemon.payloads == [
        {"method": "torrent-start", "arguments": {}},
        {"method": "torrent-start", "arguments": {"ids": ["h1", "h2"]}},
        {"method": "torrent-start-now", "arguments": {"ids": [3]}},
    ]


@pytest.mark.anyio
async def test_stop_torrents_payload(client, daemon):
    await client.stop_torrents()
    await client.stop_torrents(ids=(1, 2))

    assert daemon.payloads == [
        {"method": "torrent-stop", "arguments": {}},
        {"method": "torrent-stop", "arguments": {"ids": [1, 2]}},
    ]


@pytest.mark.anyio
async def test_ids_accept_any_iterable(client, daemon):
    await client.stop_torrents(ids={2, 1})
    await client.remove_torrents(h for h in ("h1", "h2"))

    assert sorted(daemon.payloads[0]["arguments"]["ids"]) == [1, 2]
    assert daemon.payloads[1]["arguments"]["ids"] == ["h1", "h2"]


@pytest.mark.anyio
async def test_empty_fields_are_sent_as_is(client, daemon):
    await client.list_torrents(fields=[])
    await client.get_recently_active_torrents(fields=())

    assert daemon.payloads[0]["arguments"] == {"fields": []}
    assert daemon.payloads[1]["arguments"] == {"ids": "recently-active", "fields": []}


# ── Error wrapping ───────────────────────────────────────────────────


@pytest.mark.anyio
async def test_invalid_shape_is_wrapped():
    daemon = RecordingDaemon(
        {"torrent-get": httpx.Response(200, json={"result": "success", "arguments": {"torrents": "nope"}})}
    )
    client = TransmissionClient(engine=make_engine(daemon))

    with pytest.raises(TransmissionClientError, match="Unable to get torrents") as exc_info:
        await client.list_torrents()

    cause = exc_info.value.__cause__
    assert isinstance(cause, InvalidResponseError)
    assert cause.errors


@pytest.mark.anyio
async def test_failed_result_is_wrapped():
    daemon = RecordingDaemon(
        {"torrent-add": httpx.Response(200, json={"result": "invalid or corrupt torrent file", "arguments": {}})}
    )
    client = TransmissionClient(engine=make_engine(daemon))

    with pytest.raises(TransmissionClientError, match="magnet:bad"):
        await client.add_magnet("magnet:bad")


@pytest.mark.anyio
async def test_engine_error_is_wrapped():
    daemon = RecordingDaemon({"session-get": httpx.Response(500)})
    client = TransmissionClient(engine=make_engine(daemon))

    with pytest.raises(TransmissionClientError, match="session info") as exc_info:
        await client.get_session()
    assert isinstance(exc_info.value.__cause__, RpcStatusError)
    assert exc_info.value.__cause__.status_code == 500


@pytest.mark.anyio
async def test_ping_unexpected_response():
    def handler(request):
        if SESSION_HEADER not in request.headers:
            return httpx.Response(409, headers={SESSION_HEADER: "sid"})
        return httpx.Response(200, json={"result": "success", "arguments": {}})

    client = TransmissionClient(engine=make_engine(handler))

    with pytest.raises(TransmissionClientError, match="Unable to ping"):
        await client.ping()


@pytest.mark.anyio
async def test_unserializable_arguments_are_wrapped(client, daemon):
    with pytest.raises(TransmissionClientError, match="magnet:x") as exc_info:
        await client.add_magnet("magnet:x", labels={"iso"})

    assert isinstance(exc_info.value.__cause__, TypeError)
    assert daemon.payloads == []


def test_client_import_does_not_need_starlette():
    # starlette only ships with the daemon/test extras
    code = "import sys, transmission_client; assert 'starlette' not in sys.modules"
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(sys.path)}
    subprocess.run([sys.executable, "-c", code], check=True, env=env)
