"""RPC method handlers for the stub daemon.

All handlers are registered on the module-level ``registry`` which the
server imports.  Each one receives the request ``arguments`` and the
app's ``DaemonState`` and returns the response ``arguments``.
"""

from __future__ import annotations

import logging
from typing import Any

from transmission_stub.dispatcher import Registry, RpcFailure
from transmission_stub.state import (
    INVALID_TORRENT,
    STATUS_DOWNLOADING,
    STATUS_QUEUED_DOWNLOAD,
    STATUS_STOPPED,
    DaemonState,
)

log = logging.getLogger(__name__)

registry = Registry()

RECENTLY_ACTIVE = "recently-active"


def _ids(arguments: dict[str, Any]) -> list[int | str] | None:
    """Normalise the ``ids`` argument; None means every torrent."""
    ids = arguments.get("ids")
    if ids is None:
        return None
    if isinstance(ids, list):
        return ids
    return [ids]


# ── Session ──────────────────────────────────────────────────────────


@registry.handler("session-get")
async def session_get(arguments: dict[str, Any], state: DaemonState) -> dict[str, Any]:
    return state.session_settings()


# ── Torrents ─────────────────────────────────────────────────────────


@registry.handler("torrent-get")
async def torrent_get(arguments: dict[str, Any], state: DaemonState) -> dict[str, Any]:
    """Return the requested fields of the selected torrents."""
    fields = arguments.get("fields")
    if not isinstance(fields, list):
        raise RpcFailure("no fields specified")

    recent = arguments.get("ids") == RECENTLY_ACTIVE
    selected = state.select(None if recent else _ids(arguments))
    torrents = [
        {k: v for k, v in t.to_wire().items() if k in fields} for t in selected
    ]

    result: dict[str, Any] = {"torrents": torrents}
    if recent:
        result["removed"] = list(state.removed)
    return result


@registry.handler("torrent-add")
async def torrent_add(arguments: dict[str, Any], state: DaemonState) -> dict[str, Any]:
    filename = arguments.get("filename")
    if not isinstance(filename, str):
        raise RpcFailure("no filename or metainfo specified")
    try:
        torrent, duplicate = state.add_magnet(
            filename,
            download_dir=arguments.get("download-dir"),
            paused=bool(arguments.get("paused", False)),
        )
    except ValueError:
        raise RpcFailure(INVALID_TORRENT) from None

    log.info("torrent-add %s (duplicate=%s)", torrent.hash_string, duplicate)
    key = "torrent-duplicate" if duplicate else "torrent-added"
    return {key: torrent.to_add_result()}


@registry.handler("torrent-remove")
async def torrent_remove(arguments: dict[str, Any], state: DaemonState) -> dict[str, Any]:
    ids = _ids(arguments)
    if ids is None:
        raise RpcFailure("no torrent ids specified")
    gone = state.remove(ids)
    log.info(
        "torrent-remove %s (delete-local-data=%s)",
        gone,
        bool(arguments.get("delete-local-data", False)),
    )
    return {}


@registry.handler("torrent-start")
async def torrent_start(arguments: dict[str, Any], state: DaemonState) -> dict[str, Any]:
    state.set_status(_ids(arguments), STATUS_QUEUED_DOWNLOAD)
    return {}


@registry.handler("torrent-start-now")
async def torrent_start_now(
    arguments: dict[str, Any], state: DaemonState
) -> dict[str, Any]:
    """Start immediately, bypassing the download queue."""
    state.set_status(_ids(arguments), STATUS_DOWNLOADING)
    return {}


@registry.handler("torrent-stop")
async def torrent_stop(arguments: dict[str, Any], state: DaemonState) -> dict[str, Any]:
    state.set_status(_ids(arguments), STATUS_STOPPED)
    return {}
