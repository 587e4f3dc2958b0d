"""Transmission client — typed methods over the request engine.

* ``ping()``                          → endpoint reachable?
* ``get_session()``                   → daemon settings
* ``list_torrents(ids, fields)``      → torrents
* ``get_recently_active_torrents()``  → changed + removed torrents
* ``add_magnet(magnet, ...)``         → added (or duplicate) torrent
* ``remove_torrents / start_torrents / stop_torrents``

Every method validates the response shape and raises
``TransmissionClientError`` (with the real failure as ``__cause__``).

Run directly for a quick demo::

    python -m transmission_client.client
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, TypeVar, Union

from pydantic import BaseModel

from transmission_client.config import ClientConfig
from transmission_client.request import RequestEngine
from transmission_rpc.errors import TransmissionClientError
from transmission_rpc.fields import ALL_TORRENT_FIELDS
from transmission_rpc.rpc import RpcRequest
from transmission_rpc.schemas import (
    PingResponse,
    RemoveTorrentResponse,
    Session,
    SessionResponse,
    StartTorrentsResponse,
    StopTorrentsResponse,
    Torrent,
    TorrentAdd,
    TorrentAddResponse,
    TorrentGetArguments,
    TorrentResponse,
    parse_response,
)

log = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# A torrent is addressed by numeric id or by hash string
TorrentId = Union[int, str]
TorrentIds = Union[TorrentId, Iterable[TorrentId]]


def _as_list(ids: TorrentIds) -> list[TorrentId]:
    if isinstance(ids, (int, str)):
        return [ids]
    return list(ids)


def _fields(fields: Iterable[str] | None) -> list[str]:
    # An empty list is sent as is; only None means every field
    return list(ALL_TORRENT_FIELDS if fields is None else fields)


class TransmissionClient:
    """Async client for the Transmission RPC API.

    Parameters
    ----------
    config : ClientConfig
        Endpoint and credentials; ignored when *engine* is given.
    engine : RequestEngine
        Pre-built engine, e.g. one wired to a test transport.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        engine: RequestEngine | None = None,
    ) -> None:
        self._engine = engine or RequestEngine(config)

    @property
    def engine(self) -> RequestEngine:
        return self._engine

    # -- Lifecycle -----------------------------------------------------

    async def close(self) -> None:
        await self._engine.aclose()

    async def __aenter__(self) -> "TransmissionClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    # -- Internal helper -----------------------------------------------

    async def _call(
        self, request: RpcRequest | None, model: type[ModelT], failure: str
    ) -> ModelT:
        """Send *request*, validate against *model*, wrap any failure."""
        log.debug("call → %s", request.method if request else "<ping>")
        try:
            body = request.encode() if request is not None else None
            response = await self._engine.request(body)
            return parse_response(model, response)
        except Exception as exc:
            raise TransmissionClientError(failure) from exc

    # -- RPC methods ---------------------------------------------------

    async def ping(self) -> None:
        """Check that the endpoint is up and speaks the expected protocol."""
        await self._call(
            None, PingResponse, "Unable to ping the Transmission RPC endpoint"
        )

    async def get_session(self) -> Session:
        """Return the daemon's session settings and version info."""
        resp = await self._call(
            RpcRequest("session-get"),
            SessionResponse,
            "Unable to get session info from Transmission RPC endpoint",
        )
        return resp.arguments

    async def list_torrents(
        self,
        ids: TorrentIds | None = None,
        fields: Iterable[str] | None = None,
    ) -> list[Torrent]:
        """List torrents, all of them unless *ids* narrows the selection.

        *fields* picks which torrent fields the daemon returns; all of
        them by default (see ``transmission_rpc.fields``).
        """
        arguments: dict[str, Any] = {}
        if ids is not None:
            arguments["ids"] = _as_list(ids)
        arguments["fields"] = _fields(fields)

        resp = await self._call(
            RpcRequest("torrent-get", arguments),
            TorrentResponse,
            "Unable to get torrents from Transmission RPC endpoint",
        )
        return resp.arguments.torrents

    async def get_recently_active_torrents(
        self, fields: Iterable[str] | None = None
    ) -> TorrentGetArguments:
        """Return torrents changed recently plus the ids of removed ones."""
        resp = await self._call(
            RpcRequest(
                "torrent-get",
                {
                    "ids": "recently-active",
                    "fields": _fields(fields),
                },
            ),
            TorrentResponse,
            "Unable to get recently active torrents from Transmission RPC endpoint",
        )
        return resp.arguments

    async def add_magnet(
        self,
        magnet: str,
        download_dir: str | None = None,
        paused: bool | None = None,
        **extra: Any,
    ) -> TorrentAdd:
        """Add a magnet link.

        Without *download_dir* the daemon's default download directory is
        used.  Torrents start right away unless *paused* is true.  Extra
        keyword arguments are passed through as ``torrent-add`` arguments.
        Adding a torrent the daemon already has returns the existing one.
        """
        arguments: dict[str, Any] = {"filename": magnet}
        if download_dir:
            arguments["download-dir"] = download_dir
        if paused is not None:
            arguments["paused"] = paused
        arguments.update(extra)

        resp = await self._call(
            RpcRequest("torrent-add", arguments),
            TorrentAddResponse,
            f"Unable to add magnet to Transmission RPC endpoint: {magnet}",
        )
        return resp.arguments.torrent

    async def remove_torrents(
        self, ids: TorrentIds, delete_local_data: bool = False
    ) -> None:
        """Remove torrents, optionally deleting their downloaded data."""
        await self._call(
            RpcRequest(
                "torrent-remove",
                {"ids": _as_list(ids), "delete-local-data": delete_local_data},
            ),
            RemoveTorrentResponse,
            "Unable to remove torrents from the Transmission RPC endpoint",
        )

    async def start_torrents(
        self, ids: TorrentIds | None = None, now: bool = False
    ) -> None:
        """Start torrents (all when *ids* is None); *now* skips the queue."""
        arguments: dict[str, Any] = {}
        if ids is not None:
            arguments["ids"] = _as_list(ids)
        await self._call(
            RpcRequest("torrent-start-now" if now else "torrent-start", arguments),
            StartTorrentsResponse,
            "Unable to start torrents in the Transmission RPC endpoint",
        )

    async def stop_torrents(self, ids: TorrentIds | None = None) -> None:
        """Stop torrents (all when *ids* is None)."""
        arguments: dict[str, Any] = {}
        if ids is not None:
            arguments["ids"] = _as_list(ids)
        await self._call(
            RpcRequest("torrent-stop", arguments),
            StopTorrentsResponse,
            "Unable to stop torrents in the Transmission RPC endpoint",
        )


# ── Demo entrypoint ──────────────────────────────────────────────────


async def _demo() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    async with TransmissionClient(ClientConfig.from_env()) as client:
        print("── ping ──")
        await client.ping()
        print("  ok")

        print("── session ──")
        session = await client.get_session()
        print(f"  version: {session.version} (rpc {session.rpc_version})")

        print("── torrents ──")
        for torrent in await client.list_torrents(fields=["id", "name", "status"]):
            print(f"  {torrent.id:>4}  {torrent.status or '?':<16} {torrent.name}")

        print("── done ──")


if __name__ == "__main__":
    import anyio

    anyio.run(_demo)
