"""In-memory daemon state: session id and a handful of torrents."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, urlsplit

STATUS_STOPPED = 0
STATUS_QUEUED_DOWNLOAD = 3
STATUS_DOWNLOADING = 4

INVALID_TORRENT = "invalid or corrupt torrent file"


@dataclass(slots=True)
class StubTorrent:
    id: int
    hash_string: str
    name: str
    download_dir: str
    status: int = STATUS_QUEUED_DOWNLOAD
    added_date: int = field(default_factory=lambda: int(time.time()))
    magnet_link: str = ""
    labels: list[str] = field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "hashString": self.hash_string,
            "name": self.name,
            "downloadDir": self.download_dir,
            "status": self.status,
            "addedDate": self.added_date,
            "magnetLink": self.magnet_link,
            "labels": list(self.labels),
            "error": 0,
            "errorString": "",
            "eta": -1,
            "isFinished": False,
            "percentDone": 0.0,
            "rateDownload": 0,
            "rateUpload": 0,
            "totalSize": 0,
            "queuePosition": self.id - 1,
        }

    def to_add_result(self) -> dict[str, Any]:
        return {"id": self.id, "hashString": self.hash_string, "name": self.name}


def parse_magnet(link: str) -> tuple[str, str]:
    """Return ``(info_hash, display_name)`` for a magnet link.

    Raises ``ValueError`` when *link* is not a btih magnet.
    """
    parts = urlsplit(link)
    if parts.scheme != "magnet":
        raise ValueError(f"not a magnet link: {link!r}")
    query = parse_qs(parts.query)
    for xt in query.get("xt", []):
        if xt.lower().startswith("urn:btih:"):
            info_hash = xt[len("urn:btih:") :].lower()
            name = query.get("dn", [info_hash])[0]
            return info_hash, name
    raise ValueError(f"magnet link has no btih: {link!r}")


@dataclass
class DaemonState:
    """Everything the stub daemon remembers between requests."""

    download_dir: str = "/downloads"
    version: str = "4.0.5 (stub)"
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    torrents: dict[int, StubTorrent] = field(default_factory=dict)
    removed: list[int] = field(default_factory=list)
    _next_id: int = 1

    # -- Session -------------------------------------------------------
    def rotate_session(self) -> str:
        """Issue a new session id, invalidating the one clients hold."""
        self.session_id = uuid.uuid4().hex
        return self.session_id

    def session_settings(self) -> dict[str, Any]:
        return {
            "alt-speed-down": 50,
            "alt-speed-enabled": False,
            "alt-speed-time-begin": 540,
            "alt-speed-time-day": 127,
            "alt-speed-time-enabled": False,
            "alt-speed-time-end": 1020,
            "alt-speed-up": 50,
            "blocklist-enabled": False,
            "blocklist-size": 0,
            "blocklist-url": "http://www.example.com/blocklist",
            "cache-size-mb": 4,
            "config-dir": "/config",
            "dht-enabled": True,
            "download-dir": self.download_dir,
            "download-dir-free-space": 100_000_000_000,
            "download-queue-enabled": True,
            "download-queue-size": 5,
            "encryption": "preferred",
            "idle-seeding-limit": 30,
            "idle-seeding-limit-enabled": False,
            "incomplete-dir": "/incomplete",
            "incomplete-dir-enabled": False,
            "lpd-enabled": False,
            "peer-limit-global": 200,
            "peer-limit-per-torrent": 50,
            "peer-port": 51413,
            "peer-port-random-on-start": False,
            "pex-enabled": True,
            "port-forwarding-enabled": True,
            "queue-stalled-enabled": True,
            "queue-stalled-minutes": 30,
            "rename-partial-files": True,
            "rpc-version": 17,
            "rpc-version-minimum": 14,
            "script-torrent-done-enabled": False,
            "script-torrent-done-filename": "",
            "seed-queue-enabled": False,
            "seed-queue-size": 10,
            "seedRatioLimit": 2,
            "seedRatioLimited": False,
            "session-id": self.session_id,
            "speed-limit-down": 100,
            "speed-limit-down-enabled": False,
            "speed-limit-up": 100,
            "speed-limit-up-enabled": False,
            "start-added-torrents": True,
            "trash-original-torrent-files": False,
            "units": {
                "memory-bytes": 1024,
                "memory-units": ["KiB", "MiB", "GiB", "TiB"],
                "size-bytes": 1000,
                "size-units": ["kB", "MB", "GB", "TB"],
                "speed-bytes": 1000,
                "speed-units": ["kB/s", "MB/s", "GB/s", "TB/s"],
            },
            "utp-enabled": True,
            "version": self.version,
        }

    # -- Torrents ------------------------------------------------------
    def add_magnet(
        self, link: str, download_dir: str | None = None, paused: bool = False
    ) -> tuple[StubTorrent, bool]:
        """Add a torrent; returns ``(torrent, duplicate)``."""
        info_hash, name = parse_magnet(link)
        for torrent in self.torrents.values():
            if torrent.hash_string == info_hash:
                return torrent, True

        torrent = StubTorrent(
            id=self._next_id,
            hash_string=info_hash,
            name=name,
            download_dir=download_dir or self.download_dir,
            status=STATUS_STOPPED if paused else STATUS_QUEUED_DOWNLOAD,
            magnet_link=link,
        )
        self.torrents[torrent.id] = torrent
        self._next_id += 1
        return torrent, False

    def select(self, ids: list[int | str] | None) -> list[StubTorrent]:
        """Torrents matching numeric ids or hash strings; all when *ids* is None."""
        if ids is None:
            return list(self.torrents.values())
        wanted = set(ids)
        return [
            t
            for t in self.torrents.values()
            if t.id in wanted or t.hash_string in wanted
        ]

    def remove(self, ids: list[int | str]) -> list[int]:
        gone = [t.id for t in self.select(ids)]
        for torrent_id in gone:
            del self.torrents[torrent_id]
        self.removed.extend(gone)
        return gone

    def set_status(self, ids: list[int | str] | None, status: int) -> None:
        for torrent in self.select(ids):
            torrent.status = status
