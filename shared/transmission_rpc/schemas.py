"""Expected response shapes for each RPC method.

Models expose snake_case attributes and validate against the wire names
(camelCase for torrents, kebab-case for the session) through aliases.
Unknown keys are ignored so newer daemons keep validating; known keys
are strict, so a string where a number belongs is an invalid response.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from transmission_rpc.errors import InvalidResponseError
from transmission_rpc.fields import get_status

ModelT = TypeVar("ModelT", bound=BaseModel)


def _to_kebab(name: str) -> str:
    return name.replace("_", "-")


class WireModel(BaseModel):
    """Base class for torrent-shaped models (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, strict=True
    )


# ── Envelope ─────────────────────────────────────────────────────────


class RpcResponse(BaseModel):
    """Base envelope every Transmission response shares."""

    model_config = ConfigDict(strict=True)

    result: str
    arguments: Any = None


class PingResponse(RpcResponse):
    """What the daemon answers to a body-less POST."""

    result: Literal["no method name"]
    arguments: dict[str, Any]


# ── Session ──────────────────────────────────────────────────────────


class Units(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_kebab, populate_by_name=True, strict=True
    )

    memory_bytes: int
    memory_units: list[str]
    size_bytes: int
    size_units: list[str]
    speed_bytes: int
    speed_units: list[str]


class Session(BaseModel):
    """Settings and version info returned by ``session-get``."""

    model_config = ConfigDict(
        alias_generator=_to_kebab, populate_by_name=True, strict=True
    )

    alt_speed_down: int
    alt_speed_enabled: bool
    alt_speed_time_begin: int
    alt_speed_time_day: int
    alt_speed_time_enabled: bool
    alt_speed_time_end: int
    alt_speed_up: int
    blocklist_enabled: bool
    blocklist_size: int
    blocklist_url: str
    cache_size_mb: int
    config_dir: str
    dht_enabled: bool
    download_dir: str
    download_dir_free_space: int
    download_queue_enabled: bool
    download_queue_size: int
    encryption: str
    idle_seeding_limit: int
    idle_seeding_limit_enabled: bool
    incomplete_dir: str
    incomplete_dir_enabled: bool
    lpd_enabled: bool
    peer_limit_global: int
    peer_limit_per_torrent: int
    peer_port: int
    peer_port_random_on_start: bool
    pex_enabled: bool
    port_forwarding_enabled: bool
    queue_stalled_enabled: bool
    queue_stalled_minutes: int
    rename_partial_files: bool
    rpc_version: int
    rpc_version_minimum: int
    script_torrent_done_enabled: bool
    script_torrent_done_filename: str
    seed_queue_enabled: bool
    seed_queue_size: int
    seed_ratio_limit: float = Field(alias="seedRatioLimit")
    seed_ratio_limited: bool = Field(alias="seedRatioLimited")
    session_id: str
    speed_limit_down: int
    speed_limit_down_enabled: bool
    speed_limit_up: int
    speed_limit_up_enabled: bool
    start_added_torrents: bool
    trash_original_torrent_files: bool
    units: Units
    utp_enabled: bool
    version: str


class SessionResponse(RpcResponse):
    result: Literal["success"]
    arguments: Session


# ── Torrents ─────────────────────────────────────────────────────────


class FileStat(WireModel):
    bytes_completed: int
    priority: int
    wanted: bool


class TorrentFile(WireModel):
    bytes_completed: int
    length: int
    name: str


class PeersFrom(WireModel):
    from_cache: int
    from_dht: int
    from_incoming: int
    from_lpd: int
    from_ltep: int
    from_pex: int
    from_tracker: int


class Tracker(WireModel):
    announce: str
    id: int
    scrape: str
    tier: int


class Torrent(WireModel):
    """One torrent from ``torrent-get``.

    Only ``id`` is guaranteed: the daemon returns just the requested
    fields.  ``status`` arrives as a number and is exposed as its label
    (``"DOWNLOADING"``, ``"SEEDING"``, ...).
    """

    id: int
    activity_date: int | None = None
    added_date: int | None = None
    comment: str | None = None
    corrupt_ever: int | None = None
    creator: str | None = None
    desired_available: int | None = None
    done_date: int | None = None
    download_dir: str | None = None
    download_limit: int | None = None
    download_limited: bool | None = None
    downloaded_ever: int | None = None
    error: int | None = None
    error_string: str | None = None
    eta: int | None = None
    eta_idle: int | None = None
    file_stats: list[FileStat] | None = None
    files: list[TorrentFile] | None = None
    hash_string: str | None = None
    have_unchecked: int | None = None
    have_valid: int | None = None
    honors_session_limits: bool | None = None
    is_finished: bool | None = None
    is_private: bool | None = None
    is_stalled: bool | None = None
    labels: list[Any] | None = None
    left_until_done: int | None = None
    magnet_link: str | None = None
    manual_announce_time: int | None = None
    max_connected_peers: int | None = None
    metadata_percent_complete: float | None = None
    name: str | None = None
    peer_limit: int | None = Field(default=None, alias="peer-limit")
    peers: list[Any] | None = None
    peers_connected: int | None = None
    peers_from: PeersFrom | None = None
    peers_getting_from_us: int | None = None
    peers_sending_to_us: int | None = None
    percent_done: float | None = None
    priorities: list[int] | None = None
    queue_position: int | None = None
    rate_download: int | None = None
    rate_upload: int | None = None
    recheck_progress: float | None = None
    seconds_downloading: int | None = None
    seconds_seeding: int | None = None
    seed_idle_limit: int | None = None
    seed_ratio_limit: float | None = None
    seed_ratio_mode: int | None = None
    size_when_done: int | None = None
    status: str | None = None
    total_size: int | None = None
    trackers: list[Tracker] | None = None
    upload_ratio: float | None = None
    uploaded_ever: int | None = None
    wanted: list[int] | None = None
    webseeds: list[str] | None = None
    webseeds_sending_to_us: int | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_label(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, int) and not isinstance(value, bool):
            return get_status(value)
        raise ValueError("status must be a number")


class TorrentGetArguments(BaseModel):
    model_config = ConfigDict(strict=True)

    removed: list[int] | None = None
    torrents: list[Torrent]


class TorrentResponse(RpcResponse):
    result: Literal["success"]
    arguments: TorrentGetArguments


class TorrentAdd(WireModel):
    hash_string: str
    id: int
    name: str


class TorrentAddArguments(BaseModel):
    """Either ``torrent-added`` or ``torrent-duplicate``, nothing else."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, strict=True)

    torrent_added: TorrentAdd | None = Field(default=None, alias="torrent-added")
    torrent_duplicate: TorrentAdd | None = Field(
        default=None, alias="torrent-duplicate"
    )

    @model_validator(mode="after")
    def _one_of(self) -> "TorrentAddArguments":
        if self.torrent_added is None and self.torrent_duplicate is None:
            raise ValueError("expected 'torrent-added' or 'torrent-duplicate'")
        return self

    @property
    def torrent(self) -> TorrentAdd:
        return self.torrent_added or self.torrent_duplicate  # type: ignore[return-value]


class TorrentAddResponse(RpcResponse):
    result: Literal["success"]
    arguments: TorrentAddArguments


class _EmptySuccess(RpcResponse):
    result: Literal["success"]
    arguments: dict[str, Any]


class RemoveTorrentResponse(_EmptySuccess):
    pass


class StartTorrentsResponse(_EmptySuccess):
    pass


class StopTorrentsResponse(_EmptySuccess):
    pass


# ── Validation entry point ───────────────────────────────────────────


def parse_response(model: type[ModelT], value: Any) -> ModelT:
    """Validate a decoded body against *model*.

    Raises ``InvalidResponseError`` carrying the list of mismatches.
    The value itself is never repaired or coerced beyond what the
    model declares.
    """
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        raise InvalidResponseError(exc.errors()) from exc


__all__ = [
    "FileStat",
    "PeersFrom",
    "PingResponse",
    "RemoveTorrentResponse",
    "RpcResponse",
    "Session",
    "SessionResponse",
    "StartTorrentsResponse",
    "StopTorrentsResponse",
    "Torrent",
    "TorrentAdd",
    "TorrentAddArguments",
    "TorrentAddResponse",
    "TorrentFile",
    "TorrentGetArguments",
    "TorrentResponse",
    "Tracker",
    "Units",
    "parse_response",
]
