"""transmission_rpc — Transmission RPC wire-format models and schemas."""

from transmission_rpc.errors import (
    InvalidResponseError,
    MissingSessionTokenError,
    NonJsonResponseError,
    RpcStatusError,
    SessionRetriesExhaustedError,
    TransmissionClientError,
    TransmissionError,
)
from transmission_rpc.fields import (
    ALL_TORRENT_FIELDS,
    TORRENT_STATUS,
    TorrentField,
    get_status,
)
from transmission_rpc.rpc import (
    CONFLICT_STATUS,
    DEFAULT_PATHNAME,
    RESULT_NO_METHOD,
    RESULT_PARSE_ERROR,
    RESULT_SUCCESS,
    RESULT_UNKNOWN_METHOD,
    SESSION_HEADER,
    RpcRequest,
)

__all__ = [
    "RpcRequest",
    "SESSION_HEADER",
    "CONFLICT_STATUS",
    "DEFAULT_PATHNAME",
    "RESULT_SUCCESS",
    "RESULT_NO_METHOD",
    "RESULT_UNKNOWN_METHOD",
    "RESULT_PARSE_ERROR",
    "TorrentField",
    "ALL_TORRENT_FIELDS",
    "TORRENT_STATUS",
    "get_status",
    "TransmissionError",
    "MissingSessionTokenError",
    "SessionRetriesExhaustedError",
    "RpcStatusError",
    "NonJsonResponseError",
    "InvalidResponseError",
    "TransmissionClientError",
]
