"""Transmission RPC wire-format models.

Pure data — no I/O, no business logic.  The client and the stub daemon
both import these for serialisation only.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

# ── Protocol constants ───────────────────────────────────────────────
DEFAULT_PATHNAME = "/transmission/rpc"
SESSION_HEADER = "X-Transmission-Session-Id"
CONFLICT_STATUS = 409

RESULT_SUCCESS = "success"
RESULT_NO_METHOD = "no method name"
RESULT_UNKNOWN_METHOD = "method name not recognized"
RESULT_PARSE_ERROR = "couldn't parse json"


# ── Models ───────────────────────────────────────────────────────────
@dataclass(slots=True)
class RpcRequest:
    """Outbound Transmission RPC request.

    ``arguments`` is left out of the wire form when ``None`` so that
    argument-less methods such as ``session-get`` send just the method.
    """

    method: str
    arguments: dict[str, Any] | None = field(default=None)

    # -- Convenience ---------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"method": self.method}
        if self.arguments is not None:
            d["arguments"] = self.arguments
        return d

    def encode(self) -> bytes:
        """Serialise to the UTF-8 JSON body sent over the wire."""
        return json.dumps(self.to_dict()).encode("utf-8")

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "RpcRequest":
        """Parse a raw dict into a request — raises ``ValueError`` on bad input."""
        if not isinstance(raw, dict):
            raise ValueError("request must be a JSON object")
        method = raw.get("method")
        if not isinstance(method, str) or not method:
            raise ValueError("missing or invalid 'method' field")
        arguments = raw.get("arguments")
        if arguments is not None and not isinstance(arguments, dict):
            raise ValueError("'arguments' must be a JSON object")
        return cls(method=method, arguments=arguments)
