"""Stub Transmission daemon — Starlette ASGI app.

Single POST endpoint (``/transmission/rpc`` by default) that speaks the
Transmission RPC protocol closely enough for client tests: basic auth,
the 409 session-id handshake, and a small in-memory torrent list.

Run directly::

    python -m transmission_stub.server
"""

from __future__ import annotations

import base64
import json
import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

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
from transmission_stub.dispatcher import MethodNotFoundError, RpcFailure
from transmission_stub.handlers import registry
from transmission_stub.state import DaemonState

log = logging.getLogger(__name__)


# ── Helpers ──────────────────────────────────────────────────────────


def _result_response(result: str, arguments: dict | None = None, status: int = 200) -> JSONResponse:
    """Build a Transmission RPC response envelope."""
    return JSONResponse(
        {"result": result, "arguments": arguments if arguments is not None else {}},
        status_code=status,
    )


def _conflict(session_id: str) -> PlainTextResponse:
    return PlainTextResponse(
        "<h1>409: Conflict</h1><p>Your request had an invalid session-id header.</p>",
        status_code=CONFLICT_STATUS,
        headers={SESSION_HEADER: session_id},
    )


# ── RPC endpoint ─────────────────────────────────────────────────────


async def rpc_endpoint(request: Request) -> Response:
    """Handle a Transmission RPC POST."""
    state: DaemonState = request.app.state.daemon

    if request.headers.get("authorization") != request.app.state.authorization:
        return PlainTextResponse("<h1>401: Unauthorized</h1>", status_code=401)

    if request.headers.get(SESSION_HEADER) != state.session_id:
        return _conflict(state.session_id)

    body = await request.body()
    if not body.strip():
        return _result_response(RESULT_NO_METHOD)

    try:
        raw = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _result_response(RESULT_PARSE_ERROR, status=400)

    try:
        rpc_req = RpcRequest.from_dict(raw)
    except ValueError:
        return _result_response(RESULT_NO_METHOD)

    log.info("rpc ← %s", rpc_req.method)

    try:
        arguments = await registry.dispatch(
            rpc_req.method, rpc_req.arguments or {}, state
        )
    except MethodNotFoundError:
        return _result_response(RESULT_UNKNOWN_METHOD)
    except RpcFailure as exc:
        return _result_response(exc.result)
    return _result_response(RESULT_SUCCESS, arguments)


# ── App factory ──────────────────────────────────────────────────────


def create_app(
    username: str = "transmission",
    password: str = "transmission",
    pathname: str = DEFAULT_PATHNAME,
    state: DaemonState | None = None,
) -> Starlette:
    app = Starlette(
        debug=False,
        routes=[Route(pathname, rpc_endpoint, methods=["POST"])],
    )
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    app.state.authorization = f"Basic {token}"
    app.state.daemon = state or DaemonState()
    return app


app = create_app()


# ── Runnable entrypoint ──────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        "transmission_stub.server:app",
        host="127.0.0.1",
        port=9091,
        log_level="info",
    )
