"""Session token lifecycle.

The daemon hands out a session id in the ``X-Transmission-Session-Id``
header of any response, including the 409 it sends to a request that
lacks one.  ``SessionManager`` fetches that id lazily, caches it, and
forgets it when told to.
"""

from __future__ import annotations

import logging
from typing import Protocol

import anyio
import httpx

from transmission_rpc.errors import MissingSessionTokenError
from transmission_rpc.rpc import SESSION_HEADER

log = logging.getLogger(__name__)


class TokenProvider(Protocol):
    """What ``RequestEngine`` needs from a session manager."""

    async def get_token(self) -> str: ...

    def reset_token(self) -> None: ...


class SessionManager:
    """Fetch-and-cache holder for the session token.

    Parameters
    ----------
    http : httpx.AsyncClient
        Client whose ``base_url`` points at the daemon.
    pathname : str
        RPC path, e.g. ``/transmission/rpc``.
    authorization : str
        Pre-built ``Authorization`` header value.
    """

    def __init__(self, http: httpx.AsyncClient, pathname: str, authorization: str) -> None:
        self._http = http
        self._pathname = pathname
        self._authorization = authorization
        self._token: str | None = None
        self._lock = anyio.Lock()

    @property
    def token(self) -> str | None:
        return self._token

    async def get_token(self) -> str:
        """Return the cached token, probing the daemon on a cache miss."""
        if self._token:
            return self._token

        # Concurrent first callers share one token request.
        async with self._lock:
            if self._token:
                return self._token

            resp = await self._http.post(
                self._pathname,
                headers={"Authorization": self._authorization},
            )
            token = resp.headers.get(SESSION_HEADER)
            if not token:
                raise MissingSessionTokenError(resp.content)

            log.info("obtained session token (status %d)", resp.status_code)
            self._token = token
            return token

    def reset_token(self) -> None:
        """Forget the token; the next ``get_token`` fetches a new one."""
        self._token = None
