"""Request engine — one logical RPC call, start to finish.

* attaches ``Authorization`` and ``X-Transmission-Session-Id``
* on 409 resets the session token, waits, and tries again (bounded)
* on any other non-2xx fails fast with the status code
* on 2xx returns the decoded JSON body untouched

Validation of the body is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import anyio
import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    wait_fixed,
)

from transmission_client.config import ClientConfig
from transmission_client.session import SessionManager, TokenProvider
from transmission_rpc.errors import (
    NonJsonResponseError,
    RpcStatusError,
    SessionRetriesExhaustedError,
)
from transmission_rpc.rpc import CONFLICT_STATUS, SESSION_HEADER

log = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[Any]]


class _SessionConflict(Exception):
    """The daemon rejected the session token (HTTP 409)."""


@dataclass(slots=True)
class SessionRetryState:
    """Retry bookkeeping for 409 responses.

    ``count`` survives across calls: it is reset by a success or by a
    non-409 failure, but left at ``max_retries`` once exhausted.
    """

    max_retries: int
    delay: int  # ms
    count: int = 0


class RequestEngine:
    """Send pre-serialised bodies to the Transmission RPC endpoint.

    Parameters
    ----------
    config : ClientConfig
        Endpoint, credentials, timeout and retry settings.
    session : TokenProvider
        Session token source; defaults to a ``SessionManager`` sharing
        this engine's HTTP client.
    http : httpx.AsyncClient
        Pre-configured client (its ``base_url`` must point at the
        daemon).  When omitted the engine builds and owns one.
    sleep : callable
        Awaitable used for the delay between a 409 and its retry.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        session: TokenProvider | None = None,
        http: httpx.AsyncClient | None = None,
        sleep: SleepFn = anyio.sleep,
    ) -> None:
        self.config = config or ClientConfig()
        self._authorization = self.config.authorization
        self._pathname = self.config.pathname
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=httpx.Timeout(self.config.timeout),
        )
        self._session: TokenProvider = session or SessionManager(
            self._http, self._pathname, self._authorization
        )
        self._retry = SessionRetryState(
            max_retries=self.config.retry.max_retries,
            delay=self.config.retry.delay,
        )
        self._sleep = sleep

    # -- Lifecycle -----------------------------------------------------

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "RequestEngine":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    # -- Introspection -------------------------------------------------

    @property
    def session(self) -> TokenProvider:
        return self._session

    @property
    def retry_count(self) -> int:
        return self._retry.count

    @property
    def max_retries(self) -> int:
        return self._retry.max_retries

    @property
    def delay(self) -> int:
        return self._retry.delay

    # -- Internal retry helpers ----------------------------------------

    def _retries_exhausted(self, retry_state: RetryCallState) -> bool:
        return self._retry.count >= self._retry.max_retries

    def _invalidate_session(self, retry_state: RetryCallState) -> None:
        self._session.reset_token()
        self._retry.count += 1
        log.debug(
            "session rejected, retry %d/%d in %dms",
            self._retry.count,
            self._retry.max_retries,
            self._retry.delay,
        )

    def _get_retrier(self) -> AsyncRetrying:
        return AsyncRetrying(
            sleep=self._sleep,
            stop=self._retries_exhausted,
            wait=wait_fixed(self._retry.delay / 1000),
            retry=retry_if_exception_type(_SessionConflict),
            before_sleep=self._invalidate_session,
        )

    async def _send(self, body: bytes | str | None) -> httpx.Response:
        token = await self._session.get_token()
        log.debug("rpc → POST %s", self._pathname)
        resp = await self._http.post(
            self._pathname,
            headers={
                SESSION_HEADER: token,
                "Authorization": self._authorization,
            },
            content=body,
        )
        if resp.status_code == CONFLICT_STATUS:
            raise _SessionConflict()
        return resp

    # -- Request -------------------------------------------------------

    async def request(self, body: bytes | str | None = None) -> Any:
        """Send *body* (or nothing, for a bare token request) and return the decoded JSON.

        Raises ``SessionRetriesExhaustedError`` when every retry hit a 409,
        ``RpcStatusError`` for any other non-2xx status and
        ``NonJsonResponseError`` when a 2xx body is not JSON.  Transport
        errors propagate as raised by httpx.
        """
        try:
            async for attempt in self._get_retrier():
                with attempt:
                    resp = await self._send(body)
        except RetryError as exc:
            raise SessionRetriesExhaustedError(
                exc.last_attempt.attempt_number
            ) from None

        # Not session related, so the retry budget starts over.
        self._retry.count = 0
        if not resp.is_success:
            raise RpcStatusError(resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            raise NonJsonResponseError() from exc
