"""Method dispatch registry.

Handlers register themselves via the ``@registry.handler`` decorator.
The dispatcher maps Transmission method names to async callables — nothing more.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable

if TYPE_CHECKING:
    from transmission_stub.state import DaemonState

log = logging.getLogger(__name__)

# Type alias for an RPC handler: async (arguments, state) -> response arguments
HandlerFn = Callable[[dict[str, Any], "DaemonState"], Awaitable[dict[str, Any]]]


class MethodNotFoundError(Exception):
    """Raised when no handler is registered for the requested method."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class RpcFailure(Exception):
    """Raised by a handler to answer with a non-``success`` result string."""

    def __init__(self, result: str) -> None:
        self.result = result
        super().__init__(result)


class Registry:
    """A simple method → handler mapping.

    Usage::

        registry = Registry()

        @registry.handler("torrent-stop")
        async def stop(arguments, state):
            ...
            return {}

        result = await registry.dispatch("torrent-stop", {"ids": [1]}, state)
    """

    def __init__(self) -> None:
        self._handlers: dict[str, HandlerFn] = {}

    # -- Registration --------------------------------------------------
    def handler(self, method: str) -> Callable[[HandlerFn], HandlerFn]:
        """Decorator that registers *fn* under *method*."""

        def decorator(fn: HandlerFn) -> HandlerFn:
            if method in self._handlers:
                log.warning("overwriting handler for %r", method)
            self._handlers[method] = fn
            log.debug("registered handler %r → %s", method, fn.__qualname__)
            return fn

        return decorator

    # -- Dispatch ------------------------------------------------------
    async def dispatch(
        self, method: str, arguments: dict[str, Any], state: "DaemonState"
    ) -> dict[str, Any]:
        """Call the handler for *method* and return its response arguments.

        Raises ``MethodNotFoundError`` if the method is not registered.
        """
        fn = self._handlers.get(method)
        if fn is None:
            raise MethodNotFoundError(method)
        return await fn(arguments, state)
