"""Error taxonomy shared by the request engine and the RPC-method layer."""

from __future__ import annotations

from typing import Any


class TransmissionError(Exception):
    """Base class for everything raised by this library."""


class MissingSessionTokenError(TransmissionError):
    """The session token request returned no ``X-Transmission-Session-Id`` header."""

    def __init__(self, body: bytes) -> None:
        self.body = body
        super().__init__(
            "Unable to obtain a session ID from the Transmission RPC endpoint"
        )


class SessionRetriesExhaustedError(TransmissionError):
    """Every retry after a 409 was rejected again."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            "Transmission RPC endpoint did not return a session ID, "
            "max retries exceeded"
        )


class RpcStatusError(TransmissionError):
    """The endpoint answered with a non-2xx status other than 409."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(
            f"Transmission RPC endpoint returned status code {status_code}"
        )


class NonJsonResponseError(TransmissionError):
    """A 2xx response whose body could not be decoded as JSON."""

    def __init__(self) -> None:
        super().__init__("Transmission RPC endpoint returned a non JSON response")


class InvalidResponseError(TransmissionError):
    """The decoded body does not match the expected response model."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        super().__init__("Transmission RPC endpoint returned an invalid response")


class TransmissionClientError(TransmissionError):
    """Raised by ``TransmissionClient`` methods; the cause holds the detail."""
