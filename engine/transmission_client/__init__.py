"""transmission_client — async client for the Transmission RPC API."""

from transmission_client.client import TransmissionClient
from transmission_client.config import ClientConfig, SessionRetryConfig
from transmission_client.request import RequestEngine, SessionRetryState
from transmission_client.session import SessionManager, TokenProvider

__all__ = [
    "TransmissionClient",
    "ClientConfig",
    "SessionRetryConfig",
    "RequestEngine",
    "SessionRetryState",
    "SessionManager",
    "TokenProvider",
]
