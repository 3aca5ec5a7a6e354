"""
Binance Client - Python client for the Binance spot and USDⓈ-M futures APIs.

This package provides request signing, listen-key session management,
paginated kline history and WebSocket stream subscriptions for one account
mode (spot or swap) per client.
"""

from .account_client import BinanceClient, create_binance_client
from .auth import ApiCredentials, BinanceSigner, SignedRequest
from .endpoints import EndpointPaths, EndpointResolver
from .exceptions import (
    BinanceClientError,
    ConfigurationError,
    MalformedResponseError,
    SessionNotActiveError,
    SigningError,
    TransportError,
)
from .http_client import HttpClient, HttpMethod
from .klines import KlinePaginator
from .models import (
    # Configuration
    AccountMode,
    ClientConfig,
    # Orders
    OrderRequest,
    # Streams
    StreamKind,
    StreamSubscription,
)
from .session_manager import ListenKeyOperation, SessionManager, SessionState
from .streams import StreamChannel

__all__ = [
    # Main Client
    "BinanceClient",
    "create_binance_client",
    # Components
    "ApiCredentials",
    "BinanceSigner",
    "SignedRequest",
    "EndpointPaths",
    "EndpointResolver",
    "HttpClient",
    "HttpMethod",
    "KlinePaginator",
    "ListenKeyOperation",
    "SessionManager",
    "SessionState",
    "StreamChannel",
    # Models
    "AccountMode",
    "ClientConfig",
    "OrderRequest",
    "StreamKind",
    "StreamSubscription",
    # Exceptions
    "BinanceClientError",
    "ConfigurationError",
    "MalformedResponseError",
    "SessionNotActiveError",
    "SigningError",
    "TransportError",
]
