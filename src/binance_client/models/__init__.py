"""
Data models for Binance client.

This package contains the immutable data structures used throughout the
Binance client.
"""

from .config import AccountMode, ClientConfig
from .orders import OrderRequest
from .streams import StreamKind, StreamSubscription

__all__ = [
    # Configuration
    "AccountMode",
    "ClientConfig",
    # Orders
    "OrderRequest",
    # Streams
    "StreamKind",
    "StreamSubscription",
]
