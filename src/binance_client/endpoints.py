"""
Endpoint table and account-mode URL resolution.
"""

from typing import NamedTuple, Optional, Sequence

from .exceptions import ConfigurationError
from .models.config import AccountMode, ClientConfig


class EndpointPaths(NamedTuple):
    """Path of one logical operation for each account mode (None = unsupported)."""
    spot: Optional[str]
    swap: Optional[str]


USER_DATA_STREAM = EndpointPaths("/api/v3/userDataStream", "/fapi/v1/listenKey")
KLINES = EndpointPaths("/api/v3/klines", "/fapi/v1/klines")
EXCHANGE_INFO = EndpointPaths("/api/v3/exchangeInfo", "/fapi/v1/exchangeInfo")
TICKER_PRICE = EndpointPaths("/api/v3/ticker/price", "/fapi/v1/ticker/price")
TICKER_24HR = EndpointPaths("/api/v3/ticker/24hr", "/fapi/v1/ticker/24hr")
ORDER = EndpointPaths("/api/v3/order", "/fapi/v1/order")
OPEN_ORDERS = EndpointPaths("/api/v3/openOrders", "/fapi/v1/allOpenOrders")
ACCOUNT = EndpointPaths("/api/v3/account", "/fapi/v2/account")
POSITION_RISK = EndpointPaths(None, "/fapi/v2/positionRisk")
BALANCE = EndpointPaths(None, "/fapi/v2/balance")


class EndpointResolver:
    """Maps (spot path, swap path) pairs to full URLs for one account mode."""

    def __init__(self, config: ClientConfig):
        self._config = config

    def resolve(self, paths: Sequence[Optional[str]]) -> str:
        """Full URL for the path matching the configured account mode."""
        spot_path, swap_path = paths
        mode = self._config.account_mode

        if mode is AccountMode.SPOT:
            path = spot_path
        elif mode is AccountMode.SWAP:
            path = swap_path
        else:
            raise ConfigurationError(f"Account type `{mode}` is not defined.")

        if path is None:
            raise ConfigurationError(f"Endpoint is not available for `{mode.value}` accounts.")

        return f"{self._config.base_url}{path}"
