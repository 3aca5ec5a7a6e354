"""
Binance Client - Main orchestration module.

This module provides the BinanceClient class that wires the components
together and exposes the public operation surface:
- Request signing is handled by auth.py
- URL selection per account mode is handled by endpoints.py
- HTTP dispatch is handled by http_client.py
- Listen-key lifecycle is handled by session_manager.py
- Kline pagination is handled by klines.py
- WebSocket streams are handled by streams.py

Every operation returns the exchange's JSON value unchanged; exchange-side
error payloads are for the caller to inspect.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Union

from aiohttp import ClientWebSocketResponse

from . import endpoints
from .auth import ApiCredentials, BinanceSigner
from .endpoints import EndpointPaths, EndpointResolver
from .http_client import HttpClient, HttpMethod
from .klines import KlinePaginator
from .models import AccountMode, ClientConfig, OrderRequest, StreamKind
from .session_manager import SessionManager, SessionState
from .streams import StreamChannel
from .utils import sanitize_dict

logger = logging.getLogger(__name__)


class BinanceClient:
    """
    Main Binance client orchestrator.

    Construction performs no I/O. ``start()`` (called by ``create()`` and by
    ``async with``) generates the listen key once when both credentials are
    present; without them the client is public-only and the session stays
    absent. Listen-key renewal is left to the caller.
    """

    def __init__(self, config: ClientConfig, drop_last_kline: bool = True):
        """Initialize Binance client with configuration."""
        self._config = config
        self._signer = BinanceSigner(
            ApiCredentials(api_key=config.api_key, secret_key=config.secret_key),
            recv_window=config.recv_window,
        )
        self._resolver = EndpointResolver(config)
        self._http_client = HttpClient(config, self._signer)
        self._session_manager = SessionManager(self._http_client, self._resolver)
        self._klines = KlinePaginator(self._http_client, self._resolver, drop_last=drop_last_kline)
        self._streams = StreamChannel(config, self._http_client, self._session_manager)
        self._started = False
        self._closed = False

    @classmethod
    async def create(cls, config: ClientConfig, drop_last_kline: bool = True) -> "BinanceClient":
        """Create a client and run its session bootstrap."""
        client = cls(config, drop_last_kline=drop_last_kline)
        try:
            await client.start()
        except BaseException:
            await client.close()
            raise
        return client

    @classmethod
    async def from_env(cls) -> "BinanceClient":
        """Create a started client from environment variables."""
        return await cls.create(ClientConfig.from_env())

    async def start(self) -> None:
        """Bootstrap the listen-key session; a failed bootstrap may be retried."""
        self._ensure_open()
        if self._started:
            return
        if self._config.has_credentials:
            await self._session_manager.generate()
        else:
            logger.info("No credentials configured, running as public-only client")
        self._started = True

    @property
    def account_mode(self) -> AccountMode:
        return self._config.account_mode

    @property
    def session_state(self) -> SessionState:
        return self._session_manager.state

    @property
    def listen_key(self) -> str:
        return self._session_manager.listen_key

    # Market data
    async def get_exchange_info(self) -> Any:
        """Exchange trading rules and symbol information."""
        return await self._request(endpoints.EXCHANGE_INFO, HttpMethod.GET)

    async def get_price(self, symbol: Optional[str] = None) -> Any:
        """Latest price for a symbol, or for all symbols when omitted."""
        return await self._request(
            endpoints.TICKER_PRICE, HttpMethod.GET, sanitize_dict({"symbol": symbol})
        )

    async def get_ticker(self, symbol: Optional[str] = None) -> Any:
        """24hr ticker statistics for a symbol, or for all symbols when omitted."""
        return await self._request(
            endpoints.TICKER_24HR, HttpMethod.GET, sanitize_dict({"symbol": symbol})
        )

    async def history_klines(
        self,
        symbol: str,
        interval: str,
        start_time_utc: str,
        end_time_utc: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[list]:
        """Complete kline history between two UTC times (see KlinePaginator)."""
        self._ensure_open()
        return await self._klines.fetch_history(
            symbol, interval, start_time_utc, end_time_utc, limit
        )

    # Orders
    async def place_order(self, order: OrderRequest) -> Any:
        """Place a new order."""
        return await self._request(endpoints.ORDER, HttpMethod.POST, order.to_params(), signed=True)

    async def new_order(
        self,
        symbol: str,
        side: str,
        order_type: str,
        quantity: Union[Decimal, str],
        price: Optional[Union[Decimal, str]] = None,
        time_in_force: Optional[str] = None,
    ) -> Any:
        """Place a new order from plain arguments."""
        order = OrderRequest(
            symbol=symbol,
            side=side,
            order_type=order_type,
            quantity=quantity,
            price=price,
            time_in_force=time_in_force,
        )
        return await self.place_order(order)

    async def cancel_order(self, symbol: str, order_id: Union[int, str]) -> Any:
        """Cancel an existing order."""
        params = {"symbol": symbol, "orderId": order_id}
        return await self._request(endpoints.ORDER, HttpMethod.DELETE, params, signed=True)

    async def cancel_all_open_orders(self, symbol: str) -> Any:
        """Cancel all open orders for a symbol."""
        return await self._request(
            endpoints.OPEN_ORDERS, HttpMethod.DELETE, {"symbol": symbol}, signed=True
        )

    # Account
    async def get_account(self) -> Any:
        """Account information."""
        return await self._request(endpoints.ACCOUNT, HttpMethod.GET, signed=True)

    async def get_positions(self) -> Any:
        """Position risk for every symbol (swap accounts only)."""
        return await self._request(endpoints.POSITION_RISK, HttpMethod.GET, signed=True)

    async def get_balances(self) -> Any:
        """Futures account balances (swap accounts only)."""
        return await self._request(endpoints.BALANCE, HttpMethod.GET, signed=True)

    # Listen key
    async def generate_listen_key(self) -> str:
        self._ensure_open()
        return await self._session_manager.generate()

    async def renew_listen_key(self) -> str:
        """Keep the current listen key alive (the exchange expires it after 60 minutes)."""
        self._ensure_open()
        return await self._session_manager.renew()

    async def revoke_listen_key(self) -> str:
        self._ensure_open()
        return await self._session_manager.revoke()

    # Streams
    async def open_stream(self, kind: Union[StreamKind, str]) -> ClientWebSocketResponse:
        """Open a market stream or the account (user data) stream."""
        self._ensure_open()
        return await self._streams.open(kind)

    async def subscribe(self, ws: ClientWebSocketResponse, symbols: Iterable[str], channel: str) -> None:
        await self._streams.subscribe(ws, symbols, channel)

    async def unsubscribe(self, ws: ClientWebSocketResponse, symbols: Iterable[str], channel: str) -> None:
        await self._streams.unsubscribe(ws, symbols, channel)

    async def read_once(self, ws: ClientWebSocketResponse) -> str:
        """Next frame's text, or the error sentinel for non-text frames."""
        return await self._streams.read_once(ws)

    async def close(self) -> None:
        """Close client and cleanup resources."""
        if not self._closed:
            await self._http_client.close()
            self._closed = True
            logger.info("Binance client closed")

    async def _request(
        self,
        paths: EndpointPaths,
        method: HttpMethod,
        params: Optional[Dict[str, Any]] = None,
        signed: bool = False,
    ) -> Any:
        self._ensure_open()
        url = self._resolver.resolve(paths)
        return await self._http_client.dispatch(url, method, params or {}, signed)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Client is closed")

    # Context manager support
    async def __aenter__(self):
        """Async context manager entry."""
        try:
            await self.start()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


async def create_binance_client(
    api_key: str = "",
    secret_key: str = "",
    account_mode: Union[AccountMode, str] = AccountMode.SPOT,
    timeout: Optional[float] = None,
    recv_window: Optional[int] = None,
    drop_last_kline: bool = True,
) -> BinanceClient:
    """
    Factory function to create a started Binance client.

    Args:
        api_key: API key (empty for a public-only client)
        secret_key: Secret key (empty for a public-only client)
        account_mode: "spot" or "swap"
        timeout: Optional total request timeout in seconds
        recv_window: Optional receive window in milliseconds for signed calls
        drop_last_kline: Drop the trailing candle from kline histories

    Returns:
        BinanceClient with its session bootstrap done
    """
    config = ClientConfig(
        api_key=api_key,
        secret_key=secret_key,
        account_mode=account_mode,
        timeout=timeout,
        recv_window=recv_window,
    )

    return await BinanceClient.create(config, drop_last_kline=drop_last_kline)
