"""
WebSocket stream channel for Binance market and account streams.

Stream selection happens through SUBSCRIBE/UNSUBSCRIBE control frames, not the
URL. Frames are pulled one at a time by the caller; there is no read loop and
no reconnection here.
"""

import asyncio
import json
import logging
from typing import Iterable, Union

import aiohttp
from aiohttp import ClientWebSocketResponse

from .constants import NON_TEXT_FRAME_SENTINEL, SUBSCRIBE_MESSAGE_ID, UNSUBSCRIBE_MESSAGE_ID
from .exceptions import TransportError
from .http_client import HttpClient
from .models.config import ClientConfig
from .models.streams import StreamKind, StreamSubscription
from .session_manager import SessionManager
from .utils import mask_secret

logger = logging.getLogger(__name__)


def build_control_message(method: str, subscription: StreamSubscription, message_id: int) -> str:
    """
    Control frame text, e.g.
    ``{"method": "SUBSCRIBE", "params": ["btcusdt@aggTrade","ethusdt@aggTrade"], "id": 1}``.
    """
    params = ",".join(json.dumps(name) for name in subscription.stream_names())
    return f'{{"method": {json.dumps(method)}, "params": [{params}], "id": {message_id}}}'


class StreamChannel:
    """Opens stream connections and sends subscription control frames."""

    def __init__(
        self,
        config: ClientConfig,
        http_client: HttpClient,
        session_manager: SessionManager,
    ):
        self._config = config
        self._http_client = http_client
        self._session_manager = session_manager

    async def stream_url_for(self, kind: Union[StreamKind, str]) -> str:
        """Market streams use the base URL; account streams append the listen key."""
        stream_kind = StreamKind.parse(kind)
        if stream_kind is StreamKind.ACCOUNT:
            listen_key = await self._session_manager.acquire_listen_key()
            return f"{self._config.stream_url}/{listen_key}"
        return self._config.stream_url

    async def open(self, kind: Union[StreamKind, str]) -> ClientWebSocketResponse:
        """
        Connect to a market or account stream.

        Raises:
            ConfigurationError: unknown stream kind
            SessionNotActiveError: account stream without a listen key
            TransportError: connection or handshake failure
        """
        url = await self.stream_url_for(kind)
        session = await self._http_client.get_session()

        try:
            ws = await session.ws_connect(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"WebSocket connection to {self._config.stream_url} failed: {e}") from e

        logger.info(f"Connected to {StreamKind.parse(kind).value} stream {self._redact(url)}")
        return ws

    async def subscribe(
        self,
        ws: ClientWebSocketResponse,
        symbols: Iterable[str],
        channel: str,
    ) -> None:
        """Subscribe to ``<symbol>@<channel>`` for each symbol."""
        subscription = StreamSubscription.of(symbols, channel)
        await self._send(ws, build_control_message("SUBSCRIBE", subscription, SUBSCRIBE_MESSAGE_ID))

    async def unsubscribe(
        self,
        ws: ClientWebSocketResponse,
        symbols: Iterable[str],
        channel: str,
    ) -> None:
        """Unsubscribe from ``<symbol>@<channel>`` for each symbol."""
        subscription = StreamSubscription.of(symbols, channel)
        await self._send(ws, build_control_message("UNSUBSCRIBE", subscription, UNSUBSCRIBE_MESSAGE_ID))

    async def read_once(self, ws: ClientWebSocketResponse) -> str:
        """
        Wait for one frame and return its text.

        Any non-text frame (binary, ping, close, error) is returned as the
        fixed error sentinel rather than raised.
        """
        msg = await ws.receive()
        if msg.type == aiohttp.WSMsgType.TEXT:
            return msg.data
        logger.debug(f"Non-text frame received: {msg.type}")
        return NON_TEXT_FRAME_SENTINEL

    async def close(self, ws: ClientWebSocketResponse) -> None:
        if not ws.closed:
            await ws.close()

    async def _send(self, ws: ClientWebSocketResponse, message: str) -> None:
        logger.debug(f"Sending control frame: {message}")
        try:
            await ws.send_str(message)
        except (aiohttp.ClientError, ConnectionResetError) as e:
            raise TransportError(f"Failed to send control frame: {e}") from e

    def _redact(self, url: str) -> str:
        listen_key = self._session_manager.listen_key
        if listen_key and listen_key in url:
            return url.replace(listen_key, mask_secret(listen_key))
        return url
