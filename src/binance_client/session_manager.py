"""
Listen-key session management for Binance client.

The listen key authorizes private (account) WebSocket streams. It is the only
mutable state of a client, so every read and write goes through one lock.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional, Union

from .endpoints import USER_DATA_STREAM, EndpointResolver
from .exceptions import ConfigurationError, MalformedResponseError, SessionNotActiveError
from .http_client import HttpClient, HttpMethod
from .utils import mask_secret

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    ABSENT = "absent"
    ACTIVE = "active"


class ListenKeyOperation(str, Enum):
    """Listen-key lifecycle operations."""
    GENERATE = "generate"
    RENEW = "renew"
    REVOKE = "revoke"

    @classmethod
    def parse(cls, value: Union["ListenKeyOperation", str]) -> "ListenKeyOperation":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise ConfigurationError(f"Listen key method `{value}` is not defined.")

    @property
    def http_method(self) -> HttpMethod:
        return _OPERATION_METHODS[self]


_OPERATION_METHODS = {
    ListenKeyOperation.GENERATE: HttpMethod.POST,
    ListenKeyOperation.RENEW: HttpMethod.PUT,
    ListenKeyOperation.REVOKE: HttpMethod.DELETE,
}


class SessionManager:
    """Obtains, renews and revokes the listen key of one client."""

    def __init__(self, http_client: HttpClient, resolver: EndpointResolver):
        """Initialize session manager; the session starts absent."""
        self._http_client = http_client
        self._resolver = resolver
        self._lock = asyncio.Lock()
        self._listen_key = ""
        self._state = SessionState.ABSENT

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def listen_key(self) -> str:
        """Last known listen key (empty when absent). Unsynchronized snapshot."""
        return self._listen_key

    @property
    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    async def manage(self, operation: Union[ListenKeyOperation, str]) -> str:
        """
        Run one listen-key operation.

        Returns:
            The new listen key for ``generate``; an empty string otherwise.

        Raises:
            ConfigurationError: unknown operation
            SessionNotActiveError: renew/revoke without an active session
            MalformedResponseError: generate response lacks ``listenKey``
        """
        op = ListenKeyOperation.parse(operation)
        url = self._resolver.resolve(USER_DATA_STREAM)

        async with self._lock:
            params = {}
            if op is not ListenKeyOperation.GENERATE:
                self._require_active()
                params["listenKey"] = self._listen_key

            response = await self._http_client.dispatch(url, op.http_method, params, False)

            if op is ListenKeyOperation.GENERATE:
                self._listen_key = self._extract_listen_key(response)
                self._state = SessionState.ACTIVE
                logger.info(f"Created listen key: {mask_secret(self._listen_key)}")
                return self._listen_key

            if op is ListenKeyOperation.REVOKE:
                logger.info(f"Revoked listen key: {mask_secret(self._listen_key)}")
                self._listen_key = ""
                self._state = SessionState.ABSENT
            else:
                logger.debug("Listen key keepalive sent")
            return ""

    async def generate(self) -> str:
        return await self.manage(ListenKeyOperation.GENERATE)

    async def renew(self) -> str:
        return await self.manage(ListenKeyOperation.RENEW)

    async def revoke(self) -> str:
        return await self.manage(ListenKeyOperation.REVOKE)

    async def acquire_listen_key(self) -> str:
        """Read the listen key under the session lock."""
        async with self._lock:
            self._require_active()
            return self._listen_key

    def _require_active(self) -> None:
        if self._state is not SessionState.ACTIVE:
            raise SessionNotActiveError("No active listen key; generate one first")

    @staticmethod
    def _extract_listen_key(response: Optional[object]) -> str:
        listen_key = response.get("listenKey") if isinstance(response, dict) else None
        if not isinstance(listen_key, str) or not listen_key:
            raise MalformedResponseError(
                f"Listen key missing from response: {str(response)[:200]}",
                body=str(response)[:200],
            )
        return listen_key
