"""
HTTP client for Binance API.

Issues single-shot signed and unsigned requests and parses JSON responses.
There is no retry logic: a failed call surfaces immediately to the caller.
"""

import asyncio
import json
import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

import aiohttp
from aiohttp import ClientSession, ClientTimeout
from yarl import URL

from .auth import BinanceSigner, build_query_string
from .exceptions import ConfigurationError, MalformedResponseError, TransportError
from .models.config import ClientConfig

logger = logging.getLogger(__name__)


class HttpMethod(str, Enum):
    """HTTP methods accepted by the exchange."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: Union["HttpMethod", str]) -> "HttpMethod":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.upper())
            except ValueError:
                pass
        raise ConfigurationError(f"Request method `{value}` is not defined.")


class HttpClient:
    """HTTP client specialized for Binance API interactions."""

    def __init__(self, config: ClientConfig, signer: BinanceSigner):
        """Initialize HTTP client with configuration."""
        self._config = config
        self._signer = signer
        self._session: Optional[ClientSession] = None

    async def get_session(self) -> ClientSession:
        """Get or create the shared aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = ClientTimeout(total=self._config.timeout)
            self._session = ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    def _prepare_headers(self) -> Dict[str, str]:
        """API key header is sent on every call, public endpoints included."""
        headers = {"Content-Type": "application/json"}
        headers.update(self._signer.get_auth_headers())
        return headers

    def _build_query(self, params: Mapping[str, Any], signed: bool) -> str:
        if signed:
            return self._signer.sign_request(params).query_string
        return build_query_string(params)

    async def dispatch(
        self,
        url: str,
        method: Union[HttpMethod, str],
        params: Optional[Mapping[str, Any]] = None,
        signed: bool = False,
    ) -> Any:
        """
        Execute one HTTP request and return the parsed JSON body.

        Parameters travel as URL query parameters for every method. When
        ``signed`` is set a ``timestamp`` is added, the resulting parameter set
        is signed and ``signature`` is appended as a separate query field.

        Exchange error payloads are JSON too and are returned unchanged; the
        HTTP status is not interpreted.

        Raises:
            ConfigurationError: unknown HTTP method
            TransportError: network or connection failure
            MalformedResponseError: body is not valid JSON
        """
        http_method = HttpMethod.parse(method)
        query_string = self._build_query(params or {}, signed)
        full_url = f"{url}?{query_string}" if query_string else url
        headers = self._prepare_headers()

        logger.debug(f"{http_method.value} {url} (signed={signed})")

        session = await self.get_session()
        try:
            async with session.request(
                http_method.value,
                URL(full_url, encoded=True),
                headers=headers,
            ) as response:
                status = response.status
                body = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{http_method.value} {url} failed: {e}") from e

        return self._parse_body(status, body)

    def _parse_body(self, status: int, body: str) -> Any:
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"Invalid JSON response (Status {status}): {body[:200]}",
                status_code=status,
                body=body[:200],
            ) from e
