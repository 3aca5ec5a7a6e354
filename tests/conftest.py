# -*- coding: utf-8 -*-
"""
Shared fixtures and utilities for testing Binance client.
"""

import pytest
from typing import Any, List
from unittest.mock import AsyncMock, MagicMock, Mock

import aiohttp

from binance_client.auth import ApiCredentials, BinanceSigner
from binance_client.endpoints import EndpointResolver
from binance_client.http_client import HttpClient
from binance_client.models import AccountMode, ClientConfig
from binance_client.session_manager import SessionManager


TEST_API_KEY = "test_api_key_1234567890abcdef"
TEST_SECRET_KEY = "test_secret_key_1234567890abcdef"


# Configuration fixtures
@pytest.fixture
def spot_config() -> ClientConfig:
    """Spot configuration with credentials."""
    return ClientConfig(
        api_key=TEST_API_KEY,
        secret_key=TEST_SECRET_KEY,
        account_mode=AccountMode.SPOT,
    )


@pytest.fixture
def swap_config() -> ClientConfig:
    """Swap configuration with credentials."""
    return ClientConfig(
        api_key=TEST_API_KEY,
        secret_key=TEST_SECRET_KEY,
        account_mode=AccountMode.SWAP,
    )


@pytest.fixture
def public_config() -> ClientConfig:
    """Spot configuration without credentials."""
    return ClientConfig(account_mode=AccountMode.SPOT)


@pytest.fixture
def signer() -> BinanceSigner:
    return BinanceSigner(ApiCredentials(api_key=TEST_API_KEY, secret_key=TEST_SECRET_KEY))


@pytest.fixture
def swap_resolver(swap_config) -> EndpointResolver:
    return EndpointResolver(swap_config)


@pytest.fixture
def mock_http_client() -> Mock:
    """HttpClient whose dispatch is an AsyncMock."""
    client = Mock(spec=HttpClient)
    client.dispatch = AsyncMock()
    client.get_session = AsyncMock()
    return client


@pytest.fixture
def session_manager(mock_http_client, swap_resolver) -> SessionManager:
    return SessionManager(mock_http_client, swap_resolver)


# Kline fixtures
def make_kline(open_time: int, interval_ms: int = 3600000) -> List[Any]:
    """Kline record shaped like the exchange's array format."""
    return [
        open_time, "42000.00", "42100.00", "41900.00", "42050.00", "12.5",
        open_time + interval_ms - 1, "525000.00", 1500, "6.2", "260000.00", "0",
    ]


@pytest.fixture
def kline_factory():
    return make_kline


@pytest.fixture
def kline_pages() -> List[List[List[Any]]]:
    """Two non-empty pages followed by an empty one."""
    start = 1704067200000  # 2024-01-01 00:00:00 UTC
    hour = 3600000
    first = [make_kline(start + i * hour) for i in range(3)]
    second = [make_kline(start + (3 + i) * hour) for i in range(2)]
    return [first, second, []]


# Mock response fixtures
def make_response(body: str, status: int = 200) -> MagicMock:
    """Async context manager yielding a response with the given body."""
    response = Mock()
    response.status = status
    response.text = AsyncMock(return_value=body)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)
    return context


@pytest.fixture
def response_factory():
    """Build mocked ``session.request(...)`` results from a body and status."""
    return make_response


@pytest.fixture
def mock_client_session():
    """Mock aiohttp ClientSession."""
    session = Mock(spec=aiohttp.ClientSession)
    session.request = Mock(return_value=make_response("{}"))
    session.ws_connect = AsyncMock()
    session.close = AsyncMock()
    session.closed = False
    return session


@pytest.fixture
def mock_websocket():
    """Mock aiohttp ClientWebSocketResponse."""
    ws = Mock(spec=aiohttp.ClientWebSocketResponse)
    ws.send_str = AsyncMock()
    ws.receive = AsyncMock()
    ws.close = AsyncMock()
    ws.closed = False
    return ws
