# -*- coding: utf-8 -*-
"""
Tests for endpoint resolution.
"""

import pytest

from binance_client import endpoints
from binance_client.endpoints import EndpointResolver
from binance_client.exceptions import ConfigurationError
from binance_client.models import ClientConfig


def test_spot_selects_first_path():
    resolver = EndpointResolver(ClientConfig(account_mode="spot"))
    assert resolver.resolve(("/a", "/b")) == "https://api.binance.com/a"


def test_swap_selects_second_path():
    resolver = EndpointResolver(ClientConfig(account_mode="swap"))
    assert resolver.resolve(("/a", "/b")) == "https://fapi.binance.com/b"


def test_named_endpoints():
    spot = EndpointResolver(ClientConfig(account_mode="spot"))
    swap = EndpointResolver(ClientConfig(account_mode="swap"))

    assert spot.resolve(endpoints.USER_DATA_STREAM) == "https://api.binance.com/api/v3/userDataStream"
    assert swap.resolve(endpoints.USER_DATA_STREAM) == "https://fapi.binance.com/fapi/v1/listenKey"
    assert spot.resolve(endpoints.OPEN_ORDERS) == "https://api.binance.com/api/v3/openOrders"
    assert swap.resolve(endpoints.OPEN_ORDERS) == "https://fapi.binance.com/fapi/v1/allOpenOrders"
    assert swap.resolve(endpoints.ACCOUNT) == "https://fapi.binance.com/fapi/v2/account"


def test_unknown_mode_is_configuration_error():
    config = ClientConfig(account_mode="spot")
    # bypass construction-time validation to simulate a corrupted mode
    object.__setattr__(config, "account_mode", "margin")

    with pytest.raises(ConfigurationError, match="margin"):
        EndpointResolver(config).resolve(("/a", "/b"))


@pytest.mark.parametrize("paths", [endpoints.POSITION_RISK, endpoints.BALANCE])
def test_swap_only_endpoints_rejected_on_spot(paths):
    resolver = EndpointResolver(ClientConfig(account_mode="spot"))
    with pytest.raises(ConfigurationError, match="not available"):
        resolver.resolve(paths)
