# -*- coding: utf-8 -*-
"""
Tests for listen-key session management.
"""

import pytest

from binance_client.exceptions import ConfigurationError, MalformedResponseError, SessionNotActiveError
from binance_client.http_client import HttpMethod
from binance_client.session_manager import ListenKeyOperation, SessionManager, SessionState
from binance_client.endpoints import EndpointResolver
from binance_client.models import ClientConfig


LISTEN_KEY_URL = "https://fapi.binance.com/fapi/v1/listenKey"


class TestListenKeyOperation:

    def test_method_mapping(self):
        assert ListenKeyOperation.GENERATE.http_method is HttpMethod.POST
        assert ListenKeyOperation.RENEW.http_method is HttpMethod.PUT
        assert ListenKeyOperation.REVOKE.http_method is HttpMethod.DELETE

    def test_unknown_operation(self):
        with pytest.raises(ConfigurationError, match="Listen key method `delay`"):
            ListenKeyOperation.parse("delay")


class TestSessionManager:

    def test_starts_absent(self, session_manager):
        assert session_manager.state is SessionState.ABSENT
        assert session_manager.listen_key == ""
        assert not session_manager.is_active

    @pytest.mark.asyncio
    async def test_generate(self, session_manager, mock_http_client):
        mock_http_client.dispatch.return_value = {"listenKey": "pqia91ma19a5s61cv6a81va65sdf19v8a65a1"}

        result = await session_manager.manage("generate")

        assert result == "pqia91ma19a5s61cv6a81va65sdf19v8a65a1"
        assert session_manager.state is SessionState.ACTIVE
        assert session_manager.listen_key == result
        mock_http_client.dispatch.assert_awaited_once_with(LISTEN_KEY_URL, HttpMethod.POST, {}, False)

    @pytest.mark.asyncio
    async def test_generate_refreshes_key(self, session_manager, mock_http_client):
        mock_http_client.dispatch.side_effect = [{"listenKey": "first"}, {"listenKey": "second"}]

        await session_manager.generate()
        await session_manager.generate()

        assert session_manager.listen_key == "second"
        assert session_manager.state is SessionState.ACTIVE

    @pytest.mark.asyncio
    async def test_spot_endpoint(self, mock_http_client):
        manager = SessionManager(mock_http_client, EndpointResolver(ClientConfig(account_mode="spot")))
        mock_http_client.dispatch.return_value = {"listenKey": "abc"}

        await manager.generate()

        url = mock_http_client.dispatch.call_args.args[0]
        assert url == "https://api.binance.com/api/v3/userDataStream"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        {"code": -2015, "msg": "Invalid API-key, IP, or permissions for action."},
        {"listenkey": "wrong-case"},
        {"listenKey": 123},
        [],
    ])
    async def test_generate_without_listen_key(self, session_manager, mock_http_client, response):
        mock_http_client.dispatch.return_value = response

        with pytest.raises(MalformedResponseError):
            await session_manager.generate()

        assert session_manager.state is SessionState.ABSENT

    @pytest.mark.asyncio
    async def test_renew_sends_current_key(self, session_manager, mock_http_client):
        mock_http_client.dispatch.side_effect = [{"listenKey": "abc"}, {}]
        await session_manager.generate()

        result = await session_manager.manage(ListenKeyOperation.RENEW)

        assert result == ""
        assert session_manager.listen_key == "abc"
        assert session_manager.state is SessionState.ACTIVE
        mock_http_client.dispatch.assert_awaited_with(
            LISTEN_KEY_URL, HttpMethod.PUT, {"listenKey": "abc"}, False
        )

    @pytest.mark.asyncio
    async def test_revoke_clears_session(self, session_manager, mock_http_client):
        mock_http_client.dispatch.side_effect = [{"listenKey": "abc"}, {}]
        await session_manager.generate()

        result = await session_manager.revoke()

        assert result == ""
        assert session_manager.state is SessionState.ABSENT
        assert session_manager.listen_key == ""
        mock_http_client.dispatch.assert_awaited_with(
            LISTEN_KEY_URL, HttpMethod.DELETE, {"listenKey": "abc"}, False
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["renew", "revoke"])
    async def test_renew_or_revoke_requires_active_session(self, session_manager, mock_http_client, operation):
        with pytest.raises(SessionNotActiveError):
            await session_manager.manage(operation)

        mock_http_client.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_acquire_listen_key(self, session_manager, mock_http_client):
        with pytest.raises(SessionNotActiveError):
            await session_manager.acquire_listen_key()

        mock_http_client.dispatch.return_value = {"listenKey": "abc"}
        await session_manager.generate()

        assert await session_manager.acquire_listen_key() == "abc"
