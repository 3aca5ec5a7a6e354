#!/usr/bin/env python3
"""
Example: Exercise the Binance client's public surface.

This example demonstrates how to:
1. Create a client from environment variables (listen key generated on start)
2. Subscribe to aggregate trade streams and read a few frames
3. Fetch a complete kline history
4. Query exchange info, prices, tickers and account data
5. Place and cancel orders (only when BINANCE_DEMO_TRADE=1)

Prerequisites:
- Set BINANCE_API_KEY, BINANCE_SECRET_KEY and BINANCE_ACCOUNT_MODE (spot|swap)
  environment variables, or leave the keys empty for public data only
- Install the package: pip install -e .

Usage:
    python examples/demo.py
"""

import asyncio
import json
import logging
import os

from dotenv import load_dotenv

load_dotenv()

from binance_client import AccountMode, BinanceClient, SessionState, StreamKind

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def stream_demo(client: BinanceClient) -> None:
    """Read a handful of aggregate trades."""
    ws = await client.open_stream(StreamKind.MARKET)
    try:
        await client.subscribe(ws, ["BTCUSDT", "ETHUSDT"], "aggTrade")
        for _ in range(10):
            logger.info(await client.read_once(ws))
        await client.unsubscribe(ws, ["BTCUSDT", "ETHUSDT"], "aggTrade")
    finally:
        await ws.close()


async def main() -> None:
    client = await BinanceClient.from_env()
    try:
        await stream_demo(client)

        klines = await client.history_klines("BTCUSDT", "1h", "2024-01-01 00:00:00")
        logger.info(f"Fetched {len(klines)} hourly klines")

        exchange_info = await client.get_exchange_info()
        logger.info(f"{len(exchange_info.get('symbols', []))} symbols listed")
        logger.info(f"BTCUSDT price: {json.dumps(await client.get_price('BTCUSDT'))}")
        logger.info(f"BTCUSDT 24h: {json.dumps(await client.get_ticker('BTCUSDT'))}")

        if client.session_state is not SessionState.ACTIVE:
            logger.info("No credentials set, skipping account endpoints")
            return

        logger.info(f"Account: {json.dumps(await client.get_account())[:200]}")
        if client.account_mode is AccountMode.SWAP:
            logger.info(f"Positions: {json.dumps(await client.get_positions())[:200]}")
            logger.info(f"Balances: {json.dumps(await client.get_balances())[:200]}")

        if os.getenv("BINANCE_DEMO_TRADE") == "1":
            order = await client.new_order("BTCUSDT", "BUY", "LIMIT", "0.001", "20000", "GTC")
            logger.info(f"New order: {order}")
            logger.info(f"Cancel all: {await client.cancel_all_open_orders('BTCUSDT')}")

        await client.renew_listen_key()
    finally:
        await client.close()


if __name__ == "__main__":
    asyncio.run(main())
