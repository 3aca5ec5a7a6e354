"""
Constants for the Binance client.
"""

# REST base URLs per account mode
SPOT_BASE_URL = "https://api.binance.com"
SWAP_BASE_URL = "https://fapi.binance.com"

# WebSocket stream URLs per account mode
SPOT_STREAM_URL = "wss://stream.binance.com/ws"
SWAP_STREAM_URL = "wss://fstream.binance.com/ws"

# Authentication
API_KEY_HEADER = "X-MBX-APIKEY"
MAX_RECV_WINDOW = 60000  # milliseconds

# Stream control messages
SUBSCRIBE_MESSAGE_ID = 1
UNSUBSCRIBE_MESSAGE_ID = 312
NON_TEXT_FRAME_SENTINEL = "{\"Error\":\"Can't getting text from websocket.\"}"

# Orders
DEFAULT_TIME_IN_FORCE = "GTC"

# Historical data
UTC_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
