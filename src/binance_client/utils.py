"""
Utility functions for Binance client.

Small pure helpers shared by the signer, paginator and order models.
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .constants import UTC_DATETIME_FORMAT


def current_timestamp_ms() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)


def parse_utc_datetime(value: str) -> datetime:
    """Parse a ``YYYY-MM-DD HH:MM:SS`` string as a UTC datetime."""
    try:
        parsed = datetime.strptime(value, UTC_DATETIME_FORMAT)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"Invalid UTC time {value!r}, expected format YYYY-MM-DD HH:MM:SS"
        ) from e
    return parsed.replace(tzinfo=timezone.utc)


def utc_string_to_ms(value: str) -> int:
    """Convert a ``YYYY-MM-DD HH:MM:SS`` UTC string to epoch milliseconds."""
    return int(parse_utc_datetime(value).timestamp()) * 1000


def validate_symbol(symbol: str) -> bool:
    """Validate symbol format."""
    if not symbol or not isinstance(symbol, str):
        return False

    return len(symbol) <= 20 and symbol.isalnum()


def sanitize_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Remove None values and empty strings from dictionary."""
    return {
        key: value for key, value in data.items()
        if value is not None and value != ""
    }


def mask_secret(value: Optional[str], visible: int = 8) -> str:
    """Mask a token for logging, keeping only its first characters."""
    if not value:
        return "<empty>"
    return f"{value[:visible]}..."
