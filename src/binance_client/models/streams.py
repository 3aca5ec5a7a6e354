"""
Stream models for Binance client.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple, Union

from ..exceptions import ConfigurationError


class StreamKind(str, Enum):
    """WebSocket stream family."""
    MARKET = "market"
    ACCOUNT = "account"

    @classmethod
    def parse(cls, value: Union["StreamKind", str]) -> "StreamKind":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise ConfigurationError(f"Websocket type `{value}` is not defined.")


@dataclass(frozen=True)
class StreamSubscription:
    """Subscription intent: every symbol paired with one channel suffix.

    The exchange's confirmation is not tracked; this is only what gets sent.
    """
    symbols: Tuple[str, ...]
    channel: str

    @classmethod
    def of(cls, symbols: Iterable[str], channel: str) -> "StreamSubscription":
        return cls(symbols=tuple(symbols), channel=channel)

    def stream_names(self) -> List[str]:
        """Stream names such as ``btcusdt@aggTrade``."""
        return [f"{symbol.lower()}@{self.channel}" for symbol in self.symbols]
