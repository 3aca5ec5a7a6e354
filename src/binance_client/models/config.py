"""
Configuration models for Binance client.

Immutable configuration structures validated at construction, so that a bad
account mode or receive window fails before any network activity.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from dotenv import load_dotenv

from ..constants import (
    MAX_RECV_WINDOW,
    SPOT_BASE_URL,
    SPOT_STREAM_URL,
    SWAP_BASE_URL,
    SWAP_STREAM_URL,
)
from ..exceptions import ConfigurationError


class AccountMode(str, Enum):
    """Market family a client instance operates against."""
    SPOT = "spot"
    SWAP = "swap"

    @classmethod
    def parse(cls, value: Union["AccountMode", str]) -> "AccountMode":
        """Coerce an enum member or its string value, failing on anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ConfigurationError(f"Account type `{value}` is not defined.")


_BASE_URLS = {
    AccountMode.SPOT: SPOT_BASE_URL,
    AccountMode.SWAP: SWAP_BASE_URL,
}

_STREAM_URLS = {
    AccountMode.SPOT: SPOT_STREAM_URL,
    AccountMode.SWAP: SWAP_STREAM_URL,
}


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for a Binance client instance."""
    api_key: str = ""
    secret_key: str = ""
    account_mode: AccountMode = AccountMode.SPOT
    timeout: Optional[float] = None
    recv_window: Optional[int] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        object.__setattr__(self, "account_mode", AccountMode.parse(self.account_mode))
        self._validate_recv_window()
        self._validate_timeout()

    def _validate_recv_window(self):
        if self.recv_window is None:
            return
        if not isinstance(self.recv_window, int) or not 0 < self.recv_window <= MAX_RECV_WINDOW:
            raise ConfigurationError(
                f"recv_window must be between 1 and {MAX_RECV_WINDOW} ms, got {self.recv_window!r}"
            )

    def _validate_timeout(self):
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout!r}")

    @property
    def base_url(self) -> str:
        """REST base URL for the account mode."""
        return _BASE_URLS[self.account_mode]

    @property
    def stream_url(self) -> str:
        """WebSocket base URL for the account mode."""
        return _STREAM_URLS[self.account_mode]

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.secret_key)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create configuration from environment variables (and a .env file)."""
        load_dotenv()

        recv_window = os.getenv("BINANCE_RECV_WINDOW")
        try:
            recv_window_ms = int(recv_window) if recv_window else None
        except ValueError as e:
            raise ConfigurationError(
                f"BINANCE_RECV_WINDOW must be an integer, got `{recv_window}`"
            ) from e

        return cls(
            api_key=os.getenv("BINANCE_API_KEY", ""),
            secret_key=os.getenv("BINANCE_SECRET_KEY", ""),
            account_mode=os.getenv("BINANCE_ACCOUNT_MODE", AccountMode.SPOT.value),
            recv_window=recv_window_ms,
        )
