"""
Exception hierarchy for the Binance client.

Nothing in the package catches these for recovery; every failure unwinds to
the caller of the public operation. Exchange-side error payloads
(``{"code": ..., "msg": ...}``) are not exceptions: they are returned as JSON.
"""

from typing import Optional


class BinanceClientError(Exception):
    """Base exception for Binance client errors."""
    pass


class ConfigurationError(BinanceClientError):
    """Raised for programming or configuration mistakes (unknown account mode,
    HTTP method, listen-key operation, stream kind, or an endpoint that does not
    exist for the configured account mode)."""
    pass


class SigningError(BinanceClientError):
    """Raised when the MAC primitive rejects the secret key or message."""
    pass


class TransportError(BinanceClientError):
    """Raised when the HTTP or WebSocket transport fails."""
    pass


class MalformedResponseError(BinanceClientError):
    """Raised when a response body is not the JSON shape the call expects."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SessionNotActiveError(BinanceClientError):
    """Raised when a listen key is required but the session is absent."""
    pass
