"""
Authentication and signing utilities for Binance API
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
import hashlib
import hmac
from urllib.parse import urlencode

from .constants import API_KEY_HEADER
from .exceptions import SigningError
from .utils import current_timestamp_ms


@dataclass
class ApiCredentials:
    """Container for API credentials"""
    api_key: str
    secret_key: str


@dataclass(frozen=True)
class SignedRequest:
    """
    Parameters of a single signed call.

    ``params`` already contains ``timestamp`` (and ``recvWindow`` when set);
    ``signature`` is kept apart so it is never part of the signed set.
    """
    params: Dict[str, str] = field(default_factory=dict)
    timestamp: int = 0
    signature: str = ""

    @property
    def query_string(self) -> str:
        """Signed query string with the signature appended last."""
        base = build_query_string(self.params)
        suffix = urlencode([("signature", self.signature)])
        return f"{base}&{suffix}" if base else suffix


def build_query_string(params: Optional[Mapping[str, Any]]) -> str:
    """
    Serialize parameters as ``key=value`` pairs joined by ``&``.

    Insertion order is preserved; the same string is used for signing and for
    the request URL, so the exchange sees exactly the bytes that were signed.
    """
    if not params:
        return ""
    return urlencode([(key, str(value)) for key, value in params.items()])


class BinanceSigner:
    """
    Handles request signing for Binance API authentication.

    Uses HMAC-SHA256 over the request query string, hex encoded.
    """

    def __init__(self, credentials: ApiCredentials, recv_window: Optional[int] = None):
        """
        Initialize the signer with API credentials.

        Args:
            credentials: API credentials containing key and secret
            recv_window: Optional receive window in milliseconds, sent with
                every signed request when set
        """
        self.credentials = credentials
        self.recv_window = recv_window

    def sign_request(
        self,
        params: Optional[Mapping[str, Any]] = None,
        timestamp: Optional[int] = None,
    ) -> SignedRequest:
        """
        Add timestamp and signature to request parameters.

        Args:
            params: Original request parameters (not modified)
            timestamp: Epoch milliseconds; defaults to the current time

        Returns:
            SignedRequest holding the signed parameters and signature
        """
        signed_params = {key: str(value) for key, value in (params or {}).items()}

        if self.recv_window is not None:
            signed_params["recvWindow"] = str(self.recv_window)

        if timestamp is None:
            timestamp = current_timestamp_ms()
        signed_params["timestamp"] = str(timestamp)

        return SignedRequest(
            params=signed_params,
            timestamp=timestamp,
            signature=self.generate_signature(signed_params),
        )

    def generate_signature(self, params: Optional[Mapping[str, Any]]) -> str:
        """
        Generate HMAC-SHA256 signature for the given parameters.

        Args:
            params: Parameters to sign

        Returns:
            Lowercase hex-encoded HMAC-SHA256 signature (64 characters)
        """
        query_string = build_query_string(params)

        try:
            return hmac.new(
                self.credentials.secret_key.encode("utf-8"),
                query_string.encode("utf-8"),
                hashlib.sha256,
            ).hexdigest()
        except (TypeError, ValueError, AttributeError) as e:
            raise SigningError(f"Unable to sign request: {e}") from e

    def get_auth_headers(self) -> Dict[str, str]:
        """
        Get authentication headers for API requests.

        Returns:
            Dictionary containing required authentication headers
        """
        return {
            API_KEY_HEADER: self.credentials.api_key
        }
