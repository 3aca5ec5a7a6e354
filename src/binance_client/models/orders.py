"""
Order-related models for Binance client.

Immutable data structures for order placement.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional, Union

from ..constants import DEFAULT_TIME_IN_FORCE
from ..utils import validate_symbol


@dataclass(frozen=True)
class OrderRequest:
    """Order request data structure."""
    symbol: str
    side: str  # "BUY" or "SELL"
    order_type: str  # "LIMIT", "MARKET", ...
    quantity: Union[Decimal, str]
    price: Optional[Union[Decimal, str]] = None
    time_in_force: Optional[str] = None  # defaults to GTC for LIMIT orders
    client_order_id: Optional[str] = None

    def __post_init__(self):
        if not validate_symbol(self.symbol):
            raise ValueError(f"Invalid symbol: {self.symbol!r}")
        if self.side.upper() not in ("BUY", "SELL"):
            raise ValueError(f"Invalid order side: {self.side!r}")
        if self.is_limit and self.price is None:
            raise ValueError("LIMIT orders require a price")

    @property
    def is_limit(self) -> bool:
        return self.order_type.upper() == "LIMIT"

    def to_params(self) -> Dict[str, str]:
        """Request parameters in the order the exchange documents them."""
        params = {
            "symbol": self.symbol,
            "side": self.side.upper(),
            "type": self.order_type.upper(),
            "quantity": str(self.quantity),
        }
        if self.is_limit:
            params["price"] = str(self.price)
            params["timeInForce"] = (self.time_in_force or DEFAULT_TIME_IN_FORCE).upper()
        if self.client_order_id:
            params["newClientOrderId"] = self.client_order_id
        return params
