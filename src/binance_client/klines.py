"""
Historical kline pagination.

The exchange caps each klines page, so a full history is assembled by walking
``startTime`` forward until a page comes back empty.
"""

import logging
from typing import Any, Dict, List, Optional

from .endpoints import KLINES, EndpointResolver
from .exceptions import MalformedResponseError
from .http_client import HttpClient, HttpMethod
from .utils import utc_string_to_ms

logger = logging.getLogger(__name__)


class KlinePaginator:
    """
    Fetches complete candle series across as many pages as needed.

    With ``drop_last`` (the default) the final record of the assembled series
    is removed before returning. Without an end time that record is the candle
    still being formed, whose values are not final.
    """

    def __init__(self, http_client: HttpClient, resolver: EndpointResolver, drop_last: bool = True):
        self._http_client = http_client
        self._resolver = resolver
        self.drop_last = drop_last

    async def fetch_history(
        self,
        symbol: str,
        interval: str,
        start_time_utc: str,
        end_time_utc: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[list]:
        """
        Fetch every kline from ``start_time_utc`` (to ``end_time_utc`` if given).

        Args:
            symbol: Trading symbol, e.g. "BTCUSDT"
            interval: Kline interval, e.g. "1h"
            start_time_utc: "YYYY-MM-DD HH:MM:SS", UTC
            end_time_utc: Optional "YYYY-MM-DD HH:MM:SS", UTC; empty means none
            limit: Optional page size sent to the exchange

        Returns:
            Kline records in exchange order

        Raises:
            ValueError: malformed time string
            MalformedResponseError: a page is not a list of klines
        """
        url = self._resolver.resolve(KLINES)

        params: Dict[str, Any] = {
            "symbol": symbol,
            "interval": interval,
            "startTime": utc_string_to_ms(start_time_utc),
        }
        if end_time_utc:
            params["endTime"] = utc_string_to_ms(end_time_utc)
        if limit is not None:
            params["limit"] = limit

        klines: List[list] = []
        pages = 0
        while True:
            page = await self._http_client.dispatch(url, HttpMethod.GET, dict(params), False)
            if not isinstance(page, list):
                raise MalformedResponseError(
                    f"Unexpected klines response for {symbol}: {str(page)[:200]}",
                    body=str(page)[:200],
                )
            if not page:
                break

            pages += 1
            params["startTime"] = self._open_time(page[-1]) + 1
            klines.extend(page)

        logger.debug(f"Fetched {len(klines)} {interval} klines for {symbol} in {pages} pages")

        if self.drop_last and klines:
            return klines[:-1]
        return klines

    @staticmethod
    def _open_time(record: Any) -> int:
        open_time = record[0] if isinstance(record, (list, tuple)) and record else None
        if not isinstance(open_time, int) or isinstance(open_time, bool):
            raise MalformedResponseError(
                f"Kline record without integer open time: {str(record)[:200]}",
                body=str(record)[:200],
            )
        return open_time
