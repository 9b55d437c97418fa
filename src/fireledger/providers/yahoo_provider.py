"""
Yahoo Finance market data provider via yfinance.

yfinance is synchronous, so each lookup runs in a worker thread to keep the
event loop free for other tickers in the same batch.
"""

import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import yfinance as yf
from yfinance.exceptions import YFRateLimitError

from fireledger.core.exceptions import QuoteFetchError, QuoteNotFoundError, RateLimitedError
from fireledger.core.timezone import now_local
from fireledger.domain.views import Quote

logger = logging.getLogger(__name__)


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(float(value)))
    except (TypeError, ValueError, InvalidOperation):
        return None


def _quote_from_info(symbol: str, info: dict) -> Quote:
    """Build a Quote from a yfinance info dict; raise if it carries no price."""
    # Price: regularMarketPrice preferred, then currentPrice
    price = _to_decimal(info.get("regularMarketPrice"))
    if price is None:
        price = _to_decimal(info.get("currentPrice"))
    if price is None:
        raise QuoteNotFoundError(symbol)

    previous_close = _to_decimal(
        info.get("regularMarketPreviousClose") or info.get("previousClose")
    ) or Decimal("0")

    change = _to_decimal(info.get("regularMarketChange"))
    if change is None:
        change = price - previous_close if previous_close else Decimal("0")

    change_percent = _to_decimal(info.get("regularMarketChangePercent"))
    if change_percent is None:
        change_percent = change / previous_close * 100 if previous_close else Decimal("0")

    name = (info.get("displayName") or info.get("longName") or info.get("shortName") or "").strip()
    return Quote(
        symbol=symbol,
        price=price,
        previous_close=previous_close,
        change=change,
        change_percent=change_percent,
        currency=info.get("currency") or "USD",
        market_state=info.get("marketState") or "CLOSED",
        display_name=name or symbol,
        fetched_at=now_local(),
    )


def _fetch_info(symbol: str) -> dict:
    info = yf.Ticker(symbol).info
    if not isinstance(info, dict):
        return {}
    return info


class YahooFinanceProvider:
    """Fetches real-time quotes from Yahoo Finance."""

    async def fetch_quote(self, symbol: str) -> Quote:
        """Fetch a quote for `symbol`; raises QuoteFetchError subclasses on failure."""
        try:
            info = await asyncio.to_thread(_fetch_info, symbol)
        except YFRateLimitError as e:
            raise RateLimitedError(symbol) from e
        except Exception as e:
            logger.debug("yfinance lookup failed for %s: %s", symbol, e)
            raise QuoteFetchError(symbol, str(e) or e.__class__.__name__) from e

        return _quote_from_info(symbol, info)
