"""View models for market quotes."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fireledger.domain.models.enums import QuoteStatus


@dataclass(frozen=True)
class Quote:
    """Market quote snapshot for a normalized symbol."""

    symbol: str
    price: Decimal
    previous_close: Decimal
    change: Decimal
    change_percent: Decimal
    currency: str = "USD"
    market_state: str = "CLOSED"
    display_name: Optional[str] = None
    fetched_at: Optional[datetime] = None


@dataclass(frozen=True)
class QuoteResult:
    """
    Per-ticker outcome of a cache lookup.

    FRESH and STALE results carry a quote; ERROR results carry only the
    failure message. STALE results also keep the message of the fetch that
    failed.
    """

    symbol: str
    status: QuoteStatus
    quote: Optional[Quote] = None
    message: Optional[str] = None

    @classmethod
    def fresh(cls, quote: Quote) -> "QuoteResult":
        return cls(symbol=quote.symbol, status=QuoteStatus.FRESH, quote=quote)

    @classmethod
    def stale(cls, quote: Quote, message: Optional[str] = None) -> "QuoteResult":
        return cls(symbol=quote.symbol, status=QuoteStatus.STALE, quote=quote, message=message)

    @classmethod
    def error(cls, symbol: str, message: str) -> "QuoteResult":
        return cls(symbol=symbol, status=QuoteStatus.ERROR, message=message)

    @property
    def is_error(self) -> bool:
        return self.status == QuoteStatus.ERROR

    @property
    def is_fresh(self) -> bool:
        return self.status == QuoteStatus.FRESH

    @property
    def is_stale(self) -> bool:
        return self.status == QuoteStatus.STALE
