"""Stub market data provider for offline/testing use."""

import random
from decimal import Decimal

from fireledger.core.exceptions import QuoteNotFoundError
from fireledger.core.timezone import now_local
from fireledger.domain.views import Quote


# Deterministic fake prices for common symbols
_STUB_PRICES: dict[str, tuple[Decimal, Decimal]] = {
    "AAPL": (Decimal("185.50"), Decimal("184.25")),
    "GOOGL": (Decimal("142.75"), Decimal("141.50")),
    "MSFT": (Decimal("378.25"), Decimal("376.80")),
    "AMZN": (Decimal("178.50"), Decimal("177.25")),
    "TSLA": (Decimal("248.75"), Decimal("250.10")),
    "NVDA": (Decimal("485.25"), Decimal("482.50")),
    "VWCE.DE": (Decimal("112.34"), Decimal("111.90")),
    "SWDA.MI": (Decimal("98.12"), Decimal("98.40")),
    "BTC-EUR": (Decimal("58250.00"), Decimal("57120.00")),
    "SPY": (Decimal("485.25"), Decimal("484.10")),
}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; generates seeded random prices
    for other symbols. Symbols in `unknown_symbols` raise QuoteNotFoundError.
    """

    def __init__(self, seed: int = 42, unknown_symbols: frozenset[str] = frozenset()):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)
        self._unknown = {s.upper() for s in unknown_symbols}

    async def fetch_quote(self, symbol: str) -> Quote:
        """Return a stub quote for the requested symbol."""
        upper_symbol = symbol.upper()
        if upper_symbol in self._unknown:
            raise QuoteNotFoundError(upper_symbol)

        if upper_symbol in _STUB_PRICES:
            price, previous_close = _STUB_PRICES[upper_symbol]
        else:
            base_price = Decimal(str(50 + self._rng.random() * 200))
            price = base_price.quantize(Decimal("0.01"))
            change_pct = Decimal(str((self._rng.random() - 0.5) * 0.04))
            previous_close = (price / (1 + change_pct)).quantize(Decimal("0.01"))

        change = price - previous_close
        change_percent = (
            (change / previous_close * 100).quantize(Decimal("0.0001"))
            if previous_close
            else Decimal("0")
        )
        return Quote(
            symbol=upper_symbol,
            price=price,
            previous_close=previous_close,
            change=change,
            change_percent=change_percent,
            currency="USD",
            market_state="REGULAR",
            display_name=upper_symbol,
            fetched_at=now_local(),
        )
