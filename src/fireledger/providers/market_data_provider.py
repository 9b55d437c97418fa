"""Market data provider protocol."""

from typing import Protocol

from fireledger.domain.views import Quote


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers (the external price source).

    Implementations fetch one real-time quote per call and raise on failure:
    QuoteNotFoundError for unknown tickers, RateLimitedError when throttled,
    QuoteFetchError (or any other exception) for everything else. Caching and
    graceful degradation belong to QuoteCache, not to providers.
    """

    async def fetch_quote(self, symbol: str) -> Quote:
        """Fetch a quote for an already-normalized symbol."""
        ...
