"""Market data providers module."""

from fireledger.providers.market_data_provider import MarketDataProvider
from fireledger.providers.stub_provider import StubMarketDataProvider
from fireledger.providers.yahoo_provider import YahooFinanceProvider


def create_provider(name: str) -> MarketDataProvider:
    """Build the provider selected by the `market_data_provider` setting."""
    if name == "stub":
        return StubMarketDataProvider()
    if name == "yahoo":
        return YahooFinanceProvider()
    raise ValueError(f"Unknown market data provider: {name}")


__all__ = [
    "MarketDataProvider",
    "StubMarketDataProvider",
    "YahooFinanceProvider",
    "create_provider",
]
