"""
Pytest configuration and fixtures for portfolio valuation tests.

This module provides:
- In-memory SQLite database fixtures
- Factory helpers for ledger transactions
- Deterministic async market data providers and a controllable clock
- Time helpers for the local timezone
- Service, repository and API client fixtures
"""

import asyncio
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, Optional

import pytest
import pytz
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from fireledger.main import app
from fireledger.api.deps import get_quote_cache
from fireledger.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from fireledger.repositories.sqlalchemy import orm_models  # noqa: F401
from fireledger.repositories.sqlalchemy import (
    SqlAlchemyTransactionRepository,
    SqlAlchemyHoldingRepository,
)
from fireledger.services import (
    HoldingsReconciler,
    LedgerService,
    PortfolioService,
    QuoteCache,
)
from fireledger.core.exceptions import QuoteFetchError, QuoteNotFoundError
from fireledger.domain.models import AssetType, Transaction, TransactionType
from fireledger.domain.views import Quote
from fireledger.config.settings import Settings, reset_settings, set_settings


LOCAL_TZ = pytz.timezone("Europe/Rome")


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def local_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in the app timezone (Europe/Rome)."""
    return LOCAL_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return local_datetime(2024, 6, 15, 14, 30, 0)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable monotonic clock."""
    return FakeClock()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def holding_repo(test_session) -> SqlAlchemyHoldingRepository:
    """Provide test HoldingRepository."""
    return SqlAlchemyHoldingRepository(test_session)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic async market data provider for testing.

    Provides fixed quotes with no randomness and counts provider calls.
    Symbols outside FIXED_QUOTES raise QuoteNotFoundError.
    """

    FIXED_QUOTES = {
        "AAPL": (Decimal("185.50"), Decimal("184.25")),  # +1.25
        "GOOGL": (Decimal("142.75"), Decimal("141.50")),  # +1.25
        "MSFT": (Decimal("378.25"), Decimal("376.80")),  # +1.45
        "TSLA": (Decimal("248.75"), Decimal("250.10")),  # -1.35 (down)
        "VWCE.DE": (Decimal("112.00"), Decimal("111.00")),  # +1.00
        "BTC-EUR": (Decimal("60000"), Decimal("59000")),  # +1000
    }

    def __init__(self, as_of: Optional[datetime] = None, delay: float = 0.0):
        self._as_of = as_of or local_datetime(2024, 6, 15, 16, 0, 0)
        self._delay = delay
        self.calls: list[str] = []

    async def fetch_quote(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        if self._delay:
            await asyncio.sleep(self._delay)
        if symbol not in self.FIXED_QUOTES:
            raise QuoteNotFoundError(symbol)
        price, previous_close = self.FIXED_QUOTES[symbol]
        change = price - previous_close
        return Quote(
            symbol=symbol,
            price=price,
            previous_close=previous_close,
            change=change,
            change_percent=(change / previous_close * 100).quantize(Decimal("0.0001")),
            currency="EUR",
            market_state="REGULAR",
            fetched_at=self._as_of,
        )

    def call_count(self, symbol: str) -> int:
        return self.calls.count(symbol)


class FailingMarketProvider:
    """Market provider that always raises an exception."""

    def __init__(self):
        self.calls: list[str] = []

    async def fetch_quote(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        raise ConnectionError("Network unavailable")


class SwitchableMarketProvider(DeterministicMarketProvider):
    """Deterministic provider whose listed symbols can be made to fail."""

    def __init__(self, failing: Iterable[str] = (), **kwargs):
        super().__init__(**kwargs)
        self.failing = set(failing)

    async def fetch_quote(self, symbol: str) -> Quote:
        if symbol in self.failing:
            self.calls.append(symbol)
            raise QuoteFetchError(symbol, "upstream unavailable")
        return await super().fetch_quote(symbol)


@pytest.fixture
def deterministic_provider(fixed_now) -> DeterministicMarketProvider:
    """Provide deterministic market data provider."""
    return DeterministicMarketProvider(as_of=fixed_now)


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


@pytest.fixture
def quote_cache(deterministic_provider, clock) -> QuoteCache:
    """Provide a QuoteCache over the deterministic provider and fake clock."""
    return QuoteCache(provider=deterministic_provider, clock=clock)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def reconciler(fixed_now) -> HoldingsReconciler:
    """Provide a reconciler whose clock is pinned to fixed_now."""
    return HoldingsReconciler(clock=lambda: fixed_now)


@pytest.fixture
def ledger_service(transaction_repo) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(transaction_repo=transaction_repo)


@pytest.fixture
def portfolio_service(
    transaction_repo,
    holding_repo,
    quote_cache,
    reconciler,
) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(
        transaction_repo=transaction_repo,
        holding_repo=holding_repo,
        quote_cache=quote_cache,
        reconciler=reconciler,
    )


# =============================================================================
# FACTORY HELPERS
# =============================================================================


def make_transaction(
    txn_type: TransactionType,
    quantity: Optional[str] = None,
    total_amount: str = "0",
    ticker: Optional[str] = "AAPL",
    asset_name: str = "Apple Inc.",
    asset_type: AssetType = AssetType.STOCK,
    txn_date: Optional[datetime] = None,
    txn_id: Optional[str] = None,
    fees: str = "0",
    user_id: str = "user-1",
    price_per_unit: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> Transaction:
    """Build an in-memory Transaction; amounts are given as strings."""
    return Transaction(
        txn_id=txn_id or str(uuid.uuid4()),
        user_id=user_id,
        txn_date=txn_date or local_datetime(2024, 1, 2),
        txn_type=txn_type,
        asset_type=asset_type,
        asset_name=asset_name,
        ticker=ticker,
        quantity=Decimal(quantity) if quantity is not None else None,
        price_per_unit=Decimal(price_per_unit) if price_per_unit is not None else None,
        total_amount=Decimal(total_amount),
        fees=Decimal(fees),
        created_at=created_at,
    )


def buy(quantity: str, total_amount: str, **kwargs) -> Transaction:
    return make_transaction(TransactionType.BUY, quantity, total_amount, **kwargs)


def sell(quantity: str, total_amount: str, **kwargs) -> Transaction:
    return make_transaction(TransactionType.SELL, quantity, total_amount, **kwargs)


@pytest.fixture
def transaction_factory(transaction_repo) -> Callable[..., Transaction]:
    """Factory that persists transactions built with make_transaction."""

    def _create_transaction(txn_type: TransactionType, *args, **kwargs) -> Transaction:
        return transaction_repo.create(make_transaction(txn_type, *args, **kwargs))

    return _create_transaction


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_provider() -> SwitchableMarketProvider:
    """Provider behind the API test client's quote cache."""
    return SwitchableMarketProvider()


@pytest.fixture
def api_quote_cache(api_provider, clock) -> QuoteCache:
    """Quote cache served to API handlers; driven by the fake clock."""
    return QuoteCache(provider=api_provider, clock=clock)


@pytest.fixture
def client(test_engine, api_quote_cache) -> TestClient:
    """Provide FastAPI test client with test database and deterministic quotes."""
    set_settings(Settings(database_url="sqlite:///:memory:", market_data_provider="stub"))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    cache = api_quote_cache

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_quote_cache] = lambda: cache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()
