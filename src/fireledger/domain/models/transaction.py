"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fireledger.domain.models.enums import AssetKeyKind, AssetType, TransactionType
from fireledger.domain.models.holding import AssetKey


def normalize_ticker(ticker: Optional[str]) -> Optional[str]:
    """Trim and uppercase a ticker; blank tickers become None."""
    if ticker is None:
        return None
    cleaned = ticker.strip().upper()
    return cleaned or None


@dataclass(frozen=True)
class Transaction:
    """
    Ledger transaction entry (source of truth).

    Append-only: transactions are never edited, only deleted by explicit user
    action, after which holdings must be reconciled again.
    - BUY/SELL require quantity
    - DIVIDEND/INTEREST only carry total_amount
    - Unlisted assets have no ticker and are keyed by asset_name
    """

    txn_id: str
    user_id: str
    txn_date: datetime
    txn_type: TransactionType
    asset_type: AssetType
    asset_name: str
    total_amount: Decimal
    ticker: Optional[str] = None
    quantity: Optional[Decimal] = None
    price_per_unit: Optional[Decimal] = None
    currency: str = "EUR"
    fees: Decimal = field(default_factory=lambda: Decimal("0"))
    notes: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            object.__setattr__(self, "txn_type", TransactionType(self.txn_type))
        if isinstance(self.asset_type, str):
            object.__setattr__(self, "asset_type", AssetType(self.asset_type))

    @property
    def asset_key(self) -> AssetKey:
        """Ticker-keyed when a ticker is present, otherwise name-keyed."""
        ticker = normalize_ticker(self.ticker)
        if ticker:
            return AssetKey(kind=AssetKeyKind.TICKER, value=ticker)
        return AssetKey(kind=AssetKeyKind.NAME, value=self.asset_name.strip())
