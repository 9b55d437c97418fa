"""View models for reconciliation and valuation outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fireledger.domain.models import AssetKey, AssetType, Holding, WarningKind


@dataclass(frozen=True)
class ReconciliationWarning:
    """A ledger inconsistency the caller should surface to the user."""

    kind: WarningKind
    asset_key: AssetKey
    txn_id: str
    message: str


@dataclass
class ReconciliationResult:
    """Holdings derived from one ledger replay, plus portfolio-level income."""

    holdings: list[Holding] = field(default_factory=list)
    warnings: list[ReconciliationWarning] = field(default_factory=list)
    total_dividends: Decimal = field(default_factory=lambda: Decimal("0"))
    total_interest: Decimal = field(default_factory=lambda: Decimal("0"))
    total_fees: Decimal = field(default_factory=lambda: Decimal("0"))
    reconciled_at: Optional[datetime] = None

    @property
    def tickers(self) -> list[str]:
        """Tickers of listed holdings, in holding order."""
        return [h.ticker for h in self.holdings if h.ticker]


@dataclass
class AllocationItem:
    """Single asset-type slice of the allocation breakdown."""

    asset_type: AssetType
    value: Decimal
    percentage: Decimal


@dataclass
class PortfolioValuation:
    """Priced holdings and portfolio aggregates."""

    holdings: list[Holding] = field(default_factory=list)
    allocations: list[AllocationItem] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss_percentage: Decimal = field(default_factory=lambda: Decimal("0"))
    total_day_change: Decimal = field(default_factory=lambda: Decimal("0"))
    day_change_percentage: Decimal = field(default_factory=lambda: Decimal("0"))
    stale_count: int = 0
    unavailable_count: int = 0
    as_of: Optional[datetime] = None


@dataclass
class PortfolioSnapshot:
    """Holdings persisted by the last sync, with their allocation breakdown."""

    holdings: list[Holding] = field(default_factory=list)
    allocations: list[AllocationItem] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
