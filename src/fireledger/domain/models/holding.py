"""Holding models for derived portfolio state."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fireledger.domain.models.enums import AssetKeyKind, AssetType, PriceStatus


@dataclass(frozen=True, order=True)
class AssetKey:
    """
    Identity of an asset in the ledger.

    A ticker key and a name key never compare equal, even when their text
    coincides.
    """

    kind: AssetKeyKind
    value: str

    @property
    def ticker(self) -> Optional[str]:
        return self.value if self.kind == AssetKeyKind.TICKER else None

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.value}"


@dataclass
class Holding:
    """
    Derived holding per (asset key, asset type).

    IMPORTANT: Never edit directly; always rebuild from ledger.
    Price-dependent fields stay None until prices are applied.
    """

    asset_key: AssetKey
    asset_type: AssetType
    asset_name: str
    total_quantity: Decimal
    average_cost: Decimal
    total_cost: Decimal
    currency: str = "EUR"
    current_price: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    unrealized_gain_loss: Optional[Decimal] = None
    gain_loss_percentage: Optional[Decimal] = None
    percentage_of_portfolio: Optional[Decimal] = None
    day_change: Decimal = field(default_factory=lambda: Decimal("0"))
    price_status: Optional[PriceStatus] = None
    last_updated: Optional[datetime] = None

    @property
    def ticker(self) -> Optional[str]:
        return self.asset_key.ticker
