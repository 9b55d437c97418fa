"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from fireledger.domain.models.enums import AssetKeyKind, AssetType, PriceStatus, WarningKind


class HoldingResponse(BaseModel):
    """Response schema for a single holding."""

    key_kind: AssetKeyKind
    key_value: str
    ticker: Optional[str] = None
    asset_type: AssetType
    asset_name: str
    currency: str
    total_quantity: Decimal
    average_cost: Decimal
    total_cost: Decimal
    current_price: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    unrealized_gain_loss: Optional[Decimal] = None
    gain_loss_percentage: Optional[Decimal] = None
    percentage_of_portfolio: Optional[Decimal] = None
    day_change: Decimal
    price_status: Optional[PriceStatus] = None
    last_updated: Optional[datetime] = None


class AllocationItemResponse(BaseModel):
    """Response schema for one asset-type allocation slice."""

    asset_type: AssetType
    value: Decimal
    percentage: Decimal


class WarningResponse(BaseModel):
    """Response schema for a ledger inconsistency."""

    kind: WarningKind
    asset: str
    txn_id: str
    message: str


class PortfolioSyncResponse(BaseModel):
    """Response schema for a portfolio sync."""

    user_id: str
    holdings: list[HoldingResponse]
    allocations: list[AllocationItemResponse]
    total_value: Decimal
    total_cost: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percentage: Decimal
    day_change: Decimal
    day_change_percentage: Decimal
    total_dividends: Decimal
    total_interest: Decimal
    total_fees: Decimal
    stale_count: int
    unavailable_count: int
    warnings: list[WarningResponse]
    as_of: Optional[datetime] = None


class HoldingListResponse(BaseModel):
    """Response schema for persisted holdings."""

    user_id: str
    holdings: list[HoldingResponse]
    allocations: list[AllocationItemResponse]
    total_value: Decimal
    count: int
