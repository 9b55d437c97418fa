"""Pydantic schemas for transaction endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from fireledger.core.timezone import parse_datetime_local
from fireledger.domain.models.enums import AssetType, TransactionType
from fireledger.domain.models.transaction import normalize_ticker


class TransactionCreateRequest(BaseModel):
    """Request schema for creating a transaction."""

    user_id: str = Field(..., min_length=1, description="Owner of the transaction")
    txn_type: TransactionType = Field(..., description="Transaction type")
    asset_type: AssetType = Field(..., description="Asset class")
    asset_name: str = Field(..., min_length=1, max_length=255, description="Asset display name")
    ticker: Optional[str] = Field(
        default=None,
        max_length=32,
        description="Market ticker; omit for unlisted assets",
    )
    quantity: Optional[Decimal] = Field(
        default=None,
        gt=0,
        description="Units traded (required for BUY/SELL)",
    )
    price_per_unit: Optional[Decimal] = Field(default=None, ge=0, description="Unit price")
    total_amount: Optional[Decimal] = Field(
        default=None,
        description="Cash amount; derived from quantity and price when omitted",
    )
    txn_date: Optional[datetime] = Field(
        default=None,
        description="Transaction date; defaults to now",
    )
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    fees: Decimal = Field(default=Decimal("0"), ge=0, description="Transaction fees")
    notes: Optional[str] = Field(default=None, max_length=500, description="Optional note")

    @field_validator("ticker")
    @classmethod
    def clean_ticker(cls, v: Optional[str]) -> Optional[str]:
        return normalize_ticker(v)

    @field_validator("txn_date", mode="before")
    @classmethod
    def parse_txn_date(cls, v):
        # Accepts "2024-01-15", "15 Jan 2024 10:30" etc.; no offset means local time
        if isinstance(v, str) and v.strip():
            return parse_datetime_local(v)
        return v


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True}

    txn_id: str
    user_id: str
    txn_date: datetime
    txn_type: TransactionType
    asset_type: AssetType
    asset_name: str
    ticker: Optional[str] = None
    quantity: Optional[Decimal] = None
    price_per_unit: Optional[Decimal] = None
    total_amount: Decimal
    currency: str
    fees: Decimal
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions."""

    transactions: list[TransactionResponse]
    count: int
