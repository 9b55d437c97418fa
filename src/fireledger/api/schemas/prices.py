"""Pydantic schemas for price endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class PriceBatchRequest(BaseModel):
    """Request schema for a batch price lookup."""

    tickers: list[str] = Field(..., description="Tickers to quote; only the first 50 are processed")


class PriceResponse(BaseModel):
    """
    Price of one ticker.

    Error rows carry only symbol, error=True and message.
    Stale rows carry the last known quote with stale=True.
    """

    symbol: str
    price: Optional[Decimal] = None
    previous_close: Optional[Decimal] = None
    change: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    currency: Optional[str] = None
    market_state: Optional[str] = None
    display_name: Optional[str] = None
    fetched_at: Optional[datetime] = None
    stale: bool = False
    error: bool = False
    message: Optional[str] = None


class PriceBatchResponse(BaseModel):
    """Response schema for a batch price lookup."""

    prices: list[PriceResponse]
    timestamp: datetime
    truncated: bool = False


class SinglePriceResponse(BaseModel):
    """Response schema for a single-ticker lookup."""

    price: PriceResponse
    timestamp: datetime
