"""Pydantic schemas for API request/response."""

from fireledger.api.schemas.transaction import (
    TransactionCreateRequest,
    TransactionResponse,
    TransactionListResponse,
)
from fireledger.api.schemas.portfolio import (
    HoldingResponse,
    AllocationItemResponse,
    WarningResponse,
    PortfolioSyncResponse,
    HoldingListResponse,
)
from fireledger.api.schemas.prices import (
    PriceBatchRequest,
    PriceResponse,
    PriceBatchResponse,
    SinglePriceResponse,
)

__all__ = [
    "TransactionCreateRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "HoldingResponse",
    "AllocationItemResponse",
    "WarningResponse",
    "PortfolioSyncResponse",
    "HoldingListResponse",
    "PriceBatchRequest",
    "PriceResponse",
    "PriceBatchResponse",
    "SinglePriceResponse",
]
