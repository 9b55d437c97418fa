"""Domain models package."""

from fireledger.domain.models.enums import (
    TransactionType,
    AssetType,
    AssetKeyKind,
    QuoteStatus,
    PriceStatus,
    WarningKind,
)
from fireledger.domain.models.holding import AssetKey, Holding
from fireledger.domain.models.transaction import Transaction, normalize_ticker

__all__ = [
    "TransactionType",
    "AssetType",
    "AssetKeyKind",
    "QuoteStatus",
    "PriceStatus",
    "WarningKind",
    "AssetKey",
    "Holding",
    "Transaction",
    "normalize_ticker",
]
