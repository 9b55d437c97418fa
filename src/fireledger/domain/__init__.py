"""Domain layer - pure business models with no external dependencies."""

from fireledger.domain.models import (
    Transaction,
    Holding,
    AssetKey,
    TransactionType,
    AssetType,
    AssetKeyKind,
    QuoteStatus,
    PriceStatus,
    WarningKind,
)

__all__ = [
    "Transaction",
    "Holding",
    "AssetKey",
    "TransactionType",
    "AssetType",
    "AssetKeyKind",
    "QuoteStatus",
    "PriceStatus",
    "WarningKind",
]
