"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Types of ledger transactions."""

    BUY = "buy"
    SELL = "sell"
    DIVIDEND = "dividend"
    INTEREST = "interest"


class AssetType(str, Enum):
    """Asset classes a transaction can refer to."""

    STOCK = "stock"
    ETF = "etf"
    BOND = "bond"
    CRYPTO = "crypto"
    COMMODITY = "commodity"
    CASH = "cash"
    OTHER = "other"


class AssetKeyKind(str, Enum):
    """Discriminator for AssetKey: listed ticker or free-form asset name."""

    TICKER = "ticker"
    NAME = "name"


class QuoteStatus(str, Enum):
    """Outcome of a quote lookup through the cache."""

    FRESH = "fresh"
    STALE = "stale"
    ERROR = "error"


class PriceStatus(str, Enum):
    """Pricing state of a valued holding."""

    FRESH = "fresh"
    STALE = "stale"
    UNAVAILABLE = "unavailable"


class WarningKind(str, Enum):
    """Ledger inconsistencies detected during reconciliation."""

    OVERSELL = "oversell"
    SELL_WITHOUT_HOLDING = "sell_without_holding"
    MISSING_QUANTITY = "missing_quantity"
