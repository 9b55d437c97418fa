"""View models for service outputs."""

from fireledger.domain.views.quotes import Quote, QuoteResult
from fireledger.domain.views.portfolio import (
    ReconciliationWarning,
    ReconciliationResult,
    AllocationItem,
    PortfolioValuation,
    PortfolioSnapshot,
)

__all__ = [
    "Quote",
    "QuoteResult",
    "ReconciliationWarning",
    "ReconciliationResult",
    "AllocationItem",
    "PortfolioValuation",
    "PortfolioSnapshot",
]
