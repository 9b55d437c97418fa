"""Service layer - business logic orchestration."""

from fireledger.services.ledger_service import LedgerService, TransactionCreate
from fireledger.services.portfolio_service import PortfolioService, PortfolioSync
from fireledger.services.quote_cache import QuoteCache, normalize_symbol
from fireledger.services.reconciler import HoldingsReconciler
from fireledger.services.valuation import apply_prices

__all__ = [
    "LedgerService",
    "TransactionCreate",
    "PortfolioService",
    "PortfolioSync",
    "QuoteCache",
    "normalize_symbol",
    "HoldingsReconciler",
    "apply_prices",
]
