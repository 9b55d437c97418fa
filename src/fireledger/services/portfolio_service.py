"""Portfolio service: ledger replay, pricing and holdings persistence."""

import logging
from dataclasses import dataclass
from typing import Optional

from fireledger.core.exceptions import ValidationError
from fireledger.domain.models import Holding
from fireledger.domain.views import PortfolioSnapshot, PortfolioValuation, ReconciliationResult
from fireledger.repositories.protocols import HoldingRepository, TransactionRepository
from fireledger.services.quote_cache import QuoteCache
from fireledger.services.reconciler import HoldingsReconciler
from fireledger.services.valuation import allocate, apply_prices

logger = logging.getLogger(__name__)


@dataclass
class PortfolioSync:
    """Outcome of one portfolio sync."""

    valuation: PortfolioValuation
    reconciliation: ReconciliationResult


class PortfolioService:
    """
    Orchestrates a portfolio sync.

    Flow: ledger -> reconcile -> fetch quotes -> apply prices -> persist.
    Persisted holdings are a cache of the last sync and are replaced in full.
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        holding_repo: HoldingRepository,
        quote_cache: QuoteCache,
        reconciler: Optional[HoldingsReconciler] = None,
    ):
        self._transaction_repo = transaction_repo
        self._holding_repo = holding_repo
        self._quote_cache = quote_cache
        self._reconciler = reconciler or HoldingsReconciler()

    async def sync(self, user_id: str) -> PortfolioSync:
        """Rebuild, price and persist the holdings of `user_id`."""
        user_id = self._require_user(user_id)
        transactions = self._transaction_repo.list_by_user(user_id)
        reconciliation = self._reconciler.reconcile(transactions)

        quotes = await self._quote_cache.get_quote_map(reconciliation.tickers)
        valuation = apply_prices(
            reconciliation.holdings,
            quotes,
            as_of=reconciliation.reconciled_at,
        )

        self._holding_repo.replace_for_user(user_id, valuation.holdings)
        logger.info(
            "Synced portfolio for %s: %d holdings from %d transactions "
            "(%d warnings, %d stale, %d unavailable)",
            user_id,
            len(valuation.holdings),
            len(transactions),
            len(reconciliation.warnings),
            valuation.stale_count,
            valuation.unavailable_count,
        )
        return PortfolioSync(valuation=valuation, reconciliation=reconciliation)

    def get_persisted_holdings(self, user_id: str) -> list[Holding]:
        """Holdings written by the last sync; no pricing is done."""
        return self._holding_repo.list_by_user(self._require_user(user_id))

    def get_persisted_portfolio(self, user_id: str) -> PortfolioSnapshot:
        """
        Persisted holdings plus allocation and total value.

        Rows without a stored value count at cost. Nothing is repriced.
        """
        holdings = self.get_persisted_holdings(user_id)
        total_value, allocations = allocate(holdings)
        return PortfolioSnapshot(
            holdings=holdings,
            allocations=allocations,
            total_value=total_value,
        )

    @staticmethod
    def _require_user(user_id: str) -> str:
        if not user_id or not user_id.strip():
            raise ValidationError("user_id is required")
        return user_id.strip()
