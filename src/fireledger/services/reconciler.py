"""Holdings reconciler: derives current holdings by replaying the ledger."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, Optional

from fireledger.core.timezone import now_local
from fireledger.domain.models import (
    AssetKey,
    AssetType,
    Holding,
    Transaction,
    TransactionType,
    WarningKind,
)
from fireledger.domain.views import ReconciliationResult, ReconciliationWarning

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class _Accumulator:
    asset_name: str
    currency: str
    quantity: Decimal = field(default_factory=lambda: ZERO)
    total_cost: Decimal = field(default_factory=lambda: ZERO)
    average_cost: Decimal = field(default_factory=lambda: ZERO)


def _sort_key(txn: Transaction) -> tuple:
    # Same-date entries replay in insertion order; the id only breaks exact ties
    return (txn.txn_date, txn.created_at or txn.txn_date, txn.txn_id)


class HoldingsReconciler:
    """
    Converts a transaction ledger into per-asset holdings.

    Average-cost accounting: buys raise quantity and cost and recompute the
    average; sells reduce quantity and cost at the existing average. FIFO and
    LIFO lots are not modeled. Dividends and interest are portfolio income and
    never touch a holding.

    Holdings are always rebuilt from scratch; the reconciler keeps no state
    between runs.
    """

    def __init__(self, clock: Callable[[], datetime] = now_local):
        self._clock = clock

    def reconcile(
        self,
        transactions: Iterable[Transaction],
        as_of: Optional[datetime] = None,
    ) -> ReconciliationResult:
        """
        Replay `transactions` in (date, insertion, id) order and return the holdings.

        Ledger inconsistencies (sells without a holding, sells exceeding the
        held quantity, trades without quantity) are clamped and reported as
        warnings rather than raising.
        """
        ordered = sorted(transactions, key=_sort_key)

        accumulators: dict[tuple[AssetKey, AssetType], _Accumulator] = {}
        warnings: list[ReconciliationWarning] = []
        total_dividends = ZERO
        total_interest = ZERO
        total_fees = ZERO

        for txn in ordered:
            total_fees += txn.fees or ZERO
            key = (txn.asset_key, txn.asset_type)

            if txn.txn_type == TransactionType.DIVIDEND:
                total_dividends += abs(txn.total_amount)
                continue
            if txn.txn_type == TransactionType.INTEREST:
                total_interest += abs(txn.total_amount)
                continue

            if txn.quantity is None or txn.quantity <= ZERO:
                warnings.append(
                    self._warning(
                        WarningKind.MISSING_QUANTITY,
                        txn,
                        f"{txn.txn_type.value} without a positive quantity ignored",
                    )
                )
                continue

            if txn.txn_type == TransactionType.BUY:
                acc = accumulators.get(key)
                if acc is None:
                    acc = _Accumulator(asset_name=txn.asset_name, currency=txn.currency)
                    accumulators[key] = acc
                self._apply_buy(acc, txn)

            elif txn.txn_type == TransactionType.SELL:
                acc = accumulators.get(key)
                if acc is None or acc.quantity <= ZERO:
                    warnings.append(
                        self._warning(
                            WarningKind.SELL_WITHOUT_HOLDING,
                            txn,
                            f"sell of {txn.quantity} with no position held",
                        )
                    )
                    continue
                oversold = self._apply_sell(acc, txn)
                if oversold > ZERO:
                    warnings.append(
                        self._warning(
                            WarningKind.OVERSELL,
                            txn,
                            f"sell exceeds held quantity by {oversold}; position closed",
                        )
                    )

        reconciled_at = as_of or self._clock()
        holdings = [
            Holding(
                asset_key=asset_key,
                asset_type=asset_type,
                asset_name=acc.asset_name,
                total_quantity=acc.quantity,
                average_cost=acc.average_cost,
                total_cost=acc.total_cost,
                currency=acc.currency,
                last_updated=reconciled_at,
            )
            for (asset_key, asset_type), acc in sorted(
                accumulators.items(),
                key=lambda item: (item[0][1].value, item[0][0]),
            )
            if acc.quantity > ZERO
        ]

        for warning in warnings:
            logger.warning("Ledger inconsistency on %s (%s): %s", warning.asset_key, warning.txn_id, warning.message)

        return ReconciliationResult(
            holdings=holdings,
            warnings=warnings,
            total_dividends=total_dividends,
            total_interest=total_interest,
            total_fees=total_fees,
            reconciled_at=reconciled_at,
        )

    @staticmethod
    def _apply_buy(acc: _Accumulator, txn: Transaction) -> None:
        new_quantity = acc.quantity + txn.quantity
        new_total_cost = acc.total_cost + abs(txn.total_amount)
        acc.average_cost = new_total_cost / new_quantity if new_quantity != ZERO else ZERO
        acc.quantity = new_quantity
        acc.total_cost = new_total_cost

    @staticmethod
    def _apply_sell(acc: _Accumulator, txn: Transaction) -> Decimal:
        """Reduce the position at the current average; return the oversold quantity."""
        acc.quantity -= txn.quantity
        if acc.quantity > ZERO:
            acc.total_cost = acc.quantity * acc.average_cost
            return ZERO

        oversold = -acc.quantity
        acc.quantity = ZERO
        acc.total_cost = ZERO
        acc.average_cost = ZERO
        return oversold

    @staticmethod
    def _warning(kind: WarningKind, txn: Transaction, message: str) -> ReconciliationWarning:
        return ReconciliationWarning(
            kind=kind,
            asset_key=txn.asset_key,
            txn_id=txn.txn_id,
            message=message,
        )
