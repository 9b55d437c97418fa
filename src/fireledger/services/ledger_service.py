"""Ledger service for transaction management."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fireledger.config.settings import get_settings
from fireledger.core.timezone import now_local
from fireledger.core.exceptions import ValidationError, NotFoundError
from fireledger.domain.models import (
    AssetType,
    Transaction,
    TransactionType,
    normalize_ticker,
)
from fireledger.repositories.protocols import TransactionRepository

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 100


@dataclass
class TransactionCreate:
    """Input data for creating a transaction."""

    user_id: str
    txn_type: TransactionType
    asset_type: AssetType
    asset_name: str
    ticker: Optional[str] = None
    quantity: Optional[Decimal] = None
    price_per_unit: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None
    txn_date: Optional[datetime] = None
    currency: Optional[str] = None
    fees: Decimal = Decimal("0")
    notes: Optional[str] = None


class LedgerService:
    """
    Service for managing the transaction ledger.

    Transactions are append-only: they are created and deleted, never edited.
    Holdings are derived from the ledger by PortfolioService.sync().
    """

    def __init__(self, transaction_repo: TransactionRepository):
        self._transaction_repo = transaction_repo

    def add_transaction(self, data: TransactionCreate) -> Transaction:
        """
        Add a new transaction to the ledger.

        Validates input based on transaction type. When total_amount is
        omitted on a trade it is derived from quantity, price and fees.
        """
        data.txn_type = TransactionType(data.txn_type)
        data.asset_type = AssetType(data.asset_type)
        self._validate_transaction_create(data)

        now = now_local()
        transaction = Transaction(
            txn_id=str(uuid.uuid4()),
            user_id=data.user_id.strip(),
            txn_date=data.txn_date or now,
            txn_type=data.txn_type,
            asset_type=data.asset_type,
            asset_name=data.asset_name.strip(),
            ticker=normalize_ticker(data.ticker),
            quantity=data.quantity,
            price_per_unit=data.price_per_unit,
            total_amount=self._resolve_total_amount(data),
            currency=(data.currency or get_settings().default_currency).upper(),
            fees=data.fees,
            notes=data.notes,
            created_at=now,
        )

        created = self._transaction_repo.create(transaction)
        logger.info(
            "Recorded %s of %s for user %s",
            created.txn_type.value,
            created.asset_key,
            created.user_id,
        )
        return created

    def get_transaction(self, txn_id: str) -> Transaction:
        """Get transaction by ID."""
        transaction = self._transaction_repo.get_by_id(txn_id)
        if not transaction:
            raise NotFoundError("Transaction", txn_id)
        return transaction

    def list_transactions(self, user_id: str, limit: int = DEFAULT_LIST_LIMIT) -> list[Transaction]:
        """List a user's most recent transactions, newest first."""
        if limit < 1:
            raise ValidationError("limit must be >= 1")
        return self._transaction_repo.list_recent(user_id, limit)

    def delete_transaction(self, txn_id: str) -> None:
        """
        Delete a transaction.

        The caller must sync the portfolio afterwards; persisted holdings
        are not touched here.
        """
        self.get_transaction(txn_id)
        self._transaction_repo.delete(txn_id)
        logger.info("Deleted transaction %s", txn_id)

    def _validate_transaction_create(self, data: TransactionCreate) -> None:
        """Validate transaction creation data."""
        if not data.user_id or not data.user_id.strip():
            raise ValidationError("user_id is required")
        if not data.asset_name or not data.asset_name.strip():
            raise ValidationError("asset_name is required")
        if data.fees is None or data.fees < 0:
            raise ValidationError("fees must be >= 0")

        if data.txn_type in (TransactionType.BUY, TransactionType.SELL):
            if data.quantity is None or data.quantity <= 0:
                raise ValidationError(f"{data.txn_type.value} requires quantity > 0")
            if data.price_per_unit is not None and data.price_per_unit < 0:
                raise ValidationError("price_per_unit must be >= 0")
            if data.total_amount is None and data.price_per_unit is None:
                raise ValidationError(
                    f"{data.txn_type.value} requires total_amount or price_per_unit"
                )
        elif data.total_amount is None:
            raise ValidationError(f"{data.txn_type.value} requires total_amount")

    @staticmethod
    def _resolve_total_amount(data: TransactionCreate) -> Decimal:
        if data.total_amount is not None:
            return data.total_amount

        gross = data.quantity * data.price_per_unit
        if data.txn_type == TransactionType.BUY:
            return gross + data.fees
        return gross - data.fees
