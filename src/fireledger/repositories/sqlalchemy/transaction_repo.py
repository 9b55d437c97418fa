"""SQLAlchemy implementation of TransactionRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from fireledger.core.exceptions import NotFoundError
from fireledger.core.timezone import now_local, to_local
from fireledger.domain.models import Transaction
from fireledger.repositories.sqlalchemy.orm_models import TransactionORM


def _to_naive_local(dt: Optional[datetime]) -> Optional[datetime]:
    """SQLite keeps no offset, so timestamps are stored as naive local time."""
    if dt is None:
        return None
    return to_local(dt).replace(tzinfo=None)


def _to_decimal(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        orm_txn = self._to_orm(transaction)
        self._db.add(orm_txn)
        self._db.commit()
        self._db.refresh(orm_txn)
        return self._to_domain(orm_txn)

    def get_by_id(self, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == txn_id
        ).first()
        return self._to_domain(orm_txn) if orm_txn else None

    def list_by_user(self, user_id: str) -> list[Transaction]:
        """List all transactions of a user in replay order (date, insertion, id)."""
        query = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.user_id == user_id)
            .order_by(TransactionORM.txn_date, TransactionORM.created_at, TransactionORM.txn_id)
        )
        return [self._to_domain(t) for t in query.all()]

    def list_recent(self, user_id: str, limit: int) -> list[Transaction]:
        """List the newest `limit` transactions of a user, newest first."""
        query = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.user_id == user_id)
            .order_by(
                TransactionORM.txn_date.desc(),
                TransactionORM.created_at.desc(),
                TransactionORM.txn_id.desc(),
            )
            .limit(limit)
        )
        return [self._to_domain(t) for t in query.all()]

    def delete(self, txn_id: str) -> None:
        """Delete a transaction (hard delete)."""
        deleted = self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == txn_id
        ).delete()
        self._db.commit()
        if not deleted:
            raise NotFoundError("Transaction", txn_id)

    @staticmethod
    def _to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            txn_id=txn.txn_id,
            user_id=txn.user_id,
            txn_date=_to_naive_local(txn.txn_date),
            txn_type=txn.txn_type,
            asset_type=txn.asset_type,
            asset_name=txn.asset_name,
            ticker=txn.ticker,
            quantity=txn.quantity,
            price_per_unit=txn.price_per_unit,
            total_amount=txn.total_amount,
            currency=txn.currency,
            fees=txn.fees,
            notes=txn.notes,
            created_at=_to_naive_local(txn.created_at or now_local()),
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            user_id=orm.user_id,
            txn_date=to_local(orm.txn_date),
            txn_type=orm.txn_type,
            asset_type=orm.asset_type,
            asset_name=orm.asset_name,
            ticker=orm.ticker,
            quantity=_to_decimal(orm.quantity),
            price_per_unit=_to_decimal(orm.price_per_unit),
            total_amount=_to_decimal(orm.total_amount) or Decimal("0"),
            currency=orm.currency,
            fees=_to_decimal(orm.fees) or Decimal("0"),
            notes=orm.notes,
            created_at=to_local(orm.created_at) if orm.created_at else None,
        )
