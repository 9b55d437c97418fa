"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Text,
    Numeric,
    Index,
    Enum as SqlEnum,
)

from fireledger.core.timezone import now_local
from fireledger.repositories.sqlalchemy.database import Base
from fireledger.domain.models.enums import (
    AssetKeyKind,
    AssetType,
    PriceStatus,
    TransactionType,
)


def _naive_local_now() -> datetime:
    return now_local().replace(tzinfo=None)


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (ledger entry)."""

    __tablename__ = "financial_transactions"
    __table_args__ = (Index("ix_financial_transactions_user_date", "user_id", "txn_date"),)

    txn_id = Column(String(36), primary_key=True)
    user_id = Column(String(64), nullable=False)
    txn_date = Column(DateTime, nullable=False)
    txn_type = Column(SqlEnum(TransactionType), nullable=False)
    asset_type = Column(SqlEnum(AssetType), nullable=False)
    asset_name = Column(String(255), nullable=False)
    ticker = Column(String(32), nullable=True)
    quantity = Column(Numeric(precision=24, scale=10), nullable=True)
    price_per_unit = Column(Numeric(precision=24, scale=10), nullable=True)
    total_amount = Column(Numeric(precision=24, scale=10), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    fees = Column(Numeric(precision=18, scale=4), default=Decimal("0"))
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=_naive_local_now)


class HoldingORM(Base):
    """SQLAlchemy model for persisted holdings (derived from the ledger)."""

    __tablename__ = "portfolio_holdings"

    user_id = Column(String(64), primary_key=True)
    asset_type = Column(SqlEnum(AssetType), primary_key=True)
    key_kind = Column(SqlEnum(AssetKeyKind), primary_key=True)
    key_value = Column(String(255), primary_key=True)
    asset_name = Column(String(255), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    total_quantity = Column(Numeric(precision=24, scale=10), nullable=False)
    average_cost = Column(Numeric(precision=24, scale=10), nullable=False)
    total_cost = Column(Numeric(precision=24, scale=10), nullable=False)
    current_price = Column(Numeric(precision=24, scale=10), nullable=True)
    current_value = Column(Numeric(precision=24, scale=10), nullable=True)
    unrealized_gain_loss = Column(Numeric(precision=24, scale=10), nullable=True)
    gain_loss_percentage = Column(Numeric(precision=12, scale=2), nullable=True)
    percentage_of_portfolio = Column(Numeric(precision=12, scale=2), nullable=True)
    day_change = Column(Numeric(precision=24, scale=10), default=Decimal("0"))
    price_status = Column(SqlEnum(PriceStatus), nullable=True)
    last_updated = Column(DateTime, nullable=True)
