"""SQLAlchemy implementation of HoldingRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from fireledger.core.timezone import to_local
from fireledger.domain.models import AssetKey, Holding
from fireledger.repositories.sqlalchemy.orm_models import HoldingORM


def _to_decimal(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed store for the derived holdings of each user."""

    def __init__(self, db: Session):
        self._db = db

    def list_by_user(self, user_id: str) -> list[Holding]:
        """Get all persisted holdings of a user, largest value first."""
        orm_holdings = (
            self._db.query(HoldingORM)
            .filter(HoldingORM.user_id == user_id)
            .order_by(HoldingORM.current_value.desc(), HoldingORM.key_value)
            .all()
        )
        return [self._to_domain(h) for h in orm_holdings]

    def replace_for_user(self, user_id: str, holdings: list[Holding]) -> None:
        """Delete the user's holdings and write the new set in one commit."""
        for existing in self._db.query(HoldingORM).filter(HoldingORM.user_id == user_id).all():
            self._db.delete(existing)
        # Deletes must hit the table before rows with the same keys are added
        self._db.flush()
        for holding in holdings:
            self._db.add(self._to_orm(user_id, holding))
        self._db.commit()

    @staticmethod
    def _to_orm(user_id: str, holding: Holding) -> HoldingORM:
        """Convert domain model to ORM model."""
        last_updated = holding.last_updated
        if last_updated is not None:
            last_updated = to_local(last_updated).replace(tzinfo=None)
        return HoldingORM(
            user_id=user_id,
            asset_type=holding.asset_type,
            key_kind=holding.asset_key.kind,
            key_value=holding.asset_key.value,
            asset_name=holding.asset_name,
            currency=holding.currency,
            total_quantity=holding.total_quantity,
            average_cost=holding.average_cost,
            total_cost=holding.total_cost,
            current_price=holding.current_price,
            current_value=holding.current_value,
            unrealized_gain_loss=holding.unrealized_gain_loss,
            gain_loss_percentage=holding.gain_loss_percentage,
            percentage_of_portfolio=holding.percentage_of_portfolio,
            day_change=holding.day_change,
            price_status=holding.price_status,
            last_updated=last_updated,
        )

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            asset_key=AssetKey(kind=orm.key_kind, value=orm.key_value),
            asset_type=orm.asset_type,
            asset_name=orm.asset_name,
            currency=orm.currency,
            total_quantity=_to_decimal(orm.total_quantity) or Decimal("0"),
            average_cost=_to_decimal(orm.average_cost) or Decimal("0"),
            total_cost=_to_decimal(orm.total_cost) or Decimal("0"),
            current_price=_to_decimal(orm.current_price),
            current_value=_to_decimal(orm.current_value),
            unrealized_gain_loss=_to_decimal(orm.unrealized_gain_loss),
            gain_loss_percentage=_to_decimal(orm.gain_loss_percentage),
            percentage_of_portfolio=_to_decimal(orm.percentage_of_portfolio),
            day_change=_to_decimal(orm.day_change) or Decimal("0"),
            price_status=orm.price_status,
            last_updated=to_local(orm.last_updated) if orm.last_updated else None,
        )
