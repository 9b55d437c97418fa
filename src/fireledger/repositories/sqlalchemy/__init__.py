"""SQLAlchemy repository implementations."""

from fireledger.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from fireledger.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from fireledger.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyHoldingRepository",
]
