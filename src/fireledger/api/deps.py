"""Dependency injection for FastAPI."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from fireledger.repositories.sqlalchemy.database import get_db
from fireledger.repositories.sqlalchemy import (
    SqlAlchemyTransactionRepository,
    SqlAlchemyHoldingRepository,
)
from fireledger.services import (
    HoldingsReconciler,
    LedgerService,
    PortfolioService,
    QuoteCache,
)


def get_transaction_repo(db: Session = Depends(get_db)) -> SqlAlchemyTransactionRepository:
    """Provide TransactionRepository instance."""
    return SqlAlchemyTransactionRepository(db)


def get_holding_repo(db: Session = Depends(get_db)) -> SqlAlchemyHoldingRepository:
    """Provide HoldingRepository instance."""
    return SqlAlchemyHoldingRepository(db)


def get_quote_cache(request: Request) -> QuoteCache:
    """Provide the process-wide QuoteCache created in the app lifespan."""
    return request.app.state.quote_cache


def get_ledger_service(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(transaction_repo=transaction_repo)


def get_portfolio_service(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    quote_cache: QuoteCache = Depends(get_quote_cache),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(
        transaction_repo=transaction_repo,
        holding_repo=holding_repo,
        quote_cache=quote_cache,
        reconciler=HoldingsReconciler(),
    )
