"""API routers package."""

from fireledger.api.routers.prices import router as prices_router
from fireledger.api.routers.portfolio import router as portfolio_router
from fireledger.api.routers.transactions import router as transactions_router

__all__ = [
    "prices_router",
    "portfolio_router",
    "transactions_router",
]
