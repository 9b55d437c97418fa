"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fireledger.config.settings import get_settings
from fireledger.config.logging_config import setup_logging
from fireledger.repositories.sqlalchemy.database import init_db
from fireledger.api.routers import prices_router, portfolio_router, transactions_router
from fireledger.core.exceptions import AppError, NotFoundError
from fireledger.providers import create_provider
from fireledger.services import QuoteCache


def build_quote_cache() -> QuoteCache:
    """Create the process-wide quote cache from settings."""
    settings = get_settings()
    return QuoteCache(
        provider=create_provider(settings.market_data_provider),
        freshness_seconds=settings.quote_freshness_seconds,
        eviction_factor=settings.quote_eviction_factor,
        sweep_interval_seconds=settings.quote_sweep_interval_seconds,
        max_batch_size=settings.quote_max_batch_size,
        fetch_timeout_seconds=settings.quote_fetch_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    app.state.quote_cache = build_quote_cache()
    await app.state.quote_cache.start()
    yield
    # Shutdown
    await app.state.quote_cache.stop()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Portfolio valuation core: ledger replay, live prices and allocations",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(prices_router)
app.include_router(portfolio_router)
app.include_router(transactions_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=404 if isinstance(exc, NotFoundError) else 400,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check(request: Request) -> dict[str, Any]:
    """Health check endpoint."""
    cache = getattr(request.app.state, "quote_cache", None)
    return {
        "status": "healthy",
        "quote_cache": cache.stats() if cache is not None else None,
    }


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
