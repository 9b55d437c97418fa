"""Live price endpoints backed by the quote cache."""

from fastapi import APIRouter, Depends, Query

from fireledger.api.deps import get_quote_cache
from fireledger.api.schemas import (
    PriceBatchRequest,
    PriceBatchResponse,
    PriceResponse,
    SinglePriceResponse,
)
from fireledger.core.exceptions import ValidationError
from fireledger.core.timezone import now_local
from fireledger.domain.views import QuoteResult
from fireledger.services import QuoteCache

router = APIRouter(prefix="/portfolio", tags=["prices"])


def to_price_response(result: QuoteResult) -> PriceResponse:
    """Flatten a QuoteResult into the wire shape."""
    if result.is_error or result.quote is None:
        return PriceResponse(symbol=result.symbol, error=True, message=result.message)

    quote = result.quote
    return PriceResponse(
        symbol=quote.symbol,
        price=quote.price,
        previous_close=quote.previous_close,
        change=quote.change,
        change_percent=quote.change_percent,
        currency=quote.currency,
        market_state=quote.market_state,
        display_name=quote.display_name,
        fetched_at=quote.fetched_at,
        stale=result.is_stale,
        message=result.message,
    )


@router.post("/prices", response_model=PriceBatchResponse)
async def get_prices(
    data: PriceBatchRequest,
    cache: QuoteCache = Depends(get_quote_cache),
) -> PriceBatchResponse:
    """Get prices for a batch of tickers; one entry per processed ticker."""
    results = await cache.get_quotes(data.tickers)
    return PriceBatchResponse(
        prices=[to_price_response(r) for r in results],
        timestamp=now_local(),
        truncated=len(data.tickers) > cache.max_batch_size,
    )


@router.get("/prices", response_model=SinglePriceResponse)
async def get_price(
    ticker: str = Query(..., description="Ticker to quote"),
    cache: QuoteCache = Depends(get_quote_cache),
) -> SinglePriceResponse:
    """Get the price of a single ticker."""
    if not ticker.strip():
        raise ValidationError("ticker is required")

    result = await cache.get_quote(ticker)
    return SinglePriceResponse(price=to_price_response(result), timestamp=now_local())
