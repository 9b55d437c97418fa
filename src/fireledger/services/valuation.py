"""Valuation merge: attaches live prices to reconciled holdings."""

from collections import defaultdict
from dataclasses import replace
from datetime import datetime
from decimal import ROUND_DOWN, Decimal
from typing import Mapping, Optional, Sequence

from fireledger.core.timezone import now_local
from fireledger.domain.models import AssetType, Holding, PriceStatus
from fireledger.domain.views import AllocationItem, PortfolioValuation, QuoteResult

ZERO = Decimal("0")
HUNDRED = Decimal("100")
PERCENT_PLACES = Decimal("0.01")


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole x 100 rounded to cents; 0 when whole is not positive."""
    if whole <= ZERO:
        return ZERO
    return (part / whole * HUNDRED).quantize(PERCENT_PLACES)


def _shares(values: Sequence[Decimal], whole: Decimal) -> list[Decimal]:
    """
    Split 100% across `values` in cents, summing to exactly 100.00.

    Each share is truncated to cents and the leftover cents go to the
    largest remainders, so three equal slices give 33.34/33.33/33.33.
    """
    if whole <= ZERO:
        return [ZERO for _ in values]
    raw = [value / whole * HUNDRED for value in values]
    shares = [r.quantize(PERCENT_PLACES, rounding=ROUND_DOWN) for r in raw]
    leftover = int((HUNDRED - sum(shares, ZERO)) / PERCENT_PLACES)
    by_remainder = sorted(range(len(raw)), key=lambda i: raw[i] - shares[i], reverse=True)
    for i in by_remainder[:max(leftover, 0)]:
        shares[i] += PERCENT_PLACES
    return shares


def market_value(holding: Holding) -> Decimal:
    """Current value, or cost when the holding was never priced."""
    if holding.current_value is not None:
        return holding.current_value
    return holding.total_cost


def allocate(holdings: Sequence[Holding]) -> tuple[Decimal, list[AllocationItem]]:
    """Total value and per-asset-type allocation, largest slice first."""
    total_value = sum((market_value(h) for h in holdings), ZERO)

    by_type: dict[AssetType, Decimal] = defaultdict(lambda: ZERO)
    for holding in holdings:
        by_type[holding.asset_type] += market_value(holding)

    allocations = [
        AllocationItem(asset_type=asset_type, value=value, percentage=percentage)
        for (asset_type, value), percentage in zip(
            by_type.items(), _shares(list(by_type.values()), total_value)
        )
    ]
    allocations.sort(key=lambda item: (-item.value, item.asset_type.value))
    return total_value, allocations


def _price_holding(holding: Holding, result: Optional[QuoteResult]) -> Holding:
    if result is None or result.is_error or result.quote is None:
        # No usable price: assume no change so totals stay consistent
        return replace(
            holding,
            current_price=None,
            current_value=holding.total_cost,
            unrealized_gain_loss=ZERO,
            gain_loss_percentage=ZERO,
            day_change=ZERO,
            price_status=PriceStatus.UNAVAILABLE,
        )

    quote = result.quote
    current_value = holding.total_quantity * quote.price
    gain_loss = current_value - holding.total_cost
    day_change = quote.change * holding.total_quantity if result.is_fresh else ZERO
    return replace(
        holding,
        current_price=quote.price,
        current_value=current_value,
        unrealized_gain_loss=gain_loss,
        gain_loss_percentage=_percent(gain_loss, holding.total_cost),
        day_change=day_change,
        price_status=PriceStatus.FRESH if result.is_fresh else PriceStatus.STALE,
    )


def apply_prices(
    holdings: Sequence[Holding],
    quotes: Mapping[str, QuoteResult],
    as_of: Optional[datetime] = None,
) -> PortfolioValuation:
    """
    Price `holdings` with `quotes` (keyed by normalized ticker).

    Holdings without a usable quote (error results, missing tickers, cash and
    other unlisted assets) are valued at cost and flagged UNAVAILABLE. They
    still count toward portfolio totals so allocation percentages sum to 100.
    Day change only uses fresh quotes. Input holdings are not mutated.
    """
    priced = [
        _price_holding(h, quotes.get(h.ticker) if h.ticker else None)
        for h in holdings
    ]

    priced.sort(key=lambda h: -h.current_value)

    total_value, allocations = allocate(priced)
    total_cost = sum((h.total_cost for h in priced), ZERO)
    total_day_change = sum((h.day_change for h in priced), ZERO)

    shares = _shares([h.current_value for h in priced], total_value)
    for holding, share in zip(priced, shares):
        holding.percentage_of_portfolio = share

    total_gain_loss = total_value - total_cost
    previous_value = total_value - total_day_change
    return PortfolioValuation(
        holdings=priced,
        allocations=allocations,
        total_value=total_value,
        total_cost=total_cost,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percentage=_percent(total_gain_loss, total_cost),
        total_day_change=total_day_change,
        day_change_percentage=_percent(total_day_change, previous_value),
        stale_count=sum(1 for h in priced if h.price_status == PriceStatus.STALE),
        unavailable_count=sum(1 for h in priced if h.price_status == PriceStatus.UNAVAILABLE),
        as_of=as_of or now_local(),
    )
