"""Portfolio sync and holdings endpoints."""

from fastapi import APIRouter, Depends, Query

from fireledger.api.deps import get_portfolio_service
from fireledger.api.schemas import (
    AllocationItemResponse,
    HoldingListResponse,
    HoldingResponse,
    PortfolioSyncResponse,
    WarningResponse,
)
from fireledger.domain.models import Holding
from fireledger.domain.views import AllocationItem
from fireledger.services import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


def to_holding_response(holding: Holding) -> HoldingResponse:
    return HoldingResponse(
        key_kind=holding.asset_key.kind,
        key_value=holding.asset_key.value,
        ticker=holding.ticker,
        asset_type=holding.asset_type,
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
        last_updated=holding.last_updated,
    )


def to_allocation_responses(allocations: list[AllocationItem]) -> list[AllocationItemResponse]:
    return [
        AllocationItemResponse(asset_type=a.asset_type, value=a.value, percentage=a.percentage)
        for a in allocations
    ]


@router.post("/sync", response_model=PortfolioSyncResponse)
async def sync_portfolio(
    user_id: str = Query(..., description="User whose ledger is replayed"),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioSyncResponse:
    """Rebuild holdings from the ledger, price them and persist the result."""
    result = await service.sync(user_id)
    valuation = result.valuation
    reconciliation = result.reconciliation

    return PortfolioSyncResponse(
        user_id=user_id.strip(),
        holdings=[to_holding_response(h) for h in valuation.holdings],
        allocations=to_allocation_responses(valuation.allocations),
        total_value=valuation.total_value,
        total_cost=valuation.total_cost,
        total_gain_loss=valuation.total_gain_loss,
        total_gain_loss_percentage=valuation.total_gain_loss_percentage,
        day_change=valuation.total_day_change,
        day_change_percentage=valuation.day_change_percentage,
        total_dividends=reconciliation.total_dividends,
        total_interest=reconciliation.total_interest,
        total_fees=reconciliation.total_fees,
        stale_count=valuation.stale_count,
        unavailable_count=valuation.unavailable_count,
        warnings=[
            WarningResponse(
                kind=w.kind,
                asset=str(w.asset_key),
                txn_id=w.txn_id,
                message=w.message,
            )
            for w in reconciliation.warnings
        ],
        as_of=valuation.as_of,
    )


@router.get("/holdings", response_model=HoldingListResponse)
def get_holdings(
    user_id: str = Query(..., description="User whose holdings are returned"),
    service: PortfolioService = Depends(get_portfolio_service),
) -> HoldingListResponse:
    """Get the holdings persisted by the last sync (no repricing)."""
    snapshot = service.get_persisted_portfolio(user_id)
    return HoldingListResponse(
        user_id=user_id.strip(),
        holdings=[to_holding_response(h) for h in snapshot.holdings],
        allocations=to_allocation_responses(snapshot.allocations),
        total_value=snapshot.total_value,
        count=len(snapshot.holdings),
    )
