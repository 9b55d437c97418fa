"""Transaction ledger endpoints."""

from fastapi import APIRouter, Depends, Query, Response

from fireledger.api.deps import get_ledger_service
from fireledger.api.schemas import (
    TransactionCreateRequest,
    TransactionListResponse,
    TransactionResponse,
)
from fireledger.services import LedgerService, TransactionCreate

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    data: TransactionCreateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Record a new transaction. Sync the portfolio afterwards to see it in holdings."""
    created = ledger.add_transaction(TransactionCreate(**data.model_dump()))
    return TransactionResponse.model_validate(created)


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    user_id: str = Query(..., description="Owner of the transactions"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of transactions"),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    """List a user's most recent transactions, newest first."""
    transactions = ledger.list_transactions(user_id, limit=limit)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
    )


@router.get("/{txn_id}", response_model=TransactionResponse)
def get_transaction(
    txn_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Get a single transaction."""
    return TransactionResponse.model_validate(ledger.get_transaction(txn_id))


@router.delete("/{txn_id}", status_code=204)
def delete_transaction(
    txn_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> Response:
    """Delete a transaction. Holdings change on the next sync."""
    ledger.delete_transaction(txn_id)
    return Response(status_code=204)
