"""Repository protocol definitions (interfaces)."""

from fireledger.repositories.protocols.transaction_repo import TransactionRepository
from fireledger.repositories.protocols.holding_repo import HoldingRepository

__all__ = [
    "TransactionRepository",
    "HoldingRepository",
]
