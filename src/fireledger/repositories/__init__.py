"""Repository layer - data access abstractions and implementations."""

from fireledger.repositories.protocols import (
    TransactionRepository,
    HoldingRepository,
)

__all__ = [
    "TransactionRepository",
    "HoldingRepository",
]
