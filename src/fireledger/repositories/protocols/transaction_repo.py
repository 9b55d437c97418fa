"""Transaction repository protocol."""

from typing import Protocol, Optional

from fireledger.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        ...

    def get_by_id(self, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def list_by_user(self, user_id: str) -> list[Transaction]:
        """List all transactions of a user in replay order (date, insertion, id)."""
        ...

    def list_recent(self, user_id: str, limit: int) -> list[Transaction]:
        """List the newest `limit` transactions of a user, newest first."""
        ...

    def delete(self, txn_id: str) -> None:
        """Delete a transaction (hard delete)."""
        ...
