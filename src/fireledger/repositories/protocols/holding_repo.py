"""Holding repository protocol for the persisted valuation cache."""

from typing import Protocol

from fireledger.domain.models import Holding


class HoldingRepository(Protocol):
    """
    Interface for persisted holdings.

    Persisted holdings are a cache of the last reconciliation; the ledger
    stays the source of truth.
    """

    def list_by_user(self, user_id: str) -> list[Holding]:
        """Get all persisted holdings of a user."""
        ...

    def replace_for_user(self, user_id: str, holdings: list[Holding]) -> None:
        """Replace every persisted holding of a user (for rebuild)."""
        ...
