"""
API tests for portfolio endpoints.

Tests cover:
- Sync returns priced holdings, allocations and totals
- Unavailable prices degrade per row
- Ledger deletion is reflected by the next sync
- Same-day trades replay in the order they were recorded
- Persisted holdings read-back with allocation
- Health endpoint exposes cache stats
"""

from decimal import Decimal

from fastapi.testclient import TestClient


def _post_buy(client: TestClient, **overrides) -> dict:
    payload = {
        "user_id": "user-1",
        "txn_type": "buy",
        "asset_type": "stock",
        "asset_name": "Apple Inc.",
        "ticker": "AAPL",
        "quantity": "10",
        "total_amount": "1000",
        "txn_date": "2024-01-15T10:30:00+01:00",
    }
    payload.update(overrides)
    response = client.post("/transactions", json=payload)
    assert response.status_code == 201
    return response.json()


class TestSyncAPI:
    """Tests for POST /portfolio/sync."""

    def test_sync_returns_valuation(self, client: TestClient):
        """
        GIVEN buys of 10 AAPL @ 100 and 5 AAPL @ 120
        WHEN I POST /portfolio/sync
        THEN one holding of 15 with cost 1600 is priced at 185.50
        """
        _post_buy(client)
        _post_buy(client, quantity="5", total_amount="600", txn_date="2024-02-01T10:00:00+01:00")

        response = client.post("/portfolio/sync", params={"user_id": "user-1"})

        assert response.status_code == 200
        data = response.json()
        assert len(data["holdings"]) == 1
        holding = data["holdings"][0]
        assert holding["ticker"] == "AAPL"
        assert Decimal(holding["total_quantity"]) == Decimal("15")
        assert Decimal(holding["total_cost"]) == Decimal("1600")
        assert Decimal(holding["average_cost"]).quantize(Decimal("0.01")) == Decimal("106.67")
        assert holding["price_status"] == "fresh"
        assert Decimal(data["total_value"]) == Decimal("2782.50")
        assert Decimal(data["day_change"]) == Decimal("18.75")
        assert data["allocations"][0]["asset_type"] == "stock"
        assert Decimal(data["allocations"][0]["percentage"]) == Decimal("100.00")
        assert data["warnings"] == []

    def test_sync_with_unknown_ticker_and_cash(self, client: TestClient):
        """
        GIVEN an AAPL buy, an unknown ticker and a cash position
        WHEN I sync
        THEN unknown and cash rows are unavailable at cost and totals include them
        """
        _post_buy(client)
        _post_buy(client, ticker="INVALIDXYZ", asset_name="Mystery", total_amount="200")
        _post_buy(client, ticker=None, asset_name="Conto Deposito", asset_type="cash",
                  quantity="500", total_amount="500")

        data = client.post("/portfolio/sync", params={"user_id": "user-1"}).json()

        assert data["unavailable_count"] == 2
        assert Decimal(data["total_value"]) == Decimal("1855.00") + Decimal("200") + Decimal("500")
        percentages = sum(Decimal(h["percentage_of_portfolio"]) for h in data["holdings"])
        assert abs(percentages - Decimal("100")) <= Decimal("0.05")

    def test_sync_reports_oversell_warning(self, client: TestClient):
        _post_buy(client, quantity="1", total_amount="100")
        _post_buy(client, txn_type="sell", quantity="3", total_amount="450",
                  txn_date="2024-02-01T10:00:00+01:00")

        data = client.post("/portfolio/sync", params={"user_id": "user-1"}).json()

        assert data["holdings"] == []
        assert data["warnings"][0]["kind"] == "oversell"
        assert data["warnings"][0]["asset"] == "ticker:AAPL"

    def test_deleted_transaction_changes_holdings(self, client: TestClient):
        """
        GIVEN a synced portfolio of two AAPL buys
        WHEN one buy is deleted and I sync again
        THEN the holding quantity drops accordingly
        """
        _post_buy(client)
        second = _post_buy(client, quantity="5", total_amount="600")
        client.post("/portfolio/sync", params={"user_id": "user-1"})

        client.delete(f"/transactions/{second['txn_id']}")
        data = client.post("/portfolio/sync", params={"user_id": "user-1"}).json()

        assert Decimal(data["holdings"][0]["total_quantity"]) == Decimal("10")

    def test_same_day_buy_then_sell_closes_position(self, client: TestClient):
        """
        GIVEN users who buy and then sell 10 AAPL on the same date
        WHEN each syncs
        THEN no holding remains and no warning is raised, whatever ids were assigned
        """
        for n in range(5):
            user_id = f"day-trader-{n}"
            _post_buy(client, user_id=user_id, txn_date="2024-01-15")
            _post_buy(client, user_id=user_id, txn_type="sell", total_amount="1500",
                      txn_date="2024-01-15")

            data = client.post("/portfolio/sync", params={"user_id": user_id}).json()

            assert data["holdings"] == []
            assert data["warnings"] == []

    def test_sync_requires_user_id(self, client: TestClient):
        response = client.post("/portfolio/sync")

        assert response.status_code == 422


class TestHoldingsAPI:
    """Tests for GET /portfolio/holdings."""

    def test_holdings_after_sync(self, client: TestClient):
        _post_buy(client)
        client.post("/portfolio/sync", params={"user_id": "user-1"})

        response = client.get("/portfolio/holdings", params={"user_id": "user-1"})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["holdings"][0]["key_kind"] == "ticker"
        assert data["holdings"][0]["key_value"] == "AAPL"

    def test_holdings_include_allocation_and_total(self, client: TestClient):
        """
        GIVEN a synced portfolio of 10 AAPL and 500 of cash
        WHEN I GET /portfolio/holdings
        THEN total value and the per-type allocation are returned, summing to 100
        """
        _post_buy(client)
        _post_buy(client, ticker=None, asset_name="Conto Deposito", asset_type="cash",
                  quantity="500", total_amount="500")
        client.post("/portfolio/sync", params={"user_id": "user-1"})

        data = client.get("/portfolio/holdings", params={"user_id": "user-1"}).json()

        assert Decimal(data["total_value"]) == Decimal("2355.00")
        assert [a["asset_type"] for a in data["allocations"]] == ["stock", "cash"]
        assert Decimal(data["allocations"][1]["value"]) == Decimal("500")
        assert sum(Decimal(a["percentage"]) for a in data["allocations"]) == Decimal("100.00")

    def test_holdings_empty_before_sync(self, client: TestClient):
        _post_buy(client)

        response = client.get("/portfolio/holdings", params={"user_id": "user-1"})

        data = response.json()
        assert data["count"] == 0
        assert data["allocations"] == []
        assert Decimal(data["total_value"]) == Decimal("0")


class TestHealthAPI:
    """Tests for service endpoints."""

    def test_health_includes_cache_stats(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "entries" in data["quote_cache"]

    def test_root(self, client: TestClient):
        assert client.get("/").json()["docs"] == "/docs"
