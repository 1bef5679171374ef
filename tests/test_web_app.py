"""Mini README: Tests for the FastAPI dashboard.

Exercises the HTML page, the JSON endpoints for the add/edit/delete flow,
confirmation handling, filter validation and CSV download.
"""

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from pocketledger.configuration import LedgerSettings
from pocketledger.finance import TransactionStore
from pocketledger.interface import create_application
from pocketledger.storage import InMemoryKeyValueStore, PersistenceAdapter


@pytest.fixture()
def store() -> TransactionStore:
    ledger = TransactionStore(PersistenceAdapter(InMemoryKeyValueStore()), today=lambda: date(2024, 1, 20))
    ledger.add({"description": "Salary", "amount": "1000", "type": "income", "date": "2024-01-05"})
    ledger.add({"description": "Rent", "amount": "400", "type": "expense", "date": "2024-01-10"})
    return ledger


@pytest.fixture()
def client(store: TransactionStore, tmp_path) -> TestClient:
    settings = LedgerSettings(data_directory=tmp_path)
    return TestClient(create_application(store=store, settings=settings))


def test_dashboard_page_renders_rows_and_totals(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert "Salary" in response.text
    assert "R$ 600,00" in response.text


def test_view_endpoint_applies_filters_to_totals(client: TestClient) -> None:
    payload = client.get("/api/view", params={"type": "expense"}).json()

    assert [row["description"] for row in payload["view"]["rows"]] == ["Rent"]
    assert payload["view"]["totals"]["balance"] == "-R$ 400,00"
    assert payload["view"]["chart"] == {"income": 0.0, "expense": 400.0, "has_data": True}


def test_view_endpoint_rejects_malformed_month(client: TestClient) -> None:
    assert client.get("/api/view", params={"month": "January"}).status_code == 400


def test_submit_adds_transaction_with_default_category(client: TestClient, store: TransactionStore) -> None:
    response = client.post("/api/transactions", data={"description": "Coffee", "amount": "4,50", "type": "expense"})

    assert response.status_code == 200
    body = response.json()
    assert body["transaction"]["amount"] == "4.50"
    assert body["transaction"]["category"] == "Other"
    assert body["mode"] == "adding"
    assert body["warning"] is None
    assert len(store) == 3


def test_submit_rejects_invalid_draft(client: TestClient, store: TransactionStore) -> None:
    response = client.post("/api/transactions", data={"description": "", "amount": "10", "type": "income"})
    assert response.status_code == 400
    assert len(store) == 2


def test_edit_flow_updates_in_place(client: TestClient, store: TransactionStore) -> None:
    begin = client.post("/api/transactions/1/edit")
    assert begin.status_code == 200
    assert begin.json()["values"]["description"] == "Salary"
    assert begin.json()["mode"] == "editing"

    saved = client.post("/api/transactions", data={"description": "Salary Jan", "amount": "1100", "type": "income"})
    assert saved.json()["mode"] == "adding"
    assert saved.json()["transaction"]["id"] == 1
    assert store.get(1).description == "Salary Jan"
    assert len(store) == 2


def test_cancel_edit_then_submit_adds(client: TestClient, store: TransactionStore) -> None:
    client.post("/api/transactions/2/edit")
    assert client.post("/api/edit/cancel").json() == {"mode": "adding"}

    client.post("/api/transactions", data={"description": "Bus", "amount": "5", "type": "expense"})
    assert store.get(2).description == "Rent"
    assert len(store) == 3


def test_edit_unknown_transaction_returns_404(client: TestClient) -> None:
    assert client.post("/api/transactions/9999/edit").status_code == 404


def test_delete_requires_confirmation(client: TestClient, store: TransactionStore) -> None:
    declined = client.post("/api/transactions/1/delete", data={"confirmed": "false"})
    assert declined.json()["deleted"] is False
    assert store.exists(1)

    confirmed = client.post("/api/transactions/1/delete", data={"confirmed": "true"})
    assert confirmed.json()["deleted"] is True
    assert not store.exists(1)

    assert client.post("/api/transactions/1/delete", data={"confirmed": "true"}).status_code == 404


def test_clear_requires_confirmation(client: TestClient, store: TransactionStore) -> None:
    assert client.post("/api/transactions/clear").json()["cleared"] is False
    assert len(store) == 2

    body = client.post("/api/transactions/clear", data={"confirmed": "true"}).json()
    assert body["cleared"] is True
    assert body["view"]["rows"] == []
    assert body["view"]["chart"]["has_data"] is False
    assert store.all() == ()


def test_csv_export_follows_filters(client: TestClient) -> None:
    response = client.get("/export.csv", params={"search": "rent"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.text.splitlines() == [
        "Description,Category,Amount,Type,Date",
        "Rent,Other,-400.00,expense,10/01/2024",
    ]
