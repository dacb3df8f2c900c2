from __future__ import annotations

from datetime import datetime

import pytest

from conftest import GOPAY_PAYMENT_PATH, GOPAY_TOKEN_PATH

PAYMENT_ID = "3000006529"
PAYMENT_PATH = f"{GOPAY_PAYMENT_PATH}/{PAYMENT_ID}"


@pytest.mark.parametrize("body", [{}, {"id": None}, {"id": ""}, {"paymentId": PAYMENT_ID}, [], None])
def test_missing_id_is_bad_request(client, upstream, store, body) -> None:
    store.add(1, PAYMENT_ID, status="pending")

    response = client.post("/functions/v1/gopay-webhook", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Payment ID is required"}
    assert upstream.calls == []
    assert store.rows[1] == {"id": 1, "payment_id": PAYMENT_ID, "status": "pending"}


def test_unparseable_body_is_bad_request(client, upstream) -> None:
    response = client.post(
        "/functions/v1/gopay-webhook",
        content=b"id=123",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert response.status_code == 400
    assert upstream.calls == []


def test_paid_payment_activates_order(client, upstream, store, gopay_host, gopay_token_ok) -> None:
    upstream.add("GET", gopay_host, PAYMENT_PATH, body={"id": int(PAYMENT_ID), "state": "PAID"})
    store.add(7, PAYMENT_ID, status="pending", payment_status="unpaid")

    response = client.post("/functions/v1/gopay-webhook", json={"id": int(PAYMENT_ID)})

    assert response.status_code == 200
    assert response.json() == {"success": True, "status": "PAID"}
    assert upstream.paths() == [GOPAY_TOKEN_PATH, PAYMENT_PATH]
    row = store.rows[7]
    assert row["gopay_status"] == "PAID"
    assert row["payment_status"] == "paid"
    assert row["status"] == "active"
    assert datetime.fromisoformat(row["payment_date"]).tzinfo is not None


@pytest.mark.parametrize(
    "state, payment_status, order_status",
    [
        ("CANCELED", "failed", "cancelled"),
        ("TIMEOUTED", "failed", "cancelled"),
        ("REFUNDED", "refunded", "pending"),
        ("CREATED", "unpaid", "pending"),
    ],
)
def test_other_states_clear_payment_date(
    client, upstream, store, gopay_host, gopay_token_ok, state, payment_status, order_status
) -> None:
    upstream.add("GET", gopay_host, PAYMENT_PATH, body={"id": int(PAYMENT_ID), "state": state})
    store.add(7, PAYMENT_ID, payment_date="2025-01-01T00:00:00+00:00")

    response = client.post("/functions/v1/gopay-webhook", json={"id": PAYMENT_ID})

    assert response.status_code == 200
    assert response.json() == {"success": True, "status": state}
    assert store.rows[7]["payment_status"] == payment_status
    assert store.rows[7]["status"] == order_status
    assert store.rows[7]["payment_date"] is None


def test_repeated_delivery_reapplies_same_update(client, upstream, store, gopay_host, gopay_token_ok) -> None:
    upstream.add("GET", gopay_host, PAYMENT_PATH, body={"state": "CANCELED"})
    store.add(7, PAYMENT_ID)

    first = client.post("/functions/v1/gopay-webhook", json={"id": PAYMENT_ID})
    snapshot = dict(store.rows[7])
    second = client.post("/functions/v1/gopay-webhook", json={"id": PAYMENT_ID})

    assert first.json() == second.json() == {"success": True, "status": "CANCELED"}
    assert store.rows[7] == snapshot


def test_only_matching_order_is_updated(client, upstream, store, gopay_host, gopay_token_ok) -> None:
    upstream.add("GET", gopay_host, PAYMENT_PATH, body={"state": "PAID"})
    store.add(7, PAYMENT_ID, status="pending")
    store.add(8, "999", status="pending")

    client.post("/functions/v1/gopay-webhook", json={"id": PAYMENT_ID})

    assert store.rows[7]["status"] == "active"
    assert store.rows[8] == {"id": 8, "payment_id": "999", "status": "pending"}


def test_unknown_payment_still_succeeds(client, upstream, store, gopay_host, gopay_token_ok) -> None:
    upstream.add("GET", gopay_host, PAYMENT_PATH, body={"state": "PAID"})

    response = client.post("/functions/v1/gopay-webhook", json={"id": PAYMENT_ID})

    assert response.status_code == 200
    assert response.json() == {"success": True, "status": "PAID"}


def test_duplicate_payment_ids_are_refused(client, upstream, store, gopay_host, gopay_token_ok) -> None:
    upstream.add("GET", gopay_host, PAYMENT_PATH, body={"state": "PAID"})
    store.add(7, PAYMENT_ID, status="pending")
    store.add(8, PAYMENT_ID, status="pending")

    response = client.post("/functions/v1/gopay-webhook", json={"id": PAYMENT_ID})

    assert response.status_code == 500
    assert "2 orders match payment id" in response.json()["error"]
    assert store.rows[7]["status"] == "pending"
    assert store.rows[8]["status"] == "pending"


def test_gateway_lookup_failure(client, upstream, store, gopay_host, gopay_token_ok) -> None:
    upstream.add("GET", gopay_host, PAYMENT_PATH, status=404, body={"errors": [{"error_name": "PAYMENT_NOT_FOUND"}]})
    store.add(7, PAYMENT_ID, status="pending")

    response = client.post("/functions/v1/gopay-webhook", json={"id": PAYMENT_ID})

    assert response.status_code == 500
    assert "PAYMENT_NOT_FOUND" in response.json()["error"]
    assert store.rows[7] == {"id": 7, "payment_id": PAYMENT_ID, "status": "pending"}


def test_token_failure(client, upstream, store, gopay_host) -> None:
    upstream.add("POST", gopay_host, GOPAY_TOKEN_PATH, status=500)

    response = client.post("/functions/v1/gopay-webhook", json={"id": PAYMENT_ID})

    assert response.status_code == 500
    assert upstream.paths() == [GOPAY_TOKEN_PATH]


@pytest.mark.parametrize("payment_id", ["1/state", "../x", "3000006529/refund"])
def test_non_numeric_id_is_bad_request(client, upstream, store, payment_id) -> None:
    store.add(1, PAYMENT_ID, status="pending")

    response = client.post("/functions/v1/gopay-webhook", json={"id": payment_id})

    assert response.status_code == 400
    assert response.json() == {"error": "Payment ID must be numeric"}
    assert upstream.calls == []
    assert store.rows[1] == {"id": 1, "payment_id": PAYMENT_ID, "status": "pending"}
