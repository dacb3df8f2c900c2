from __future__ import annotations

import asyncio

import pytest

from conftest import GOPAY_PAYMENT_PATH, GOPAY_TOKEN_PATH
from hosting_functions.clients.gopay import GoPayClient
from hosting_functions.domain.errors import GoPayApiError


def test_check_returns_gateway_payment(client, upstream, store, gopay_host, gopay_token_ok) -> None:
    payment = {"id": 3000006529, "state": "PAID", "amount": 19900, "currency": "CZK"}
    upstream.add("GET", gopay_host, f"{GOPAY_PAYMENT_PATH}/3000006529", body=payment)
    store.add(7, "3000006529", status="pending")

    response = client.post("/functions/v1/check-gopay-payment", json={"paymentId": 3000006529})

    assert response.status_code == 200
    assert response.json() == payment
    assert store.rows[7]["status"] == "pending"


def test_check_requires_payment_id(client, upstream) -> None:
    response = client.post("/functions/v1/check-gopay-payment", json={"id": "3000006529"})

    assert response.status_code == 400
    assert response.json() == {"error": "Payment ID is required"}
    assert upstream.calls == []


def test_check_surfaces_gateway_error(client, upstream, gopay_host, gopay_token_ok) -> None:
    upstream.add("GET", gopay_host, f"{GOPAY_PAYMENT_PATH}/1", status=500, body={"errors": []})

    response = client.post("/functions/v1/check-gopay-payment", json={"paymentId": "1"})

    assert response.status_code == 500
    assert upstream.paths() == [GOPAY_TOKEN_PATH, f"{GOPAY_PAYMENT_PATH}/1"]


@pytest.mark.parametrize(
    "payment_id",
    ["../../eshops/eshop/8123456789/payment-instruments/CZK", "../x", "1/state", "12a", "-1"],
)
def test_check_rejects_non_numeric_payment_id(client, upstream, payment_id) -> None:
    response = client.post("/functions/v1/check-gopay-payment", json={"paymentId": payment_id})

    assert response.status_code == 400
    assert response.json() == {"error": "Payment ID must be numeric"}
    assert upstream.calls == []


def test_client_encodes_payment_id_as_one_segment(settings, upstream) -> None:
    gopay = GoPayClient(settings, transport=upstream.transport)

    with pytest.raises(GoPayApiError):
        asyncio.run(gopay.get_payment("1/state", "at-123"))

    assert upstream.calls[0].url.raw_path == f"{GOPAY_PAYMENT_PATH}/1%2Fstate".encode()
