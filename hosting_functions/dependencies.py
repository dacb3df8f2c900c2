from __future__ import annotations

import httpx
from fastapi import Depends

from hosting_functions.clients.gopay import GoPayClient
from hosting_functions.clients.resend import ResendClient
from hosting_functions.config import Settings, get_settings
from hosting_functions.repositories.orders import OrderStore, get_order_store
from hosting_functions.services.email_service import OrderEmailService
from hosting_functions.services.payments_service import (
    PaymentCreationService,
    PaymentStatusService,
    PaymentWebhookService,
)


def get_http_transport() -> httpx.AsyncBaseTransport | None:
    """Outbound transport shared by the HTTP clients; None means the network."""
    return None


def get_gopay_client(
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_http_transport),
) -> GoPayClient:
    return GoPayClient(settings, transport=transport)


def get_resend_client(
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_http_transport),
) -> ResendClient:
    return ResendClient(settings, transport=transport)


def get_orders(
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_http_transport),
) -> OrderStore:
    return get_order_store(settings, transport=transport)


def get_payment_creation_service(
    settings: Settings = Depends(get_settings),
    gopay: GoPayClient = Depends(get_gopay_client),
) -> PaymentCreationService:
    return PaymentCreationService(settings, gopay)


def get_payment_status_service(gopay: GoPayClient = Depends(get_gopay_client)) -> PaymentStatusService:
    return PaymentStatusService(gopay)


def get_payment_webhook_service(
    gopay: GoPayClient = Depends(get_gopay_client),
    store: OrderStore = Depends(get_orders),
) -> PaymentWebhookService:
    return PaymentWebhookService(gopay, store)


def get_order_email_service(
    settings: Settings = Depends(get_settings),
    resend: ResendClient = Depends(get_resend_client),
) -> OrderEmailService:
    return OrderEmailService(settings, resend)
