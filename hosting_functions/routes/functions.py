from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from hosting_functions.dependencies import (
    get_order_email_service,
    get_payment_creation_service,
    get_payment_status_service,
    get_payment_webhook_service,
)
from hosting_functions.services.email_service import OrderEmailService
from hosting_functions.services.payments_service import (
    PaymentCreationService,
    PaymentStatusService,
    PaymentWebhookService,
)
from hosting_functions.utils.http import read_json, to_response

FUNCTIONS_PREFIX = "/functions/v1"

router = APIRouter(prefix=FUNCTIONS_PREFIX)


@router.post("/create-gopay-payment")
async def create_gopay_payment(
    request: Request,
    service: PaymentCreationService = Depends(get_payment_creation_service),
) -> JSONResponse:
    """Create a GoPay payment and return the gateway's payment object."""
    return to_response(await service.handle(await read_json(request)))


@router.post("/gopay-webhook")
async def gopay_webhook(
    request: Request,
    service: PaymentWebhookService = Depends(get_payment_webhook_service),
) -> JSONResponse:
    """Reconcile the order carrying the notified payment id."""
    return to_response(await service.handle(await read_json(request)))


@router.post("/check-gopay-payment")
async def check_gopay_payment(
    request: Request,
    service: PaymentStatusService = Depends(get_payment_status_service),
) -> JSONResponse:
    return to_response(await service.handle(await read_json(request)))


@router.post("/send-order-email")
async def send_order_email(
    request: Request,
    service: OrderEmailService = Depends(get_order_email_service),
) -> JSONResponse:
    """Send the order confirmation email."""
    return to_response(await service.handle(await read_json(request)))
