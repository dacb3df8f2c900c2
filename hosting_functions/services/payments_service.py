from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import ValidationError

from hosting_functions.clients.gopay import GoPayClient
from hosting_functions.config import Settings
from hosting_functions.domain.dtos import (
    PaymentCheckRequest,
    PaymentCreateRequest,
    WebhookRequest,
    WebhookResponse,
)
from hosting_functions.domain.enums import PaymentInstrument
from hosting_functions.domain.results import ErrorKind, Failure, HandlerResult, Success
from hosting_functions.domain.statuses import OrderPaymentUpdate
from hosting_functions.repositories.orders import OrderStore

from .base import describe_validation_error, failure_from_exception

logger = logging.getLogger(__name__)

PAYMENT_ID_REQUIRED = "Payment ID is required"
PAYMENT_ID_INVALID = "Payment ID must be numeric"

_PAYMENT_ID_RE = re.compile(r"[0-9]{1,19}")


def _payment_id_from(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_payment_payload(request: PaymentCreateRequest, settings: Settings) -> dict[str, Any]:
    """Assemble the GoPay payment body; caller payer fields win over the card-only default."""
    payer: dict[str, Any] = {
        "default_payment_instrument": PaymentInstrument.PAYMENT_CARD.value,
        "allowed_payment_instruments": [PaymentInstrument.PAYMENT_CARD.value],
    }
    payer.update(request.payer or {})
    return {
        "payer": payer,
        "target": {"type": "ACCOUNT", "goid": int(settings.gopay_go_id)},
        "amount": request.amount,
        "currency": request.currency,
        "order_number": str(request.order_id),
        "order_description": request.description,
        "items": [
            {
                "name": request.description,
                "amount": request.amount,
                "count": 1,
            }
        ],
        "callback": {
            "return_url": request.return_url,
            "notification_url": request.notify_url,
        },
        "lang": settings.gopay_lang,
    }


class PaymentCreationService:
    """Create a GoPay payment for an order and hand back the gateway response."""

    endpoint = "create-gopay-payment"

    def __init__(self, settings: Settings, gopay: GoPayClient):
        self.settings = settings
        self.gopay = gopay

    async def handle(self, payload: Any) -> HandlerResult:
        try:
            request = PaymentCreateRequest.model_validate(payload)
        except ValidationError as exc:
            message = f"Invalid payment request: {describe_validation_error(exc)}"
            logger.info("payment request rejected", extra={"endpoint": self.endpoint, "error": message})
            return Failure(ErrorKind.BAD_REQUEST, message)
        try:
            access_token = await self.gopay.get_access_token()
            payment = build_payment_payload(request, self.settings)
            logger.info(
                "creating payment",
                extra={"endpoint": self.endpoint, "order_id": str(request.order_id)},
            )
            created = await self.gopay.create_payment(payment, access_token)
        except Exception as exc:  # noqa: BLE001
            return failure_from_exception(exc, endpoint=self.endpoint)
        logger.info(
            "payment created",
            extra={
                "endpoint": self.endpoint,
                "order_id": str(request.order_id),
                "payment_id": created.get("id"),
                "state": created.get("state"),
            },
        )
        return Success(created)


class PaymentStatusService:
    """Read-only lookup of a payment at the gateway."""

    endpoint = "check-gopay-payment"

    def __init__(self, gopay: GoPayClient):
        self.gopay = gopay

    async def handle(self, payload: Any) -> HandlerResult:
        try:
            request = PaymentCheckRequest.model_validate(payload or {})
        except ValidationError:
            request = PaymentCheckRequest()
        payment_id = _payment_id_from(request.payment_id)
        if payment_id is None:
            return Failure(ErrorKind.BAD_REQUEST, PAYMENT_ID_REQUIRED)
        if not _PAYMENT_ID_RE.fullmatch(payment_id):
            return Failure(ErrorKind.BAD_REQUEST, PAYMENT_ID_INVALID)
        try:
            access_token = await self.gopay.get_access_token()
            payment = await self.gopay.get_payment(payment_id, access_token)
        except Exception as exc:  # noqa: BLE001
            return failure_from_exception(exc, endpoint=self.endpoint)
        return Success(payment)


class PaymentWebhookService:
    """Reconcile an order row with the gateway's view of a payment.

    Only the payment id is taken from the notification body; the state is
    always re-read from the gateway, so repeated deliveries re-apply the
    same update.
    """

    endpoint = "gopay-webhook"

    def __init__(self, gopay: GoPayClient, store: OrderStore):
        self.gopay = gopay
        self.store = store

    async def handle(self, payload: Any) -> HandlerResult:
        try:
            request = WebhookRequest.model_validate(payload or {})
        except ValidationError:
            request = WebhookRequest()
        payment_id = _payment_id_from(request.id)
        if payment_id is None:
            logger.info("webhook without payment id", extra={"endpoint": self.endpoint})
            return Failure(ErrorKind.BAD_REQUEST, PAYMENT_ID_REQUIRED)
        if not _PAYMENT_ID_RE.fullmatch(payment_id):
            return Failure(ErrorKind.BAD_REQUEST, PAYMENT_ID_INVALID)

        logger.info("webhook received", extra={"endpoint": self.endpoint, "payment_id": payment_id})
        try:
            access_token = await self.gopay.get_access_token()
            payment = await self.gopay.get_payment(payment_id, access_token)
            state = str(payment.get("state") or "")
            update = OrderPaymentUpdate.from_gateway_state(state)
            rows = await self.store.apply_payment_update(payment_id, update)
        except Exception as exc:  # noqa: BLE001
            return failure_from_exception(exc, endpoint=self.endpoint)

        if rows == 0:
            logger.warning(
                "no order matches payment",
                extra={"endpoint": self.endpoint, "payment_id": payment_id, "state": state},
            )
        logger.info(
            "order updated",
            extra={
                "endpoint": self.endpoint,
                "payment_id": payment_id,
                "state": state,
                "payment_status": update.payment_status.value,
                "order_status": update.status.value,
                "rows": rows,
            },
        )
        return Success(WebhookResponse(status=state).model_dump())
