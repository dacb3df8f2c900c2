from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from hosting_functions.clients.resend import ResendClient
from hosting_functions.config import Settings
from hosting_functions.domain.dtos import EmailSentResponse, OrderEmailRequest
from hosting_functions.domain.errors import EmailDeliveryError
from hosting_functions.domain.results import HandlerResult, Success

from .base import failure_from_exception
from .email_templates import render_order_html, render_order_subject

logger = logging.getLogger(__name__)


class OrderEmailService:
    """Render and send the order confirmation email.

    Any failure, including an unparseable request body, is reported as an
    internal error.
    """

    endpoint = "send-order-email"

    def __init__(self, settings: Settings, resend: ResendClient):
        self.settings = settings
        self.resend = resend

    async def handle(self, payload: Any) -> HandlerResult:
        try:
            order = OrderEmailRequest.model_validate(payload)
            html = render_order_html(
                order,
                dashboard_url=self.settings.dashboard_url,
                support_email=self.settings.support_email,
                year=datetime.now(timezone.utc).year,
            )
            sent = await self.resend.send_email(
                sender=self.settings.email_from,
                to=[order.customer_email],
                subject=render_order_subject(order),
                html=html,
            )
            if not isinstance(sent, dict):
                raise EmailDeliveryError("Unexpected response from email provider")
            email_id = sent.get("id")
        except Exception as exc:  # noqa: BLE001
            return failure_from_exception(exc, endpoint=self.endpoint)
        logger.info(
            "order email sent",
            extra={"endpoint": self.endpoint, "order_id": str(order.order_id), "email_id": email_id},
        )
        return Success(EmailSentResponse(email_id=email_id).model_dump(by_alias=True))
