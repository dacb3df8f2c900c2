from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PaymentCreateRequest(BaseModel):
    """Request body for creating a GoPay payment."""

    model_config = ConfigDict(populate_by_name=True)

    amount: int = Field(..., description="Amount in minor currency units")
    currency: str = Field(..., min_length=3, max_length=3)
    order_id: int | str = Field(..., alias="orderId")
    description: str
    return_url: str = Field(..., description="URL GoPay redirects the payer to")
    notify_url: str = Field(..., description="URL GoPay notifies on state change")
    payer: dict[str, Any] | None = Field(
        default=None,
        description="Payer fields merged over the card-only default",
    )


class WebhookRequest(BaseModel):
    """Notification body: only the gateway payment id is trusted."""

    id: int | str | None = None


class PaymentCheckRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payment_id: int | str | None = Field(default=None, alias="paymentId")


class OrderEmailRequest(BaseModel):
    """Order summary rendered into the confirmation email."""

    model_config = ConfigDict(populate_by_name=True)

    customer_email: str = Field(..., alias="customerEmail")
    customer_name: str = Field(..., alias="customerName")
    plan_name: str = Field(..., alias="planName")
    price: int | float | str
    order_id: int | str = Field(..., alias="orderId")


class WebhookResponse(BaseModel):
    success: bool = True
    status: str


class EmailSentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    email_id: str | None = Field(default=None, alias="emailId")


class ErrorResponse(BaseModel):
    error: str
