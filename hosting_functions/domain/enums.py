from __future__ import annotations

from enum import Enum


class GatewayState(str, Enum):
    """Lifecycle states of a GoPay payment object."""

    CREATED = "CREATED"
    PAYMENT_METHOD_CHOSEN = "PAYMENT_METHOD_CHOSEN"
    AUTHORIZED = "AUTHORIZED"
    PAID = "PAID"
    CANCELED = "CANCELED"
    TIMEOUTED = "TIMEOUTED"
    REFUNDED = "REFUNDED"
    PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED"


class PaymentStatus(str, Enum):
    """Payment status stored on the order row."""

    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"
    UNPAID = "unpaid"


class OrderStatus(str, Enum):
    """Order status stored on the order row."""

    ACTIVE = "active"
    CANCELLED = "cancelled"
    PENDING = "pending"


class PaymentInstrument(str, Enum):
    PAYMENT_CARD = "PAYMENT_CARD"
