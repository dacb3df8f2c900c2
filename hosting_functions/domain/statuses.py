from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .enums import GatewayState, OrderStatus, PaymentStatus

_STATE_MAPPING: dict[str, tuple[PaymentStatus, OrderStatus]] = {
    GatewayState.PAID.value: (PaymentStatus.PAID, OrderStatus.ACTIVE),
    GatewayState.CANCELED.value: (PaymentStatus.FAILED, OrderStatus.CANCELLED),
    GatewayState.REFUNDED.value: (PaymentStatus.REFUNDED, OrderStatus.PENDING),
    GatewayState.TIMEOUTED.value: (PaymentStatus.FAILED, OrderStatus.CANCELLED),
}
_DEFAULT_MAPPING = (PaymentStatus.UNPAID, OrderStatus.PENDING)


def map_gateway_state(state: str | None) -> tuple[PaymentStatus, OrderStatus]:
    """Map a raw gateway state to the local (payment status, order status) pair.

    The mapping is total: unknown or missing states fall back to
    unpaid/pending. Matching is exact, as the gateway reports states in
    upper case.
    """
    return _STATE_MAPPING.get(state or "", _DEFAULT_MAPPING)


@dataclass(frozen=True)
class OrderPaymentUpdate:
    """Column values written to the order row for one observed gateway state."""

    gopay_status: str
    payment_status: PaymentStatus
    status: OrderStatus
    payment_date: datetime | None = None

    @classmethod
    def from_gateway_state(cls, state: str, now: datetime | None = None) -> "OrderPaymentUpdate":
        payment_status, order_status = map_gateway_state(state)
        paid_at = None
        if state == GatewayState.PAID.value:
            paid_at = now or datetime.now(timezone.utc)
        return cls(
            gopay_status=state,
            payment_status=payment_status,
            status=order_status,
            payment_date=paid_at,
        )

    def as_row(self) -> dict[str, Any]:
        return {
            "gopay_status": self.gopay_status,
            "payment_status": self.payment_status.value,
            "status": self.status.value,
            "payment_date": self.payment_date.isoformat() if self.payment_date else None,
        }
