from __future__ import annotations

import json
from typing import Any

from .results import ErrorKind


class FunctionError(Exception):
    """Base class for failures raised by outbound clients and stores."""

    kind: ErrorKind = ErrorKind.INTERNAL


class GoPayAuthError(FunctionError):
    """The gateway token endpoint rejected the client credentials."""

    kind = ErrorKind.UPSTREAM_AUTH


class GoPayApiError(FunctionError):
    """The gateway rejected a payment create or lookup call."""

    kind = ErrorKind.UPSTREAM_PAYMENT

    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"GoPay API error: {json.dumps(body, ensure_ascii=False, default=str)}")


class OrderStoreError(FunctionError):
    kind = ErrorKind.PERSISTENCE


class OrderConflictError(OrderStoreError):
    """More than one order row carries the same payment id."""

    def __init__(self, payment_id: str, count: int) -> None:
        self.payment_id = payment_id
        self.count = count
        super().__init__(f"{count} orders match payment id {payment_id}; refusing to update")


class EmailDeliveryError(FunctionError):
    kind = ErrorKind.EMAIL_DELIVERY
