from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ErrorKind(str, Enum):
    """Failure categories reported by the handlers."""

    BAD_REQUEST = "BAD_REQUEST"
    UPSTREAM_AUTH = "UPSTREAM_AUTH"
    UPSTREAM_PAYMENT = "UPSTREAM_PAYMENT"
    PERSISTENCE = "PERSISTENCE"
    EMAIL_DELIVERY = "EMAIL_DELIVERY"
    INTERNAL = "INTERNAL"

    @property
    def status_code(self) -> int:
        if self is ErrorKind.BAD_REQUEST:
            return 400
        return 500


@dataclass(frozen=True)
class Success:
    payload: Any


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return self.kind.status_code


HandlerResult = Union[Success, Failure]
