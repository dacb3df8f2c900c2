from __future__ import annotations

import logging

from pydantic import ValidationError

from hosting_functions.domain.errors import FunctionError
from hosting_functions.domain.results import ErrorKind, Failure

logger = logging.getLogger(__name__)


def describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def failure_from_exception(exc: Exception, *, endpoint: str) -> Failure:
    """Log ``exc`` and turn it into a tagged failure."""
    if isinstance(exc, FunctionError):
        logger.error("handler failed: %s", exc.kind.value, extra={"endpoint": endpoint, "error": str(exc)})
        return Failure(exc.kind, str(exc))
    logger.exception("handler crashed", extra={"endpoint": endpoint, "error": str(exc)})
    return Failure(ErrorKind.INTERNAL, str(exc) or "Unknown error")
