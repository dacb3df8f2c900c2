from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from hosting_functions.config import Settings
from hosting_functions.domain.dtos import ErrorResponse
from hosting_functions.domain.results import Failure, HandlerResult

logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = "POST, GET, OPTIONS"
CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"


def cors_headers(settings: Settings) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
    }


async def read_json(request: Request) -> Any:
    """Return the decoded JSON body, or None when the body is not valid JSON."""
    body = await request.body()
    try:
        return json.loads(body)
    except ValueError:
        logger.info("request body is not valid JSON", extra={"endpoint": request.url.path})
        return None


def to_response(result: HandlerResult) -> JSONResponse:
    if isinstance(result, Failure):
        return JSONResponse(
            status_code=result.status_code,
            content=ErrorResponse(error=result.message).model_dump(),
        )
    return JSONResponse(status_code=200, content=result.payload)
