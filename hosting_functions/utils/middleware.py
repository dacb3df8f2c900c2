from __future__ import annotations

import uuid
from typing import Awaitable, Callable

from fastapi import Request, Response

from hosting_functions.config import Settings
from hosting_functions.logging import request_id_var

from .http import cors_headers

REQUEST_ID_HEADER = "X-Request-ID"

CallNext = Callable[[Request], Awaitable[Response]]


def request_id_middleware() -> Callable[[Request, CallNext], Awaitable[Response]]:
    """Reuse the caller's X-Request-ID or mint one, and echo it back."""

    async def middleware(request: Request, call_next: CallNext) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    return middleware


def cors_middleware(settings: Settings, prefix: str) -> Callable[[Request, CallNext], Awaitable[Response]]:
    """Answer preflights under ``prefix`` with 204 and stamp CORS headers on every response there."""

    headers = cors_headers(settings)

    async def middleware(request: Request, call_next: CallNext) -> Response:
        if not request.url.path.startswith(prefix):
            return await call_next(request)
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=headers)
        response = await call_next(request)
        response.headers.update(headers)
        return response

    return middleware
