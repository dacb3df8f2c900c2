from __future__ import annotations

import logging
import time
from typing import Any, Dict
from urllib.parse import quote

import httpx

from hosting_functions.config import Settings
from hosting_functions.domain.errors import GoPayApiError, GoPayAuthError
from hosting_functions.logging import mask_headers

logger = logging.getLogger(__name__)


class GoPayClient:
    """Thin async client for the GoPay REST API.

    - get_access_token(): OAuth2 client-credentials token (Basic auth)
    - create_payment(): POST /payments/payment
    - get_payment(): GET /payments/payment/{id}

    Every call opens its own HTTP client; nothing is cached between
    invocations.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.base_url = settings.gopay_api_url
        self.client_id = settings.gopay_client_id
        self.client_secret = settings.gopay_client_secret
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport)

    async def get_access_token(self) -> str:
        token_url = f"{self.base_url}/oauth2/token"
        auth = httpx.BasicAuth(self.client_id, self.client_secret)
        data = {"grant_type": "client_credentials", "scope": self.settings.gopay_scope}
        headers = {"Accept": "application/json"}
        async with self._client() as client:
            resp = await client.post(token_url, data=data, auth=auth, headers=headers)
        if resp.is_error:
            logger.error(
                "gopay token request failed",
                extra={"endpoint": token_url, "response_code": resp.status_code, "error": resp.text[:512]},
            )
            raise GoPayAuthError(f"Failed to get access token: {resp.reason_phrase}")
        payload = resp.json()
        try:
            return str(payload["access_token"])
        except (KeyError, TypeError) as exc:
            raise GoPayAuthError("Failed to get access token: missing access_token") from exc

    async def create_payment(self, payment: Dict[str, Any], access_token: str) -> Dict[str, Any]:
        url = f"{self.base_url}/payments/payment"
        return await self._send("POST", url, access_token, json_body=payment)

    async def get_payment(self, payment_id: str, access_token: str) -> Dict[str, Any]:
        url = f"{self.base_url}/payments/payment/{quote(payment_id, safe='')}"
        return await self._send("GET", url, access_token)

    async def _send(
        self,
        method: str,
        url: str,
        access_token: str,
        json_body: Dict[str, Any] | None = None,
    ) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        started = time.monotonic()
        async with self._client() as client:
            resp = await client.request(method, url, headers=headers, json=json_body)
        latency_ms = int((time.monotonic() - started) * 1000)
        try:
            data = resp.json()
        except ValueError:
            data = {"text": resp.text[:512]}
        if resp.is_error:
            logger.error(
                "gopay request failed",
                extra={
                    "endpoint": url,
                    "method": method,
                    "response_code": resp.status_code,
                    "latency_ms": latency_ms,
                    "request_headers": mask_headers(headers),
                    "response_body": data,
                },
            )
            raise GoPayApiError(resp.status_code, data)
        logger.info(
            "gopay request ok",
            extra={
                "endpoint": url,
                "method": method,
                "response_code": resp.status_code,
                "latency_ms": latency_ms,
                "payment_id": data.get("id") if isinstance(data, dict) else None,
                "state": data.get("state") if isinstance(data, dict) else None,
            },
        )
        return data
