from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from hosting_functions.config import Settings
from hosting_functions.domain.errors import EmailDeliveryError

logger = logging.getLogger(__name__)


class ResendClient:
    """Send transactional email through the Resend HTTP API."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.api_url = settings.resend_api_url.rstrip("/")
        self.api_key = settings.resend_api_key
        self.transport = transport

    async def send_email(self, *, sender: str, to: list[str], subject: str, html: str) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        body = {"from": sender, "to": to, "subject": subject, "html": html}
        async with httpx.AsyncClient(transport=self.transport) as client:
            resp = await client.post(f"{self.api_url}/emails", headers=headers, json=body)
        try:
            data = resp.json()
        except ValueError:
            data = {}
        if resp.is_error:
            message = data.get("message") if isinstance(data, dict) else None
            logger.error(
                "resend send failed",
                extra={"response_code": resp.status_code, "error": message},
            )
            raise EmailDeliveryError(message or "Failed to send email")
        return data
