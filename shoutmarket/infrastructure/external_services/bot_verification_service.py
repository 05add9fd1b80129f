"""Cloudflare Turnstile verification"""

import logging
from typing import Optional

import httpx

from ...core.config import settings
from .http_retry import send_with_retry

logger = logging.getLogger(__name__)


class BotVerificationService:

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport
        self.secret_key = settings.TURNSTILE_SECRET_KEY
        self.verify_url = settings.TURNSTILE_VERIFY_URL
        self.timeout = settings.PROVIDER_TIMEOUT_SECONDS

    async def verify(self, token: Optional[str], client_ip: Optional[str] = None) -> bool:
        """True only when Turnstile confirms the token"""
        if not self.secret_key:
            logger.error("Turnstile secret key not configured")
            return False
        if not token:
            return False

        form = {"secret": self.secret_key, "response": token}
        if client_ip and client_ip != "unknown":
            form["remoteip"] = client_ip

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                # Tokens are single-use, so a resend after the request went out would only fail
                response = await send_with_retry(
                    lambda: client.post(self.verify_url, data=form), idempotent=False
                )
            return response.json().get("success") is True
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Turnstile verification error: %s", e)
            return False
