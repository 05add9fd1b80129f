"""NOWPayments adapter: hosted crypto checkout and payment lookup"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

import httpx

from ...core.config import settings
from ...core.errors import UpstreamError
from .http_retry import send_with_retry

logger = logging.getLogger(__name__)


@dataclass
class PaymentSession:
    payment_id: str
    pay_url: Optional[str] = None
    pay_address: Optional[str] = None
    pay_amount: Optional[Any] = None
    pay_currency: Optional[str] = None


@dataclass
class PaymentVerification:
    success: bool
    order_ref: Optional[str] = None
    amount: Optional[Any] = None
    currency: Optional[str] = None
    status: Optional[str] = None
    error: Optional[str] = None


class PaymentService:
    """Talks to the NOWPayments REST API"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport
        self.api_key = settings.NOWPAYMENTS_API_KEY
        self.api_url = settings.NOWPAYMENTS_API_URL.rstrip("/")
        self.pay_currency = settings.NOWPAYMENTS_PAY_CURRENCY
        self.timeout = settings.PROVIDER_TIMEOUT_SECONDS

    def _headers(self) -> Dict[str, str]:
        return {"x-api-key": self.api_key, "Content-Type": "application/json"}

    async def create_payment(
        self,
        order_ref: str,
        amount: Decimal,
        currency: str,
        description: str
    ) -> PaymentSession:
        """Open a payment for an order. Raises UpstreamError on any failure."""
        if not self.api_key:
            raise UpstreamError("NOWPayments API key not configured")

        payload = {
            "price_amount": float(amount),
            "price_currency": currency,
            "pay_currency": self.pay_currency,
            "order_id": order_ref,
            "order_description": description,
            "success_url": f"{settings.BACKEND_URL}/payment/success",
            "cancel_url": f"{settings.BACKEND_URL}/payment/cancel",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await send_with_retry(
                    lambda: client.post(f"{self.api_url}/payment", json=payload, headers=self._headers()),
                    idempotent=False,
                )
        except httpx.HTTPError as e:
            logger.error("Payment creation for %s failed: %s", order_ref, e)
            raise UpstreamError("Failed to create payment") from e

        if response.status_code >= 400:
            logger.error(
                "Payment creation for %s rejected: %s %s", order_ref, response.status_code, response.text
            )
            raise UpstreamError("Failed to create payment")

        data = response.json()
        if not data.get("payment_id"):
            raise UpstreamError("Payment provider returned no payment id")

        logger.info("Created payment %s for order %s", data["payment_id"], order_ref)
        return PaymentSession(
            payment_id=str(data["payment_id"]),
            pay_url=data.get("pay_url") or data.get("invoice_url"),
            pay_address=data.get("pay_address"),
            pay_amount=data.get("pay_amount"),
            pay_currency=data.get("pay_currency"),
        )

    async def verify_payment(self, payment_id: str) -> PaymentVerification:
        """Look a payment up; never raises"""
        if not self.api_key:
            return PaymentVerification(success=False, error="NOWPayments API key not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await send_with_retry(
                    lambda: client.get(f"{self.api_url}/payment/{payment_id}", headers=self._headers())
                )
            if response.status_code >= 400:
                logger.warning("Payment %s lookup returned %s", payment_id, response.status_code)
                return PaymentVerification(success=False, error="Payment verification failed")
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Payment %s verification error: %s", payment_id, e)
            return PaymentVerification(success=False, error="Payment verification failed")

        return PaymentVerification(
            success=True,
            order_ref=data.get("order_id"),
            amount=data.get("price_amount"),
            currency=data.get("price_currency"),
            status=data.get("payment_status"),
        )
