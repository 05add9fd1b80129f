from __future__ import annotations

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from shoutmarket.core.errors import UpstreamError
from shoutmarket.infrastructure.external_services.bot_verification_service import BotVerificationService
from shoutmarket.infrastructure.external_services.http_retry import send_with_retry
from shoutmarket.infrastructure.external_services.payment_service import PaymentService

PAYMENT_MODULE = "shoutmarket.infrastructure.external_services.payment_service"

CREATED = {
    "payment_id": 5077125051,
    "invoice_url": "https://nowpayments.io/payment/?iid=5077125051",
    "pay_address": "bc1qaddress",
    "pay_amount": 0.0017,
    "pay_currency": "btc",
}


def flaky_transport(error: type[httpx.TransportError], seen: list[str]) -> httpx.MockTransport:
    """Fails the first request with ``error``, then accepts everything"""

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.method)
        if len(seen) == 1:
            raise error("provider hiccup", request=request)
        return httpx.Response(201, json=CREATED)

    return httpx.MockTransport(handler)


def test_retries_transient_status_then_succeeds() -> None:
    send = AsyncMock(side_effect=[httpx.Response(503), httpx.Response(200, json={"ok": True})])

    response = asyncio.run(send_with_retry(send, max_retries=2, backoff_seconds=0))

    assert response.status_code == 200
    assert send.await_count == 2


def test_client_errors_are_not_retried() -> None:
    send = AsyncMock(return_value=httpx.Response(400))

    response = asyncio.run(send_with_retry(send, max_retries=3))

    assert response.status_code == 400
    assert send.await_count == 1


def test_last_transient_response_is_returned() -> None:
    send = AsyncMock(return_value=httpx.Response(502))

    response = asyncio.run(send_with_retry(send, max_retries=2))

    assert response.status_code == 502
    assert send.await_count == 3


def test_transport_error_is_raised_after_retries() -> None:
    send = AsyncMock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(httpx.ConnectError):
        asyncio.run(send_with_retry(send, max_retries=1))

    assert send.await_count == 2


def test_write_is_not_resent_after_read_timeout() -> None:
    send = AsyncMock(side_effect=[httpx.ReadTimeout("slow"), httpx.Response(201)])

    with pytest.raises(httpx.ReadTimeout):
        asyncio.run(send_with_retry(send, max_retries=3, idempotent=False))

    assert send.await_count == 1


def test_write_is_resent_when_connection_never_opened() -> None:
    send = AsyncMock(side_effect=[httpx.ConnectError("refused"), httpx.Response(201)])

    response = asyncio.run(send_with_retry(send, max_retries=3, idempotent=False))

    assert response.status_code == 201
    assert send.await_count == 2


def test_write_is_not_resent_on_server_error() -> None:
    send = AsyncMock(return_value=httpx.Response(502))

    response = asyncio.run(send_with_retry(send, max_retries=3, idempotent=False))

    assert response.status_code == 502
    assert send.await_count == 1


def test_create_payment_sends_a_single_post_when_reply_times_out() -> None:
    seen: list[str] = []
    service = PaymentService(transport=flaky_transport(httpx.ReadTimeout, seen))

    with pytest.raises(UpstreamError):
        asyncio.run(service.create_payment("ORD-1", Decimal("100.00"), "usd", "Shoutout: Birthday message"))

    assert seen == ["POST"]


def test_create_payment_recovers_from_refused_connection() -> None:
    seen: list[str] = []
    service = PaymentService(transport=flaky_transport(httpx.ConnectError, seen))

    session = asyncio.run(service.create_payment("ORD-1", Decimal("100.00"), "usd", "Shoutout: Birthday message"))

    assert session.payment_id == "5077125051"
    assert seen == ["POST", "POST"]


def test_create_payment_maps_provider_reply() -> None:
    reply = httpx.Response(201, json=CREATED)
    with patch(f"{PAYMENT_MODULE}.send_with_retry", new=AsyncMock(return_value=reply)):
        session = asyncio.run(
            PaymentService().create_payment("ORD-1", Decimal("100.00"), "usd", "Shoutout: Birthday message")
        )

    assert session.payment_id == "5077125051"
    assert session.pay_url == "https://nowpayments.io/payment/?iid=5077125051"
    assert session.pay_currency == "btc"


def test_create_payment_rejection_is_upstream_error() -> None:
    reply = httpx.Response(400, json={"message": "amountTo is too small"})
    with patch(f"{PAYMENT_MODULE}.send_with_retry", new=AsyncMock(return_value=reply)):
        with pytest.raises(UpstreamError) as excinfo:
            asyncio.run(PaymentService().create_payment("ORD-1", Decimal("1.00"), "usd", "tiny"))

    assert excinfo.value.message == "Failed to create payment"


def test_create_payment_transport_error_is_upstream_error() -> None:
    failing = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
    with patch(f"{PAYMENT_MODULE}.send_with_retry", new=failing):
        with pytest.raises(UpstreamError):
            asyncio.run(PaymentService().create_payment("ORD-1", Decimal("10.00"), "usd", "x"))


def test_verify_payment_never_raises() -> None:
    with patch(f"{PAYMENT_MODULE}.send_with_retry", new=AsyncMock(side_effect=httpx.ConnectError("down"))):
        result = asyncio.run(PaymentService().verify_payment("123"))
    assert result.success is False

    found = httpx.Response(200, json={"order_id": "ORD-1", "payment_status": "finished", "price_amount": 100})
    with patch(f"{PAYMENT_MODULE}.send_with_retry", new=AsyncMock(return_value=found)):
        result = asyncio.run(PaymentService().verify_payment("123"))
    assert result.success is True
    assert result.order_ref == "ORD-1"
    assert result.status == "finished"


def test_bot_verifier_reads_success_flag() -> None:
    module = "shoutmarket.infrastructure.external_services.bot_verification_service"
    verifier = BotVerificationService()

    assert asyncio.run(verifier.verify(None)) is False

    with patch(f"{module}.send_with_retry", new=AsyncMock(return_value=httpx.Response(200, json={"success": True}))):
        assert asyncio.run(verifier.verify("token", "198.51.100.2")) is True

    with patch(f"{module}.send_with_retry", new=AsyncMock(return_value=httpx.Response(200, json={"success": False}))):
        assert asyncio.run(verifier.verify("token")) is False

    with patch(f"{module}.send_with_retry", new=AsyncMock(return_value=httpx.Response(200, text="<html>"))):
        assert asyncio.run(verifier.verify("token")) is False
