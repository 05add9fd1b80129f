from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock, Mock, patch

from fastapi.testclient import TestClient

from conftest import auth_header, load_account, load_order, make_account, make_order, make_shoutout
from shoutmarket.core.errors import UpstreamError
from shoutmarket.domain.enums import AccountRole, OrderStatus, PaymentStatus


def _setup(rate: Decimal = Decimal("15.00"), price: Decimal = Decimal("100.00")):
    user = make_account(AccountRole.USER)
    creator = make_account(AccountRole.CREATOR, commission_rate=rate)
    shoutout = make_shoutout(creator, price=price)
    return user, creator, shoutout


def _confirm(client: TestClient, order_number: str):
    return client.get(
        "/payment/success",
        params={"payment_id": "pay_123", "order_id": order_number},
        follow_redirects=False,
    )


def test_create_order_snapshots_commission(client: TestClient, payment_service: Mock) -> None:
    user, creator, shoutout = _setup()

    response = client.post(
        "/api/v1/orders",
        json={"shoutoutId": str(shoutout.id), "instructions": "Say happy birthday to Sam"},
        headers=auth_header(user),
    )

    assert response.status_code == 201
    body = response.json()
    order = body["order"]
    assert order["commissionAmount"] == "15.00"
    assert order["creatorEarnings"] == "85.00"
    assert order["status"] == "pending"
    assert order["paymentStatus"] == "pending"
    assert order["paymentId"] == "pay_123"
    assert body["payment"]["paymentUrl"].startswith("https://nowpayments.io")

    kwargs = payment_service.create_payment.await_args.kwargs
    assert kwargs["order_ref"] == order["orderNumber"]
    assert kwargs["amount"] == Decimal("100.00")
    assert kwargs["currency"] == "USD"
    assert kwargs["description"] == f"Shoutout: Birthday message by {creator.display_name}"


def test_provider_failure_parks_order(client: TestClient, payment_service: Mock) -> None:
    user, _, shoutout = _setup()
    payment_service.create_payment.side_effect = UpstreamError("Failed to create payment")

    response = client.post("/api/v1/orders", json={"shoutoutId": str(shoutout.id)}, headers=auth_header(user))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create payment. Please try again."}

    orders = client.get("/api/v1/orders", headers=auth_header(user)).json()["orders"]
    assert len(orders) == 1
    assert orders[0]["status"] == "cancelled"
    assert orders[0]["paymentStatus"] == "failed"


def test_inactive_shoutout_cannot_be_ordered(client: TestClient) -> None:
    user = make_account(AccountRole.USER)
    creator = make_account(AccountRole.CREATOR)
    shoutout = make_shoutout(creator, is_active=False)

    response = client.post("/api/v1/orders", json={"shoutoutId": str(shoutout.id)}, headers=auth_header(user))

    assert response.status_code == 400
    assert response.json()["error"] == "Shoutout is no longer available"


def test_payment_success_credits_creator_once(client: TestClient) -> None:
    user, creator, shoutout = _setup()
    order = make_order(user, creator, shoutout)

    first = _confirm(client, order.order_number)
    assert first.status_code == 302
    assert first.headers["location"].endswith(f"/payment/success?order_id={order.id}")

    second = _confirm(client, order.order_number)
    assert second.status_code == 302
    assert f"/orders/{order.id}?message=Payment%20already%20processed" in second.headers["location"]

    profile = load_account(creator.id).creator_profile
    assert profile.available_balance.amount == Decimal("85.00")
    assert profile.total_earnings.amount == Decimal("85.00")
    assert load_order(order.id).state == (OrderStatus.PENDING, PaymentStatus.PAID)


def test_payment_success_redirects_to_error_view(client: TestClient, payment_service: Mock) -> None:
    missing = client.get("/payment/success", follow_redirects=False)
    assert "/payment/error?message=Missing%20payment%20information" in missing.headers["location"]

    unknown = _confirm(client, "SO-NOPE-0000")
    assert "/payment/error?message=Order%20not%20found" in unknown.headers["location"]

    user, creator, shoutout = _setup()
    order = make_order(user, creator, shoutout)
    payment_service.verify_payment.return_value.success = False
    failed = _confirm(client, order.order_number)
    assert "/payment/error?message=Payment%20verification%20failed" in failed.headers["location"]
    assert load_account(creator.id).creator_profile.available_balance.amount == Decimal("0.00")


def test_payment_cancel_is_unconditional(client: TestClient) -> None:
    user, creator, shoutout = _setup()
    order = make_order(user, creator, shoutout)

    response = client.get("/payment/cancel", params={"order_id": order.order_number}, follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"].endswith(f"/payment/cancelled?order_id={order.order_number}")
    assert load_order(order.id).state == (OrderStatus.CANCELLED, PaymentStatus.CANCELLED)


def test_payment_cancel_without_order_number(client: TestClient) -> None:
    response = client.get("/payment/cancel", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"].endswith("/payment/cancelled")


def test_payment_cancel_failure_redirects_to_error_view(client: TestClient) -> None:
    failing = AsyncMock(side_effect=RuntimeError("database unavailable"))
    with patch("shoutmarket.api.routes.payments.CancelPaymentUseCase.execute", new=failing):
        response = client.get("/payment/cancel", params={"order_id": "SO-ABC-1234"}, follow_redirects=False)

    assert response.status_code == 302
    assert "/payment/error?message=Payment%20cancellation%20failed" in response.headers["location"]


def test_accept_then_complete(client: TestClient) -> None:
    user, creator, shoutout = _setup()
    order = make_order(user, creator, shoutout, paid=True)
    url = f"/api/v1/creators/me/orders/{order.id}"

    accepted = client.put(url, json={"action": "accept", "creatorMessage": "On it"}, headers=auth_header(creator))
    assert accepted.status_code == 200
    assert accepted.json()["order"]["status"] == "accepted"
    assert accepted.json()["order"]["acceptedAt"] is not None

    delivery = f"deliveries/{creator.id}/clip.mp4"
    completed = client.put(
        url, json={"action": "complete", "deliveryFile": delivery}, headers=auth_header(creator)
    )
    assert completed.status_code == 200
    assert completed.json()["order"]["status"] == "completed"
    assert completed.json()["order"]["deliveryFile"] == delivery

    # Completion moves no money
    assert load_account(creator.id).creator_profile.available_balance.amount == Decimal("85.00")

    detail = client.get(f"/api/v1/orders/{order.id}", headers=auth_header(user)).json()["order"]
    assert detail["deliveryFileUrl"] == "https://storage.test/download"


def test_unpaid_order_cannot_be_accepted(client: TestClient) -> None:
    user, creator, shoutout = _setup()
    order = make_order(user, creator, shoutout)

    response = client.put(
        f"/api/v1/creators/me/orders/{order.id}", json={"action": "accept"}, headers=auth_header(creator)
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Order cannot be accepted in current state"


def test_pending_order_cannot_be_completed(client: TestClient) -> None:
    user, creator, shoutout = _setup()
    order = make_order(user, creator, shoutout, paid=True)

    response = client.put(
        f"/api/v1/creators/me/orders/{order.id}", json={"action": "complete"}, headers=auth_header(creator)
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Order cannot be completed in current state"


def test_reject_after_payment_keeps_credit(client: TestClient) -> None:
    user, creator, shoutout = _setup()
    order = make_order(user, creator, shoutout, paid=True)

    response = client.put(
        f"/api/v1/creators/me/orders/{order.id}",
        json={"action": "reject", "creatorMessage": "Not available"},
        headers=auth_header(creator),
    )

    assert response.status_code == 200
    assert response.json()["order"]["status"] == "rejected"
    profile = load_account(creator.id).creator_profile
    assert profile.available_balance.amount == Decimal("85.00")
    assert profile.total_earnings.amount == Decimal("85.00")


def test_delivery_key_must_belong_to_creator(client: TestClient) -> None:
    user, creator, shoutout = _setup()
    order = make_order(user, creator, shoutout, paid=True)
    client.put(f"/api/v1/creators/me/orders/{order.id}", json={"action": "accept"}, headers=auth_header(creator))

    response = client.put(
        f"/api/v1/creators/me/orders/{order.id}",
        json={"action": "complete", "deliveryFile": "deliveries/someone-else/clip.mp4"},
        headers=auth_header(creator),
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid file key"


def test_creator_cannot_touch_another_creators_order(client: TestClient) -> None:
    user, creator, shoutout = _setup()
    order = make_order(user, creator, shoutout, paid=True)
    other = make_account(AccountRole.CREATOR)

    response = client.put(
        f"/api/v1/creators/me/orders/{order.id}", json={"action": "accept"}, headers=auth_header(other)
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Order not found"}


def test_commission_change_does_not_rewrite_existing_orders(client: TestClient) -> None:
    user, creator, shoutout = _setup()
    order = make_order(user, creator, shoutout)
    admin = make_account(AccountRole.ADMIN)

    response = client.put(
        f"/api/v1/admin/creators/{creator.id}", json={"commissionRate": 30}, headers=auth_header(admin)
    )
    assert response.status_code == 200
    assert response.json()["creator"]["commissionRate"] == "30.00"

    stored = load_order(order.id)
    assert stored.commission_rate == Decimal("15.00")
    assert stored.creator_earnings.amount == Decimal("85.00")
