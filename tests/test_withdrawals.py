from __future__ import annotations

from decimal import Decimal

from fastapi.testclient import TestClient

from conftest import auth_header, load_account, make_account, run_in_uow
from shoutmarket.domain.enums import AccountRole

PAYOUT = {
    "type": "bank",
    "bankName": "First Bank",
    "accountNumber": "000123456789",
    "routingNumber": "110000000",
    "accountHolderName": "Test Creator",
}


def _request(client: TestClient, creator, amount) -> dict:
    return client.post(
        "/api/v1/creators/me/withdrawals",
        json={"amount": amount, "payoutMethod": PAYOUT},
        headers=auth_header(creator),
    )


def _available(creator) -> Decimal:
    return load_account(creator.id).creator_profile.available_balance.amount


def test_request_debits_available_balance(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR, balance=Decimal("100.00"))

    response = _request(client, creator, 40)

    assert response.status_code == 201
    withdrawal = response.json()["withdrawal"]
    assert withdrawal["status"] == "pending"
    assert withdrawal["amount"] == "40.00"
    assert withdrawal["payoutMethod"]["bankName"] == "First Bank"
    assert _available(creator) == Decimal("60.00")
    # Lifetime earnings are never debited
    assert load_account(creator.id).creator_profile.total_earnings.amount == Decimal("100.00")

    listed = client.get("/api/v1/creators/me/withdrawals", headers=auth_header(creator)).json()
    assert [w["id"] for w in listed["withdrawals"]] == [withdrawal["id"]]


def test_insufficient_balance_leaves_balance_untouched(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR, balance=Decimal("50.00"))

    response = _request(client, creator, 60)

    assert response.status_code == 400
    assert response.json() == {"error": "Insufficient balance"}
    assert _available(creator) == Decimal("50.00")

    async def count(uow):
        return len(await uow.withdrawals.list_for_creator(creator.id))
    assert run_in_uow(count) == 0


def test_withdrawal_permission_disabled(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR, balance=Decimal("500.00"), withdrawal_permission=False)

    response = _request(client, creator, 20)

    assert response.status_code == 403
    assert response.json() == {"error": "Withdrawal permission is disabled"}
    assert _available(creator) == Decimal("500.00")


def test_minimum_amount_is_validated(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR, balance=Decimal("500.00"))

    response = _request(client, creator, 5)

    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"
    assert _available(creator) == Decimal("500.00")


def test_only_bank_payouts_are_accepted(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR, balance=Decimal("500.00"))

    response = client.post(
        "/api/v1/creators/me/withdrawals",
        json={"amount": 20, "payoutMethod": {**PAYOUT, "type": "paypal"}},
        headers=auth_header(creator),
    )

    assert response.status_code == 400


def test_admin_approval_does_not_change_balance(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR, balance=Decimal("100.00"))
    admin = make_account(AccountRole.ADMIN)
    withdrawal_id = _request(client, creator, 25).json()["withdrawal"]["id"]
    assert _available(creator) == Decimal("75.00")

    response = client.put(
        f"/api/v1/admin/withdrawals/{withdrawal_id}",
        json={"action": "approve", "adminNotes": "Sent"},
        headers=auth_header(admin),
    )

    assert response.status_code == 200
    withdrawal = response.json()["withdrawal"]
    assert withdrawal["status"] == "completed"
    assert withdrawal["adminNotes"] == "Sent"
    assert withdrawal["processedAt"] is not None
    assert _available(creator) == Decimal("75.00")


def test_admin_rejection_refunds(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR, balance=Decimal("100.00"))
    admin = make_account(AccountRole.ADMIN)
    withdrawal_id = _request(client, creator, 25).json()["withdrawal"]["id"]

    response = client.put(
        f"/api/v1/admin/withdrawals/{withdrawal_id}", json={"action": "reject"}, headers=auth_header(admin)
    )

    assert response.status_code == 200
    assert response.json()["withdrawal"]["status"] == "rejected"
    assert _available(creator) == Decimal("100.00")


def test_second_decision_is_refused(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR, balance=Decimal("100.00"))
    admin = make_account(AccountRole.ADMIN)
    withdrawal_id = _request(client, creator, 25).json()["withdrawal"]["id"]
    url = f"/api/v1/admin/withdrawals/{withdrawal_id}"

    assert client.put(url, json={"action": "reject"}, headers=auth_header(admin)).status_code == 200
    again = client.put(url, json={"action": "reject"}, headers=auth_header(admin))

    assert again.status_code == 400
    assert again.json() == {"error": "Withdrawal is not in pending status"}
    # Refunded exactly once
    assert _available(creator) == Decimal("100.00")


def test_admin_lists_withdrawals_with_filters(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR, display_name="payout_star", balance=Decimal("100.00"))
    admin = make_account(AccountRole.ADMIN)
    _request(client, creator, 15)

    found = client.get(
        "/api/v1/admin/withdrawals", params={"search": "payout", "status": "pending"}, headers=auth_header(admin)
    ).json()
    assert len(found["withdrawals"]) == 1
    assert found["withdrawals"][0]["creator"]["displayName"] == "payout_star"

    none = client.get("/api/v1/admin/withdrawals", params={"status": "completed"}, headers=auth_header(admin)).json()
    assert none["withdrawals"] == []
