from __future__ import annotations

import asyncio
from datetime import date
from unittest.mock import Mock

from fastapi.testclient import TestClient

from conftest import PASSWORD, auth_header, make_account
from shoutmarket.application.use_cases.auth_use_cases import bootstrap_admin
from shoutmarket.core.security import create_access_token
from shoutmarket.domain.enums import AccountRole


def _registration(**overrides) -> dict:
    payload = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "displayName": "ada_l",
        "email": "ada@example.com",
        "password": "Analytical1",
        "dateOfBirth": "1990-12-10",
        "country": "GB",
        "turnstileToken": "token",
    }
    payload.update(overrides)
    return payload


def test_register_user_returns_token(client: TestClient) -> None:
    response = client.post("/api/v1/auth/register", json=_registration())

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["user"]["email"] == "ada@example.com"
    assert body["user"]["role"] == "user"
    assert body["token"]

    me = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["user"]["displayName"] == "ada_l"


def test_register_creator_gets_default_commission(client: TestClient) -> None:
    response = client.post("/api/v1/creators/register", json=_registration())

    assert response.status_code == 201
    creator = response.json()["creator"]
    assert creator["commissionRate"] == "15.00"
    assert creator["availableBalance"] == "0.00"
    assert creator["withdrawalPermission"] is True


def test_same_email_may_register_once_per_role(client: TestClient) -> None:
    assert client.post("/api/v1/auth/register", json=_registration()).status_code == 201
    assert client.post("/api/v1/creators/register", json=_registration()).status_code == 201

    duplicate = client.post("/api/v1/auth/register", json=_registration(displayName="other_name"))
    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "Email already registered"}

    taken = client.post("/api/v1/auth/register", json=_registration(email="new@example.com"))
    assert taken.json() == {"error": "Display name already taken"}


def test_registration_requires_bot_check(client: TestClient, bot_verifier: Mock) -> None:
    bot_verifier.verify.return_value = False

    response = client.post(
        "/api/v1/auth/register", json=_registration(), headers={"cf-connecting-ip": "203.0.113.7"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Turnstile verification failed"}
    assert bot_verifier.verify.await_args.args == ("token", "203.0.113.7")


def test_registration_validation_errors(client: TestClient) -> None:
    too_young = _registration(dateOfBirth=f"{date.today().year - 5}-01-01")
    weak = _registration(password="password")

    for payload in (too_young, weak, _registration(displayName="has space")):
        response = client.post("/api/v1/auth/register", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"
        assert response.json()["details"]


def test_login(client: TestClient) -> None:
    user = make_account(AccountRole.USER, email="login@example.com")

    ok = client.post(
        "/api/v1/auth/login", json={"email": "login@example.com", "password": PASSWORD, "turnstileToken": "t"}
    )
    assert ok.status_code == 200
    assert ok.json()["user"]["id"] == str(user.id)

    bad = client.post(
        "/api/v1/auth/login", json={"email": "login@example.com", "password": "Wrong1234", "turnstileToken": "t"}
    )
    assert bad.status_code == 401
    assert bad.json() == {"error": "Invalid credentials"}

    # A buyer cannot log in through the creator endpoint
    wrong_role = client.post(
        "/api/v1/creators/login", json={"email": "login@example.com", "password": PASSWORD, "turnstileToken": "t"}
    )
    assert wrong_role.status_code == 401


def test_missing_or_invalid_token_is_401(client: TestClient) -> None:
    assert client.get("/api/v1/users/me").status_code == 401
    assert client.get("/api/v1/users/me", headers={"Authorization": "Bearer junk"}).status_code == 401
    assert client.get("/api/v1/users/me").json() == {"error": "Access token required"}


def test_token_for_deleted_account_is_401(client: TestClient) -> None:
    token = create_access_token("00000000-0000-0000-0000-000000000000", "user", "ghost@example.com")

    response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_wrong_role_is_403(client: TestClient) -> None:
    user = make_account(AccountRole.USER)
    creator = make_account(AccountRole.CREATOR)

    assert client.get("/api/v1/admin/dashboard", headers=auth_header(user)).status_code == 403
    assert client.get("/api/v1/creators/me", headers=auth_header(user)).status_code == 403
    assert client.get("/api/v1/orders", headers=auth_header(creator)).status_code == 403


def test_bootstrap_endpoint_runs_once(client: TestClient) -> None:
    payload = {"email": "root@example.com", "password": "Bootstrap1"}

    first = client.post("/api/v1/admin/bootstrap", json=payload)
    assert first.status_code == 201
    assert first.json()["admin"]["role"] == "admin"

    second = client.post("/api/v1/admin/bootstrap", json={"email": "other@example.com", "password": "Bootstrap1"})
    assert second.status_code == 400
    assert second.json() == {"error": "An admin account already exists"}

    login = client.post("/api/v1/admin/login", json=payload)
    assert login.status_code == 200
    assert login.json()["token"]


def test_admin_login_never_creates_accounts(client: TestClient) -> None:
    response = client.post("/api/v1/admin/login", json={"email": "nobody@example.com", "password": "Whatever1"})

    assert response.status_code == 401
    assert client.post(
        "/api/v1/admin/bootstrap", json={"email": "nobody@example.com", "password": "Whatever1"}
    ).status_code == 201


def test_bootstrap_function_is_idempotent() -> None:
    created = asyncio.run(bootstrap_admin("ops@example.com", "Operator1"))
    assert created is not None
    assert created.email == "ops@example.com"

    assert asyncio.run(bootstrap_admin("ops2@example.com", "Operator1")) is None
