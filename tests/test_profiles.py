from __future__ import annotations

from unittest.mock import Mock

from fastapi.testclient import TestClient

from conftest import PASSWORD, auth_header, load_account, make_account
from shoutmarket.core.errors import UpstreamError
from shoutmarket.domain.enums import AccountRole


def test_update_profile(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR)

    response = client.put(
        "/api/v1/creators/me", json={"bio": "I sing", "country": "CA"}, headers=auth_header(creator)
    )

    assert response.status_code == 200
    assert response.json()["creator"]["bio"] == "I sing"
    assert load_account(creator.id).country == "CA"


def test_buyers_have_no_bio(client: TestClient) -> None:
    user = make_account(AccountRole.USER)

    response = client.put("/api/v1/users/me", json={"bio": "hello"}, headers=auth_header(user))

    assert response.status_code == 400
    assert response.json() == {"error": "Only creators have a bio"}


def test_display_name_must_stay_unique(client: TestClient) -> None:
    make_account(AccountRole.USER, display_name="taken_name")
    user = make_account(AccountRole.USER)

    response = client.put("/api/v1/users/me", json={"displayName": "taken_name"}, headers=auth_header(user))

    assert response.status_code == 400


def test_change_password(client: TestClient) -> None:
    user = make_account(AccountRole.USER, email="pw@example.com")

    wrong = client.put(
        "/api/v1/users/me/password",
        json={"currentPassword": "Nope12345", "newPassword": "Changed123"},
        headers=auth_header(user),
    )
    assert wrong.status_code == 400
    assert wrong.json() == {"error": "Current password is incorrect"}

    ok = client.put(
        "/api/v1/users/me/password",
        json={"currentPassword": PASSWORD, "newPassword": "Changed123"},
        headers=auth_header(user),
    )
    assert ok.status_code == 200

    login = client.post(
        "/api/v1/auth/login", json={"email": "pw@example.com", "password": "Changed123", "turnstileToken": "t"}
    )
    assert login.status_code == 200


def test_avatar_upload_flow(client: TestClient, storage_service: Mock) -> None:
    user = make_account(AccountRole.USER)

    ticket = client.post(
        "/api/v1/users/me/avatar/upload-url", json={"contentType": "image/png"}, headers=auth_header(user)
    ).json()
    assert ticket["uploadUrl"] == "https://storage.test/upload"
    assert ticket["fileKey"].startswith(f"avatars/{user.id}/")
    assert ticket["fileKey"].endswith(".png")

    first = client.put("/api/v1/users/me/avatar", json={"fileKey": ticket["fileKey"]}, headers=auth_header(user))
    assert first.status_code == 200
    assert load_account(user.id).avatar == ticket["fileKey"]

    # Replacing the avatar deletes the old object; a storage failure does not fail the request
    storage_service.delete_file.side_effect = UpstreamError("Failed to delete file")
    replacement = f"avatars/{user.id}/next.png"
    second = client.put("/api/v1/users/me/avatar", json={"fileKey": replacement}, headers=auth_header(user))
    assert second.status_code == 200
    storage_service.delete_file.assert_awaited_once_with(ticket["fileKey"])

    removed = client.delete("/api/v1/users/me/avatar", headers=auth_header(user))
    assert removed.status_code == 200
    assert load_account(user.id).avatar is None


def test_avatar_key_must_belong_to_caller(client: TestClient) -> None:
    user = make_account(AccountRole.USER)

    response = client.put(
        "/api/v1/users/me/avatar", json={"fileKey": "avatars/someone-else/a.png"}, headers=auth_header(user)
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid file key"}


def test_upload_url_rejects_unsupported_type(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR)

    response = client.post(
        "/api/v1/creators/me/upload-url",
        json={"contentType": "application/x-msdownload", "purpose": "delivery"},
        headers=auth_header(creator),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Unsupported file format"}
