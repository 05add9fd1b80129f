from __future__ import annotations

from decimal import Decimal
from unittest.mock import Mock, patch

import redis
from fastapi.testclient import TestClient

from conftest import auth_header, make_account, make_shoutout, run_in_uow
from shoutmarket.application.use_cases.catalog_use_cases import DEFAULT_SHOUTOUT_TYPES, seed_shoutout_types
from shoutmarket.domain.enums import AccountRole


def test_seed_shoutout_types_is_idempotent(client: TestClient) -> None:
    assert run_in_uow(seed_shoutout_types) == len(DEFAULT_SHOUTOUT_TYPES)
    assert run_in_uow(seed_shoutout_types) == 0

    types = client.get("/api/v1/shoutout-types").json()["shoutoutTypes"]
    assert sorted(t["name"] for t in types) == sorted(name for name, _ in DEFAULT_SHOUTOUT_TYPES)


def test_search_groups_listings_by_creator(client: TestClient) -> None:
    cheap = make_account(AccountRole.CREATOR, display_name="cheap_singer")
    pricey = make_account(AccountRole.CREATOR, display_name="pricey_singer")
    make_shoutout(cheap, price=Decimal("10.00"))
    make_shoutout(cheap, price=Decimal("20.00"))
    make_shoutout(pricey, price=Decimal("300.00"))
    make_shoutout(pricey, price=Decimal("5.00"), is_active=False)

    response = client.get("/api/v1/creators", params={"sortBy": "price_asc"})

    assert response.status_code == 200
    body = response.json()
    assert [c["displayName"] for c in body["creators"]] == ["cheap_singer", "pricey_singer"]
    assert [s["price"] for s in body["creators"][0]["shoutouts"]] == ["10.00", "20.00"]
    assert body["pagination"]["total"] == 3
    assert "commissionRate" not in body["creators"][0]


def test_search_filters(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR, display_name="filter_star")
    make_shoutout(creator, price=Decimal("50.00"))
    make_shoutout(make_account(AccountRole.CREATOR), price=Decimal("500.00"))

    by_price = client.get("/api/v1/creators", params={"maxPrice": 100}).json()
    assert [c["displayName"] for c in by_price["creators"]] == ["filter_star"]

    by_name = client.get("/api/v1/creators", params={"query": "filter"}).json()
    assert by_name["pagination"]["total"] == 1

    assert client.get("/api/v1/creators", params={"limit": 51}).status_code == 400


def test_public_profile_shows_active_listings_only(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR)
    active = make_shoutout(creator)
    make_shoutout(creator, is_active=False)

    response = client.get(f"/api/v1/creators/{creator.id}")

    assert response.status_code == 200
    assert [s["id"] for s in response.json()["shoutouts"]] == [str(active.id)]
    assert response.json()["shoutouts"][0]["shoutoutType"]["name"] == "Video Shoutout"


def test_public_profile_of_non_creator_is_404(client: TestClient) -> None:
    user = make_account(AccountRole.USER)

    response = client.get(f"/api/v1/creators/{user.id}")

    assert response.status_code == 404
    assert response.json() == {"error": "Creator not found"}


def test_creator_manages_own_listings(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR)
    seed = make_shoutout(creator)
    headers = auth_header(creator)

    created = client.post(
        "/api/v1/creators/me/shoutouts",
        json={
            "shoutoutTypeId": str(seed.shoutout_type_id),
            "title": "Pep talk",
            "description": "Motivation before a big day",
            "price": 35,
            "deliveryTime": 24,
        },
        headers=headers,
    )
    assert created.status_code == 201
    shoutout_id = created.json()["shoutout"]["id"]

    updated = client.put(
        f"/api/v1/creators/me/shoutouts/{shoutout_id}", json={"price": 40}, headers=headers
    )
    assert updated.json()["shoutout"]["price"] == "40.00"
    assert updated.json()["shoutout"]["title"] == "Pep talk"

    deleted = client.delete(f"/api/v1/creators/me/shoutouts/{shoutout_id}", headers=headers)
    assert deleted.status_code == 200

    # Deleting only deactivates, so the row stays visible to its owner
    fetched = client.get(f"/api/v1/creators/me/shoutouts/{shoutout_id}", headers=headers)
    assert fetched.json()["shoutout"]["isActive"] is False
    assert len(client.get("/api/v1/creators/me/shoutouts", headers=headers).json()["shoutouts"]) == 2


def test_listing_validation(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR)
    headers = auth_header(creator)
    payload = {
        "shoutoutTypeId": "00000000-0000-0000-0000-000000000000",
        "title": "Roast",
        "description": "A friendly roast",
        "price": 25,
        "deliveryTime": 48,
    }

    unknown_type = client.post("/api/v1/creators/me/shoutouts", json=payload, headers=headers)
    assert unknown_type.status_code == 400
    assert unknown_type.json() == {"error": "Invalid shoutout type"}

    too_cheap = client.post("/api/v1/creators/me/shoutouts", json={**payload, "price": 0}, headers=headers)
    assert too_cheap.status_code == 400


def test_other_creators_listing_reads_as_missing(client: TestClient) -> None:
    owner = make_account(AccountRole.CREATOR)
    other = make_account(AccountRole.CREATOR)
    shoutout = make_shoutout(owner)

    response = client.put(
        f"/api/v1/creators/me/shoutouts/{shoutout.id}", json={"price": 1}, headers=auth_header(other)
    )

    assert response.status_code == 404


def test_health_reports_redis_separately(client: TestClient) -> None:
    broken = Mock()
    broken.ping.side_effect = redis.ConnectionError("refused")
    with patch("shoutmarket.main.redis.from_url", return_value=broken):
        body = client.get("/health").json()

    assert body["status"] == "healthy"
    assert body["database"] == "healthy"
    assert body["redis"] == "unhealthy"
