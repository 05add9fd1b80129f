from __future__ import annotations

import asyncio
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, Mock, patch

from fastapi.testclient import TestClient

from conftest import auth_header, make_account, make_shoutout, run_in_uow
from shoutmarket.application.services.activity_logger import ActivityLogger, ClientInfo
from shoutmarket.application.use_cases.prune_activity_logs import prune_activity_logs
from shoutmarket.db.database import SessionLocal, session_scope
from shoutmarket.domain.entities.activity_log import ActivityLogEntry
from shoutmarket.domain.enums import AccountRole
from shoutmarket.infrastructure.orm.activity_log_model import ActivityLogModel
from shoutmarket.infrastructure.repositories.activity_log_repository_impl import ActivityLogRepositoryImpl


def _entries() -> list:
    with session_scope() as db:
        rows = db.query(ActivityLogModel).order_by(ActivityLogModel.created_at).all()
        return [(row.action, row.description, row.ip_address, row.details) for row in rows]


def _seed(ages_in_days: list) -> None:
    now = datetime.utcnow()

    async def work(uow):
        repository = ActivityLogRepositoryImpl(uow.session)
        for index, age in enumerate(ages_in_days):
            await repository.add(ActivityLogEntry(
                user_type=AccountRole.USER,
                user_id=None,
                action="LOGIN",
                description=f"entry {index}",
                created_at=now - timedelta(days=age, seconds=index),
            ))

    run_in_uow(work)


def test_logger_persists_entry() -> None:
    logger = ActivityLogger()

    asyncio.run(logger.log(
        AccountRole.USER, None, "LOGIN", "User logged in: a@example.com",
        ClientInfo(ip_address="192.0.2.1", user_agent="pytest"), metadata={"source": "test"},
    ))

    assert _entries() == [("LOGIN", "User logged in: a@example.com", "192.0.2.1", {"source": "test"})]


def test_logger_never_raises() -> None:
    broken_factory = Mock(side_effect=RuntimeError("database is down"))

    asyncio.run(ActivityLogger(broken_factory).log(AccountRole.ADMIN, None, "LOGIN", "Admin logged in"))

    broken_factory.assert_called_once()


def test_registration_and_order_are_logged(client: TestClient) -> None:
    creator = make_account(AccountRole.CREATOR)
    shoutout = make_shoutout(creator)
    response = client.post(
        "/api/v1/auth/register",
        json={
            "firstName": "Grace", "lastName": "Hopper", "displayName": "grace_h",
            "email": "grace@example.com", "password": "Compiler1", "dateOfBirth": "1980-01-01",
            "country": "US", "turnstileToken": "t",
        },
        headers={"x-forwarded-for": "198.51.100.4, 10.0.0.1", "user-agent": "browser"},
    )
    token = response.json()["token"]

    client.post(
        "/api/v1/orders",
        json={"shoutoutId": str(shoutout.id), "instructions": "Say hi"},
        headers={"Authorization": f"Bearer {token}"},
    )

    actions = [entry[0] for entry in _entries()]
    assert actions == ["REGISTRATION", "ORDER_CREATED"]
    registration = _entries()[0]
    assert registration[1] == "User registered with email: grace@example.com"
    assert registration[2] == "198.51.100.4"


def test_prune_drops_expired_entries() -> None:
    _seed([0, 1, 40, 90])

    removed = asyncio.run(prune_activity_logs(SessionLocal, retention_days=30, max_entries=100))

    assert removed == 2
    assert [entry[1] for entry in _entries()] == ["entry 1", "entry 0"]


def test_prune_caps_table_size() -> None:
    _seed([5, 4, 3, 2, 1])

    removed = asyncio.run(prune_activity_logs(SessionLocal, retention_days=30, max_entries=2))

    assert removed == 3
    assert [entry[1] for entry in _entries()] == ["entry 3", "entry 4"]


def test_admin_can_search_logs(client: TestClient) -> None:
    admin = make_account(AccountRole.ADMIN)
    _seed([0, 0, 10])

    response = client.get(
        "/api/v1/admin/activity-logs", params={"days": 7, "search": "entry"}, headers=auth_header(admin)
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body["logs"]) == 2
    assert body["pagination"]["hasNext"] is False


def test_prune_task_runs_sweep() -> None:
    from shoutmarket.tasks import prune_activity_logs_task

    with patch("shoutmarket.tasks.prune_activity_logs", new=AsyncMock(return_value=4)) as sweep:
        result = prune_activity_logs_task.apply()

    assert result.get() == 4
    sweep.assert_awaited_once_with()
