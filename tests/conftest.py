from __future__ import annotations

import asyncio
import os
from decimal import Decimal
from typing import Iterator, Optional
from unittest.mock import AsyncMock, Mock

# Settings are read at import time, so the environment goes first
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("MINIO_ACCESS_KEY", "minio")
os.environ.setdefault("MINIO_SECRET_KEY", "minio-secret")
os.environ.setdefault("MINIO_BUCKET_NAME", "shoutmarket-test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("PROVIDER_RETRY_BACKOFF_SECONDS", "0")
os.environ.setdefault("NOWPAYMENTS_API_KEY", "test-key")
os.environ.setdefault("TURNSTILE_SECRET_KEY", "turnstile-secret")

import pytest
from fastapi.testclient import TestClient

from shoutmarket.api.dependencies import get_bot_verifier, get_payment_service, get_storage_service
from shoutmarket.application.use_cases.auth_use_cases import issue_token
from shoutmarket.core.security import get_password_hash
from shoutmarket.db.database import SessionLocal, engine
from shoutmarket.db.models import Base
from shoutmarket.domain.entities.account import Account
from shoutmarket.domain.entities.order import Order
from shoutmarket.domain.entities.shoutout import Shoutout, ShoutoutType
from shoutmarket.domain.enums import AccountRole
from shoutmarket.domain.value_objects.entity_ids import AccountId, ShoutoutTypeId
from shoutmarket.domain.value_objects.money import Money
from shoutmarket.infrastructure import orm  # noqa: F401
from shoutmarket.infrastructure.external_services.payment_service import PaymentSession, PaymentVerification
from shoutmarket.infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
from shoutmarket.main import app

PASSWORD = "Secret123"


@pytest.fixture(autouse=True)
def database() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def run_in_uow(work):
    """Run ``work(uow)`` in a fresh committed unit of work and return its result"""
    async def runner():
        session = SessionLocal()
        try:
            uow = UnitOfWorkImpl(session)
            async with uow:
                result = await work(uow)
                await uow.commit()
            return result
        finally:
            session.close()
    return asyncio.run(runner())


def make_account(
    role: AccountRole = AccountRole.USER,
    email: Optional[str] = None,
    display_name: Optional[str] = None,
    commission_rate: Decimal = Decimal("15.00"),
    balance: Optional[Decimal] = None,
    withdrawal_permission: bool = True,
) -> Account:
    suffix = AccountId.generate().value.hex[:8]
    if role == AccountRole.ADMIN:
        account = Account.create_admin(email or f"admin-{suffix}@example.com", get_password_hash(PASSWORD))
    else:
        account = Account.register(
            role=role,
            email=email or f"{role.value}-{suffix}@example.com",
            hashed_password=get_password_hash(PASSWORD),
            first_name="Test",
            last_name=role.value.capitalize(),
            display_name=display_name or f"{role.value}_{suffix}",
            country="US",
            commission_rate=commission_rate,
        )
        if account.creator_profile is not None:
            account.creator_profile.withdrawal_permission = withdrawal_permission

    async def work(uow):
        await uow.accounts.add(account)
        if balance:
            await uow.ledger.credit_earnings(account.id, Money(balance))
        return account

    return run_in_uow(work)


def make_shoutout(creator: Account, price: Decimal = Decimal("100.00"), is_active: bool = True) -> Shoutout:
    async def work(uow):
        shoutout_type = await uow.shoutouts.get_type_by_name("Video Shoutout")
        if shoutout_type is None:
            shoutout_type = await uow.shoutouts.add_type(
                ShoutoutType(id=ShoutoutTypeId.generate(), name="Video Shoutout", description="Personal video")
            )
        shoutout = Shoutout.create(
            creator_id=creator.id,
            shoutout_type_id=shoutout_type.id,
            title="Birthday message",
            description="A short personal video",
            price=price,
            delivery_time=48,
        )
        shoutout.is_active = is_active
        return await uow.shoutouts.add(shoutout)

    return run_in_uow(work)


def make_order(user: Account, creator: Account, shoutout: Shoutout, paid: bool = False) -> Order:
    async def work(uow):
        order = Order.place(
            user_id=user.id,
            creator_id=creator.id,
            shoutout_id=shoutout.id,
            price=shoutout.price,
            commission_rate=creator.creator_profile.commission_rate,
        )
        if paid:
            order.confirm_payment()
        await uow.orders.add(order)
        if paid:
            await uow.ledger.credit_earnings(creator.id, order.creator_earnings)
        return order

    return run_in_uow(work)


def load_account(account_id: AccountId) -> Account:
    async def work(uow):
        return await uow.accounts.get_by_id(account_id)
    return run_in_uow(work)


def load_order(order_id) -> Order:
    async def work(uow):
        return await uow.orders.get_by_id(order_id)
    return run_in_uow(work)


def auth_header(account: Account) -> dict:
    return {"Authorization": f"Bearer {issue_token(account)}"}


@pytest.fixture
def payment_service() -> Mock:
    service = Mock()
    service.create_payment = AsyncMock(return_value=PaymentSession(
        payment_id="pay_123",
        pay_url="https://nowpayments.io/payment/?iid=pay_123",
        pay_address="bc1qtestaddress",
        pay_amount=0.0021,
        pay_currency="btc",
    ))
    service.verify_payment = AsyncMock(return_value=PaymentVerification(success=True, status="finished"))
    return service


@pytest.fixture
def storage_service() -> Mock:
    service = Mock()
    service.get_signed_upload_url = AsyncMock(return_value="https://storage.test/upload")
    service.get_signed_download_url = AsyncMock(return_value="https://storage.test/download")
    service.delete_file = AsyncMock(return_value=None)
    return service


@pytest.fixture
def bot_verifier() -> Mock:
    verifier = Mock()
    verifier.verify = AsyncMock(return_value=True)
    return verifier


@pytest.fixture
def client(payment_service: Mock, storage_service: Mock, bot_verifier: Mock) -> Iterator[TestClient]:
    app.dependency_overrides[get_payment_service] = lambda: payment_service
    app.dependency_overrides[get_storage_service] = lambda: storage_service
    app.dependency_overrides[get_bot_verifier] = lambda: bot_verifier
    yield TestClient(app)
    app.dependency_overrides.clear()
