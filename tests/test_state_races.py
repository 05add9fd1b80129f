from __future__ import annotations

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient

from conftest import auth_header, load_account, load_order, make_account, make_order, make_shoutout, run_in_uow
from shoutmarket.application.dtos.order_dtos import OrderStatusUpdateDTO
from shoutmarket.application.use_cases.process_payment_callback import ConfirmPaymentUseCase
from shoutmarket.application.use_cases.update_order_status import UpdateOrderStatusUseCase
from shoutmarket.core.errors import StateConflictError
from shoutmarket.db.database import SessionLocal
from shoutmarket.domain.enums import AccountRole, OrderAction, OrderStatus, PaymentStatus
from shoutmarket.domain.value_objects.entity_ids import AccountId
from shoutmarket.domain.value_objects.money import Money
from shoutmarket.infrastructure.external_services.payment_service import PaymentVerification
from shoutmarket.infrastructure.repositories.order_repository_impl import OrderRepositoryImpl
from shoutmarket.infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl


def _execute(build, *args):
    """Run ``build(uow).execute(*args)`` against a fresh session"""
    async def runner():
        session = SessionLocal()
        try:
            return await build(UnitOfWorkImpl(session)).execute(*args)
        finally:
            session.close()
    return asyncio.run(runner())


def _activity_logger() -> Mock:
    activity_logger = Mock()
    activity_logger.payment_confirmed = AsyncMock()
    activity_logger.order_transition = AsyncMock()
    return activity_logger


def _balances(creator) -> tuple:
    profile = load_account(creator.id).creator_profile
    return profile.available_balance.amount, profile.total_earnings.amount


def test_duplicate_confirmation_that_loses_the_race_credits_nothing(client: TestClient) -> None:
    user = make_account(AccountRole.USER)
    creator = make_account(AccountRole.CREATOR)
    order = make_order(user, creator, make_shoutout(creator))
    # Read before the first confirmation lands, as a concurrent callback would
    stale = load_order(order.id)

    first = client.get(
        "/payment/success",
        params={"payment_id": "pay_123", "order_id": order.order_number},
        follow_redirects=False,
    )
    assert first.status_code == 302
    assert _balances(creator) == (Decimal("85.00"), Decimal("85.00"))

    payment_service = Mock()
    payment_service.verify_payment = AsyncMock(return_value=PaymentVerification(success=True, status="finished"))
    activity_logger = _activity_logger()
    with patch.object(OrderRepositoryImpl, "get_by_order_number", new=AsyncMock(return_value=stale)):
        outcome = _execute(
            lambda uow: ConfirmPaymentUseCase(uow, payment_service, activity_logger),
            "pay_123", order.order_number,
        )

    assert outcome.status == "already_processed"
    assert outcome.message == "Payment already processed"
    assert _balances(creator) == (Decimal("85.00"), Decimal("85.00"))
    assert load_order(order.id).state == (OrderStatus.PENDING, PaymentStatus.PAID)
    activity_logger.payment_confirmed.assert_not_awaited()


def test_creator_decision_on_a_stale_order_is_refused(client: TestClient) -> None:
    user = make_account(AccountRole.USER)
    creator = make_account(AccountRole.CREATOR)
    order = make_order(user, creator, make_shoutout(creator), paid=True)
    stale = load_order(order.id)

    accepted = client.put(
        f"/api/v1/creators/me/orders/{order.id}", json={"action": "accept"}, headers=auth_header(creator)
    )
    assert accepted.status_code == 200

    activity_logger = _activity_logger()
    with patch.object(OrderRepositoryImpl, "get_by_id", new=AsyncMock(return_value=stale)):
        with pytest.raises(StateConflictError) as excinfo:
            _execute(
                lambda uow: UpdateOrderStatusUseCase(uow, activity_logger),
                creator.id, order.id, OrderStatusUpdateDTO(action=OrderAction.REJECT, creator_message="Too late"),
            )

    assert excinfo.value.message == "Order cannot be rejected in current state"
    stored = load_order(order.id)
    assert stored.state == (OrderStatus.ACCEPTED, PaymentStatus.PAID)
    assert stored.creator_message is None
    activity_logger.order_transition.assert_not_awaited()


def test_debit_above_available_balance_is_refused() -> None:
    creator = make_account(AccountRole.CREATOR, balance=Decimal("50.00"))

    async def work(uow):
        return await uow.ledger.debit_available(creator.id, Money(Decimal("50.01")))

    assert run_in_uow(work) is False
    assert _balances(creator) == (Decimal("50.00"), Decimal("50.00"))


def test_debit_of_whole_balance_succeeds() -> None:
    creator = make_account(AccountRole.CREATOR, balance=Decimal("50.00"))

    async def work(uow):
        return await uow.ledger.debit_available(creator.id, Money(Decimal("50.00")))

    assert run_in_uow(work) is True
    assert _balances(creator) == (Decimal("0.00"), Decimal("50.00"))


def test_debit_without_withdrawal_permission_is_refused() -> None:
    creator = make_account(AccountRole.CREATOR, balance=Decimal("50.00"), withdrawal_permission=False)

    async def work(uow):
        return await uow.ledger.debit_available(creator.id, Money(Decimal("10.00")))

    assert run_in_uow(work) is False
    assert _balances(creator) == (Decimal("50.00"), Decimal("50.00"))


def test_credit_for_unknown_creator_raises() -> None:
    async def work(uow):
        await uow.ledger.credit_earnings(AccountId.generate(), Money(Decimal("10.00")))

    with pytest.raises(LookupError):
        run_in_uow(work)
