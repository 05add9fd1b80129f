"""Payment provider return handlers"""

import logging
from dataclasses import dataclass
from typing import Optional

from ...core.errors import StateConflictError
from ...domain.entities.order import Order
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.payment_service import PaymentService
from ..services.activity_logger import ActivityLogger

logger = logging.getLogger(__name__)


@dataclass
class PaymentOutcome:
    """What the redirect should show. ``order`` is None for error views."""
    status: str  # confirmed | already_processed | error
    order: Optional[Order] = None
    message: Optional[str] = None

    @classmethod
    def error(cls, message: str) -> 'PaymentOutcome':
        return cls(status="error", message=message)


class ConfirmPaymentUseCase:
    """Move an order to (pending, paid) and credit the creator exactly once.

    The state change and the ledger credit commit together. The state change
    is a compare-and-swap against the state that was read, so a concurrent
    duplicate callback loses the race and is reported as already processed.
    """

    def __init__(self, unit_of_work: IUnitOfWork, payment_service: PaymentService, activity_logger: ActivityLogger):
        self.unit_of_work = unit_of_work
        self.payment_service = payment_service
        self.activity_logger = activity_logger

    async def execute(self, payment_id: Optional[str], order_number: Optional[str]) -> PaymentOutcome:
        if not payment_id or not order_number:
            return PaymentOutcome.error("Missing payment information")

        verification = await self.payment_service.verify_payment(payment_id)
        if not verification.success:
            return PaymentOutcome.error("Payment verification failed")

        async with self.unit_of_work:
            order = await self.unit_of_work.orders.get_by_order_number(order_number)
            if not order:
                return PaymentOutcome.error("Order not found")

            expected = order.state
            try:
                order.confirm_payment()
            except StateConflictError:
                return PaymentOutcome(status="already_processed", order=order, message="Payment already processed")

            if not await self.unit_of_work.orders.apply_transition(order, expected):
                await self.unit_of_work.rollback()
                logger.info("Duplicate payment confirmation for %s ignored", order.order_number)
                return PaymentOutcome(status="already_processed", order=order, message="Payment already processed")

            await self.unit_of_work.ledger.credit_earnings(order.creator_id, order.creator_earnings)
            await self.unit_of_work.commit()

        logger.info(
            "Payment %s confirmed for order %s (provider status %s)",
            payment_id, order.order_number, verification.status
        )
        for event in order.get_events():
            logger.info("Order event: %s", event)
        await self.activity_logger.payment_confirmed(
            order.user_id, order.id, order.order_number, order.creator_earnings
        )
        return PaymentOutcome(status="confirmed", order=order)


class CancelPaymentUseCase:
    """Provider cancel return: the order ends at (cancelled, cancelled) from any state"""

    def __init__(self, unit_of_work: IUnitOfWork, activity_logger: ActivityLogger):
        self.unit_of_work = unit_of_work
        self.activity_logger = activity_logger

    async def execute(self, order_number: Optional[str]) -> Optional[Order]:
        if not order_number:
            return None

        async with self.unit_of_work:
            order = await self.unit_of_work.orders.get_by_order_number(order_number)
            if not order:
                return None
            order.cancel()
            await self.unit_of_work.orders.update(order)
            await self.unit_of_work.commit()

        logger.info("Order %s cancelled by payment provider return", order.order_number)
        await self.activity_logger.order_cancelled(order.user_id, order.id, order.order_number)
        return order
