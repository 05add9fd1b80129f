"""Order entity with business logic"""

import secrets
import string
import time
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from ...core.errors import StateConflictError
from ..value_objects.money import Money, to_decimal
from ..value_objects.entity_ids import AccountId, OrderId, ShoutoutId
from ..enums import OrderStatus, PaymentStatus
from ..events.order_events import (
    OrderPlaced, OrderPaid, OrderAccepted, OrderRejected, OrderCompleted, OrderCancelled
)


_BASE36 = string.digits + string.ascii_uppercase


def _to_base36(number: int) -> str:
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits)) or "0"


def generate_order_number() -> str:
    """Human-readable order reference, e.g. ``SO-M2X1K9QZ-7F3A``"""
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(_BASE36) for _ in range(4))
    return f"SO-{timestamp}-{suffix}"


@dataclass
class Order:
    id: OrderId
    order_number: str
    user_id: AccountId
    creator_id: AccountId
    shoutout_id: ShoutoutId
    price: Money
    # Commission terms are snapshotted at creation and never rewritten
    commission_rate: Decimal
    commission_amount: Money
    creator_earnings: Money
    instructions: Optional[str] = None
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING

    payment_id: Optional[str] = None
    delivery_file: Optional[str] = None
    creator_message: Optional[str] = None
    user_response: Optional[str] = None

    accepted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # Domain events
    _events: List = field(default_factory=list, init=False, repr=False)

    @classmethod
    def place(
        cls,
        user_id: AccountId,
        creator_id: AccountId,
        shoutout_id: ShoutoutId,
        price: Money,
        commission_rate: Decimal,
        instructions: Optional[str] = None,
    ) -> 'Order':
        """Factory: new order at (pending, pending) with the commission split fixed"""
        commission_amount, creator_earnings = price.split_commission(commission_rate)
        order = cls(
            id=OrderId.generate(),
            order_number=generate_order_number(),
            user_id=user_id,
            creator_id=creator_id,
            shoutout_id=shoutout_id,
            price=price,
            commission_rate=to_decimal(commission_rate),
            commission_amount=commission_amount,
            creator_earnings=creator_earnings,
            instructions=instructions or None,
        )
        order._events.append(OrderPlaced(
            order_id=order.id,
            user_id=user_id,
            creator_id=creator_id,
            price=price
        ))
        return order

    @property
    def state(self) -> Tuple[OrderStatus, PaymentStatus]:
        return self.status, self.payment_status

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    def attach_payment(self, payment_id: str) -> None:
        self.payment_id = payment_id
        self.updated_at = datetime.utcnow()

    def fail_payment(self) -> None:
        """Compensation when the provider refuses to open a payment"""
        self.status = OrderStatus.CANCELLED
        self.payment_status = PaymentStatus.FAILED
        self.updated_at = datetime.utcnow()

        self._events.append(OrderCancelled(order_id=self.id, reason="payment_creation_failed"))

    def confirm_payment(self) -> None:
        """Business logic: provider confirmed the payment"""
        if self.is_paid:
            raise StateConflictError("Payment already processed")

        self.status = OrderStatus.PENDING
        self.payment_status = PaymentStatus.PAID
        self.updated_at = datetime.utcnow()

        self._events.append(OrderPaid(
            order_id=self.id,
            creator_id=self.creator_id,
            creator_earnings=self.creator_earnings,
            payment_id=self.payment_id
        ))

    def accept(self, message: Optional[str] = None) -> None:
        """Business logic: creator takes on a paid order"""
        if self.state != (OrderStatus.PENDING, PaymentStatus.PAID):
            raise StateConflictError("Order cannot be accepted in current state")

        self.status = OrderStatus.ACCEPTED
        self.accepted_at = datetime.utcnow()
        if message:
            self.creator_message = message
        self.updated_at = self.accepted_at

        self._events.append(OrderAccepted(
            order_id=self.id,
            creator_id=self.creator_id,
            accepted_at=self.accepted_at
        ))

    def reject(self, message: Optional[str] = None) -> None:
        """Business logic: creator declines a pending order.

        Any payment status is allowed and an earlier credit stays in place.
        """
        if self.status != OrderStatus.PENDING:
            raise StateConflictError("Order cannot be rejected in current state")

        self.status = OrderStatus.REJECTED
        if message:
            self.creator_message = message
        self.updated_at = datetime.utcnow()

        self._events.append(OrderRejected(order_id=self.id, creator_id=self.creator_id))

    def complete(self, delivery_file: Optional[str] = None, message: Optional[str] = None) -> None:
        """Business logic: creator delivers an accepted order"""
        if self.status != OrderStatus.ACCEPTED:
            raise StateConflictError("Order cannot be completed in current state")

        self.status = OrderStatus.COMPLETED
        self.completed_at = datetime.utcnow()
        if message:
            self.creator_message = message
        if delivery_file:
            self.delivery_file = delivery_file
        self.updated_at = self.completed_at

        self._events.append(OrderCompleted(
            order_id=self.id,
            creator_id=self.creator_id,
            completed_at=self.completed_at
        ))

    def cancel(self) -> None:
        """Provider cancel callback; applies from any state"""
        self.status = OrderStatus.CANCELLED
        self.payment_status = PaymentStatus.CANCELLED
        self.updated_at = datetime.utcnow()

        self._events.append(OrderCancelled(order_id=self.id, reason="payment_cancelled"))

    def get_events(self) -> List:
        """Get and clear domain events"""
        events = self._events.copy()
        self._events.clear()
        return events
