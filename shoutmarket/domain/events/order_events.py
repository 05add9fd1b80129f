"""Order domain events"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..value_objects.money import Money
from ..value_objects.entity_ids import AccountId, OrderId


@dataclass(frozen=True)
class OrderPlaced:
    order_id: OrderId
    user_id: AccountId
    creator_id: AccountId
    price: Money


@dataclass(frozen=True)
class OrderPaid:
    order_id: OrderId
    creator_id: AccountId
    creator_earnings: Money
    payment_id: Optional[str]


@dataclass(frozen=True)
class OrderAccepted:
    order_id: OrderId
    creator_id: AccountId
    accepted_at: datetime


@dataclass(frozen=True)
class OrderRejected:
    order_id: OrderId
    creator_id: AccountId


@dataclass(frozen=True)
class OrderCompleted:
    order_id: OrderId
    creator_id: AccountId
    completed_at: datetime


@dataclass(frozen=True)
class OrderCancelled:
    order_id: OrderId
    reason: str
