"""Catalog entities: shoutout types and creator listings"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ...core.errors import ValidationError
from ..value_objects.entity_ids import AccountId, ShoutoutId, ShoutoutTypeId
from ..value_objects.money import Money


MIN_PRICE = Decimal("1.00")
MAX_PRICE = Decimal("10000.00")
MIN_DELIVERY_HOURS = 1
MAX_DELIVERY_HOURS = 720


@dataclass
class ShoutoutType:
    id: ShoutoutTypeId
    name: str
    description: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Shoutout:
    id: ShoutoutId
    creator_id: AccountId
    shoutout_type_id: ShoutoutTypeId
    title: str
    description: str
    price: Money
    delivery_time: int  # hours
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        self._validate_terms(self.price, self.delivery_time)

    @classmethod
    def create(
        cls,
        creator_id: AccountId,
        shoutout_type_id: ShoutoutTypeId,
        title: str,
        description: str,
        price: Decimal,
        delivery_time: int,
    ) -> 'Shoutout':
        return cls(
            id=ShoutoutId.generate(),
            creator_id=creator_id,
            shoutout_type_id=shoutout_type_id,
            title=title,
            description=description,
            price=Money(price),
            delivery_time=delivery_time,
        )

    def update(
        self,
        shoutout_type_id: Optional[ShoutoutTypeId] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[Decimal] = None,
        delivery_time: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        new_price = Money(price) if price is not None else self.price
        new_delivery = delivery_time if delivery_time is not None else self.delivery_time
        self._validate_terms(new_price, new_delivery)

        if shoutout_type_id is not None:
            self.shoutout_type_id = shoutout_type_id
        if title is not None:
            self.title = title
        if description is not None:
            self.description = description
        if is_active is not None:
            self.is_active = is_active
        self.price = new_price
        self.delivery_time = new_delivery
        self.updated_at = datetime.utcnow()

    def deactivate(self) -> None:
        """Soft delete; existing orders keep pointing at the row"""
        self.is_active = False
        self.updated_at = datetime.utcnow()

    def ensure_orderable(self) -> None:
        if not self.is_active:
            raise ValidationError("Shoutout is no longer available")

    @staticmethod
    def _validate_terms(price: Money, delivery_time: int) -> None:
        if price.amount < MIN_PRICE or price.amount > MAX_PRICE:
            raise ValidationError(f"Price must be between ${MIN_PRICE} and ${MAX_PRICE}")
        if delivery_time < MIN_DELIVERY_HOURS or delivery_time > MAX_DELIVERY_HOURS:
            raise ValidationError(
                f"Delivery time must be between {MIN_DELIVERY_HOURS} and {MAX_DELIVERY_HOURS} hours"
            )
