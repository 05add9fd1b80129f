"""Order DTOs for API requests and responses"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field

from ...domain.entities.account import Account
from ...domain.entities.order import Order
from ...domain.entities.shoutout import Shoutout, ShoutoutType
from ...domain.enums import OrderAction
from .account_dtos import AccountSummaryDto
from .common import CamelModel


class OrderCreateDTO(CamelModel):
    """Request DTO for creating an order"""
    shoutout_id: UUID
    instructions: Optional[str] = Field(None, max_length=1000)


class OrderStatusUpdateDTO(CamelModel):
    """Creator decision on an order"""
    action: OrderAction
    creator_message: Optional[str] = Field(None, max_length=1000)
    delivery_file: Optional[str] = None


class OrderShoutoutDTO(CamelModel):
    id: UUID
    title: str
    delivery_time: int
    shoutout_type: Optional[str] = None


class OrderResponseDTO(CamelModel):
    """Response DTO for order data"""
    id: UUID
    order_number: str
    user_id: UUID
    creator_id: UUID
    shoutout_id: UUID
    instructions: Optional[str] = None
    price: Decimal
    commission_rate: Decimal
    commission_amount: Decimal
    creator_earnings: Decimal
    status: str
    payment_status: str
    payment_id: Optional[str] = None
    delivery_file: Optional[str] = None
    delivery_file_url: Optional[str] = None
    creator_message: Optional[str] = None
    user_response: Optional[str] = None
    accepted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    user: Optional[AccountSummaryDto] = None
    creator: Optional[AccountSummaryDto] = None
    shoutout: Optional[OrderShoutoutDTO] = None

    @classmethod
    def from_entity(
        cls,
        order: Order,
        user: Optional[Account] = None,
        creator: Optional[Account] = None,
        shoutout: Optional[Shoutout] = None,
        shoutout_type: Optional[ShoutoutType] = None,
        include_contact: bool = False,
    ) -> 'OrderResponseDTO':
        """Convert domain entity to DTO"""
        return cls(
            id=order.id.value,
            order_number=order.order_number,
            user_id=order.user_id.value,
            creator_id=order.creator_id.value,
            shoutout_id=order.shoutout_id.value,
            instructions=order.instructions,
            price=order.price.amount,
            commission_rate=order.commission_rate,
            commission_amount=order.commission_amount.amount,
            creator_earnings=order.creator_earnings.amount,
            status=order.status.value,
            payment_status=order.payment_status.value,
            payment_id=order.payment_id,
            delivery_file=order.delivery_file,
            creator_message=order.creator_message,
            user_response=order.user_response,
            accepted_at=order.accepted_at,
            completed_at=order.completed_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
            user=AccountSummaryDto.from_entity(user, include_contact) if user else None,
            creator=AccountSummaryDto.from_entity(creator, include_contact) if creator else None,
            shoutout=OrderShoutoutDTO(
                id=shoutout.id.value,
                title=shoutout.title,
                delivery_time=shoutout.delivery_time,
                shoutout_type=shoutout_type.name if shoutout_type else None,
            ) if shoutout else None,
        )


class PaymentSessionDTO(CamelModel):
    payment_id: str
    payment_url: Optional[str] = None
    payment_address: Optional[str] = None
    pay_amount: Optional[Decimal] = None
    pay_currency: Optional[str] = None
