"""Order repository implementation using SQLAlchemy ORM"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session, aliased

from ...domain.entities.order import Order
from ...domain.enums import OrderStatus, PaymentStatus
from ...domain.repositories.order_repository import IOrderRepository
from ...domain.value_objects.entity_ids import AccountId, OrderId, ShoutoutId
from ...domain.value_objects.money import Money
from ..orm.account_model import AccountModel
from ..orm.order_model import OrderModel

logger = logging.getLogger(__name__)

orders_table = OrderModel.__table__


class OrderRepositoryImpl(IOrderRepository):
    """Repository implementation for Order aggregate"""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, order_id: OrderId) -> Optional[Order]:
        model = self.session.get(OrderModel, order_id.value)
        return self._map_to_entity(model) if model else None

    async def get_by_order_number(self, order_number: str) -> Optional[Order]:
        model = self.session.query(OrderModel).filter(OrderModel.order_number == order_number).first()
        return self._map_to_entity(model) if model else None

    async def add(self, order: Order) -> Order:
        model = OrderModel(
            id=order.id.value,
            user_id=order.user_id.value,
            creator_id=order.creator_id.value,
            shoutout_id=order.shoutout_id.value,
            order_number=order.order_number,
            instructions=order.instructions,
            price=order.price.amount,
            commission_rate=order.commission_rate,
            commission_amount=order.commission_amount.amount,
            creator_earnings=order.creator_earnings.amount,
            created_at=order.created_at,
        )
        self._update_model_from_entity(model, order)
        self.session.add(model)
        self.session.flush()
        return order

    async def update(self, order: Order) -> Order:
        model = self.session.get(OrderModel, order.id.value)
        if model:
            self._update_model_from_entity(model, order)
            self.session.flush()
        return order

    async def apply_transition(self, order: Order, expected: Tuple[OrderStatus, PaymentStatus]) -> bool:
        expected_status, expected_payment_status = expected
        # Flush pending ORM writes so the guarded UPDATE sees current rows
        self.session.flush()
        result = self.session.execute(
            orders_table.update()
            .where(
                orders_table.c.id == order.id.value,
                orders_table.c.status == expected_status.value,
                orders_table.c.payment_status == expected_payment_status.value,
            )
            .values(**self._mutable_values(order))
        )
        self._expire(order.id)

        applied = result.rowcount == 1
        if applied:
            logger.info(
                "Order %s: (%s, %s) -> (%s, %s)",
                order.order_number, expected_status.value, expected_payment_status.value,
                order.status.value, order.payment_status.value
            )
        return applied

    async def list_for_user(self, user_id: AccountId, page: int = 1, limit: int = 20) -> List[Order]:
        models = (
            self.session.query(OrderModel)
            .filter(OrderModel.user_id == user_id.value)
            .order_by(desc(OrderModel.created_at))
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [self._map_to_entity(model) for model in models]

    async def list_for_creator(
        self,
        creator_id: AccountId,
        status: Optional[OrderStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> List[Order]:
        query = self.session.query(OrderModel).filter(OrderModel.creator_id == creator_id.value)
        if status is not None:
            query = query.filter(OrderModel.status == status.value)
        models = query.order_by(desc(OrderModel.created_at)).offset((page - 1) * limit).limit(limit).all()
        return [self._map_to_entity(model) for model in models]

    async def list_all(
        self,
        search: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> List[Order]:
        buyer = aliased(AccountModel)
        seller = aliased(AccountModel)
        query = (
            self.session.query(OrderModel)
            .join(buyer, OrderModel.user_id == buyer.id)
            .join(seller, OrderModel.creator_id == seller.id)
        )
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                OrderModel.order_number.ilike(pattern),
                buyer.display_name.ilike(pattern),
                seller.display_name.ilike(pattern)
            ))
        if status is not None:
            query = query.filter(OrderModel.status == status.value)
        models = query.order_by(desc(OrderModel.created_at)).offset((page - 1) * limit).limit(limit).all()
        return [self._map_to_entity(model) for model in models]

    def _mutable_values(self, order: Order) -> dict:
        # Commission terms and price are never part of an update
        return {
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "payment_id": order.payment_id,
            "delivery_file": order.delivery_file,
            "creator_message": order.creator_message,
            "user_response": order.user_response,
            "accepted_at": order.accepted_at,
            "completed_at": order.completed_at,
            "updated_at": order.updated_at,
        }

    def _update_model_from_entity(self, model: OrderModel, order: Order) -> None:
        for name, value in self._mutable_values(order).items():
            setattr(model, name, value)

    def _expire(self, order_id: OrderId) -> None:
        key = self.session.identity_key(OrderModel, order_id.value)
        cached = self.session.identity_map.get(key)
        if cached is not None:
            self.session.expire(cached)

    def _map_to_entity(self, model: OrderModel) -> Order:
        """Map ORM model to domain entity"""
        return Order(
            id=OrderId(model.id),
            order_number=model.order_number,
            user_id=AccountId(model.user_id),
            creator_id=AccountId(model.creator_id),
            shoutout_id=ShoutoutId(model.shoutout_id),
            price=Money(model.price),
            commission_rate=model.commission_rate,
            commission_amount=Money(model.commission_amount),
            creator_earnings=Money(model.creator_earnings),
            instructions=model.instructions,
            status=OrderStatus(model.status),
            payment_status=PaymentStatus(model.payment_status),
            payment_id=model.payment_id,
            delivery_file=model.delivery_file,
            creator_message=model.creator_message,
            user_response=model.user_response,
            accepted_at=model.accepted_at,
            completed_at=model.completed_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
