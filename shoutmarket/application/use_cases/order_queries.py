"""Read-side order use cases for buyers and creators"""

import logging
from typing import Any, Dict, List, Optional

from ...core.errors import NotFoundError, UpstreamError
from ...domain.entities.order import Order
from ...domain.enums import OrderStatus
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import AccountId, OrderId
from ...infrastructure.external_services.storage_service import StorageService
from ..dtos.common import pagination
from ..dtos.order_dtos import OrderResponseDTO

logger = logging.getLogger(__name__)


async def present_orders(
    unit_of_work: IUnitOfWork,
    orders: List[Order],
    include_contact: bool = False
) -> List[OrderResponseDTO]:
    """Attach counterparties and listings with one batched lookup per table"""
    accounts = await unit_of_work.accounts.get_many(
        [o.user_id for o in orders] + [o.creator_id for o in orders]
    )
    shoutouts = await unit_of_work.shoutouts.get_many(o.shoutout_id for o in orders)
    types = await unit_of_work.shoutouts.get_types(s.shoutout_type_id for s in shoutouts.values())

    result = []
    for order in orders:
        shoutout = shoutouts.get(order.shoutout_id)
        result.append(OrderResponseDTO.from_entity(
            order,
            user=accounts.get(order.user_id),
            creator=accounts.get(order.creator_id),
            shoutout=shoutout,
            shoutout_type=types.get(shoutout.shoutout_type_id) if shoutout else None,
            include_contact=include_contact,
        ))
    return result


class ListUserOrdersUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: AccountId, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        async with self.unit_of_work:
            orders = await self.unit_of_work.orders.list_for_user(user_id, page, limit)
            dtos = await present_orders(self.unit_of_work, orders)
        return {
            "orders": [dto.dump() for dto in dtos],
            "pagination": pagination(page, limit, len(orders)),
        }


class ListCreatorOrdersUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(
        self,
        creator_id: AccountId,
        status: Optional[OrderStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> Dict[str, Any]:
        async with self.unit_of_work:
            orders = await self.unit_of_work.orders.list_for_creator(creator_id, status, page, limit)
            dtos = await present_orders(self.unit_of_work, orders)
        return {
            "orders": [dto.dump() for dto in dtos],
            "pagination": pagination(page, limit, len(orders)),
        }


class GetOrderUseCase:
    """Single order as seen by its buyer or its creator"""

    def __init__(self, unit_of_work: IUnitOfWork, storage_service: Optional[StorageService] = None):
        self.unit_of_work = unit_of_work
        self.storage_service = storage_service

    async def for_user(self, user_id: AccountId, order_id: OrderId) -> OrderResponseDTO:
        dto = await self._load(order_id, lambda order: order.user_id == user_id)
        if dto.delivery_file and self.storage_service is not None:
            dto.delivery_file_url = await self._signed_url(dto.delivery_file)
        return dto

    async def for_creator(self, creator_id: AccountId, order_id: OrderId) -> OrderResponseDTO:
        return await self._load(order_id, lambda order: order.creator_id == creator_id)

    async def _load(self, order_id: OrderId, visible) -> OrderResponseDTO:
        async with self.unit_of_work:
            order = await self.unit_of_work.orders.get_by_id(order_id)
            if not order or not visible(order):
                raise NotFoundError("Order not found")
            return (await present_orders(self.unit_of_work, [order]))[0]

    async def _signed_url(self, key: str) -> Optional[str]:
        try:
            return await self.storage_service.get_signed_download_url(key)
        except UpstreamError:
            logger.warning("Could not sign delivery file %s", key)
            return None
