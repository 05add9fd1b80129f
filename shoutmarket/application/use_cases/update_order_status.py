"""Creator-driven order transitions"""

import logging
from typing import Optional

from ...core.errors import NotFoundError, StateConflictError, ValidationError
from ...domain.enums import OrderAction
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import AccountId, OrderId
from ..dtos.order_dtos import OrderResponseDTO, OrderStatusUpdateDTO
from ..services.activity_logger import (
    ORDER_ACCEPTED, ORDER_COMPLETED, ORDER_REJECTED, ActivityLogger, ClientInfo
)

logger = logging.getLogger(__name__)

_PAST_TENSE = {
    OrderAction.ACCEPT: "accepted",
    OrderAction.REJECT: "rejected",
    OrderAction.COMPLETE: "completed",
}
_LOG_ACTIONS = {
    OrderAction.ACCEPT: ORDER_ACCEPTED,
    OrderAction.REJECT: ORDER_REJECTED,
    OrderAction.COMPLETE: ORDER_COMPLETED,
}


class UpdateOrderStatusUseCase:
    """Accept, reject or complete one of the creator's orders.

    None of these touch the ledger; earnings were credited at payment time.
    """

    def __init__(self, unit_of_work: IUnitOfWork, activity_logger: ActivityLogger):
        self.unit_of_work = unit_of_work
        self.activity_logger = activity_logger

    async def execute(
        self,
        creator_id: AccountId,
        order_id: OrderId,
        request: OrderStatusUpdateDTO,
        client: Optional[ClientInfo] = None
    ) -> OrderResponseDTO:
        if request.delivery_file and not request.delivery_file.startswith(f"deliveries/{creator_id}/"):
            raise ValidationError("Invalid file key")

        async with self.unit_of_work:
            order = await self.unit_of_work.orders.get_by_id(order_id)
            if not order or order.creator_id != creator_id:
                raise NotFoundError("Order not found")

            expected = order.state
            if request.action == OrderAction.ACCEPT:
                order.accept(request.creator_message)
            elif request.action == OrderAction.REJECT:
                order.reject(request.creator_message)
            else:
                order.complete(request.delivery_file, request.creator_message)

            if not await self.unit_of_work.orders.apply_transition(order, expected):
                raise StateConflictError(
                    f"Order cannot be {_PAST_TENSE[request.action]} in current state"
                )
            await self.unit_of_work.commit()

        for event in order.get_events():
            logger.info("Order event: %s", event)
        await self.activity_logger.order_transition(creator_id, order.id, _LOG_ACTIONS[request.action], client)
        return OrderResponseDTO.from_entity(order)
