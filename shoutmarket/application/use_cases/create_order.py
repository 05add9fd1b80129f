"""Create Order Use Case"""

import logging
from typing import Any, Dict

from ...core.errors import NotFoundError, UpstreamError
from ...domain.entities.order import Order
from ...domain.enums import OrderStatus, PaymentStatus
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import AccountId, ShoutoutId
from ...infrastructure.external_services.payment_service import PaymentService
from ..dtos.order_dtos import OrderCreateDTO, OrderResponseDTO, PaymentSessionDTO
from ..services.activity_logger import ActivityLogger, ClientInfo

logger = logging.getLogger(__name__)


class CreateOrderUseCase:
    """Place an order and open a provider payment for it.

    The order row is committed before the provider is called so the payment
    reference always points at a persisted order. If the provider refuses,
    the order is parked at (cancelled, failed).
    """

    def __init__(self, unit_of_work: IUnitOfWork, payment_service: PaymentService, activity_logger: ActivityLogger):
        self.unit_of_work = unit_of_work
        self.payment_service = payment_service
        self.activity_logger = activity_logger

    async def execute(self, order_data: OrderCreateDTO, user_id: AccountId, client: ClientInfo) -> Dict[str, Any]:
        async with self.unit_of_work:
            shoutout = await self.unit_of_work.shoutouts.get_by_id(ShoutoutId(order_data.shoutout_id))
            if not shoutout:
                raise NotFoundError("Shoutout not found")
            shoutout.ensure_orderable()

            creator = await self.unit_of_work.accounts.get_by_id(shoutout.creator_id)
            if not creator or creator.creator_profile is None:
                raise NotFoundError("Shoutout not found")

            order = Order.place(
                user_id=user_id,
                creator_id=creator.id,
                shoutout_id=shoutout.id,
                price=shoutout.price,
                commission_rate=creator.creator_profile.commission_rate,
                instructions=order_data.instructions,
            )
            await self.unit_of_work.orders.add(order)
            await self.unit_of_work.commit()

        try:
            payment = await self.payment_service.create_payment(
                order_ref=order.order_number,
                amount=order.price.amount,
                currency=order.price.currency,
                description=f"Shoutout: {shoutout.title} by {creator.display_name}",
            )
        except UpstreamError as e:
            logger.error("Payment creation failed for order %s: %s", order.order_number, e)
            await self._park_failed(order)
            raise UpstreamError("Failed to create payment. Please try again.") from e

        async with self.unit_of_work:
            order.attach_payment(payment.payment_id)
            await self.unit_of_work.orders.update(order)
            await self.unit_of_work.commit()

        for event in order.get_events():
            logger.info("Order event: %s", event)
        await self.activity_logger.order_created(user_id, order.id, order.price, client)

        return {
            "order": OrderResponseDTO.from_entity(order).dump(),
            "payment": PaymentSessionDTO(
                payment_id=payment.payment_id,
                payment_url=payment.pay_url,
                payment_address=payment.pay_address,
                pay_amount=payment.pay_amount,
                pay_currency=payment.pay_currency,
            ).dump(),
        }

    async def _park_failed(self, order: Order) -> None:
        async with self.unit_of_work:
            order.fail_payment()
            applied = await self.unit_of_work.orders.apply_transition(
                order, (OrderStatus.PENDING, PaymentStatus.PENDING)
            )
            await self.unit_of_work.commit()
        if not applied:
            logger.warning("Order %s changed state before it could be marked failed", order.order_number)
