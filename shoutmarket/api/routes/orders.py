"""Buyer order routes"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import (
    get_activity_logger, get_client_info, get_payment_service, get_storage_service, get_unit_of_work, require_user
)
from ...application.dtos.order_dtos import OrderCreateDTO
from ...application.services.activity_logger import ActivityLogger, ClientInfo
from ...application.use_cases.create_order import CreateOrderUseCase
from ...application.use_cases.order_queries import GetOrderUseCase, ListUserOrdersUseCase
from ...domain.entities.account import Account
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import OrderId
from ...infrastructure.external_services.payment_service import PaymentService
from ...infrastructure.external_services.storage_service import StorageService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreateDTO,
    current_user: Account = Depends(require_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    payment_service: PaymentService = Depends(get_payment_service),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    """Create an order and open a payment session for it"""
    use_case = CreateOrderUseCase(unit_of_work, payment_service, activity_logger)
    result = await use_case.execute(order_data, current_user.id, client)
    return {"success": True, "message": "Order created successfully", **result}


@router.get("")
async def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=50),
    current_user: Account = Depends(require_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Get all orders for current user"""
    result = await ListUserOrdersUseCase(unit_of_work).execute(current_user.id, page, limit)
    return {"success": True, **result}


@router.get("/{order_id}")
async def get_order(
    order_id: UUID,
    current_user: Account = Depends(require_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service)
):
    """Get order by ID, with a signed link to the delivery once there is one"""
    order = await GetOrderUseCase(unit_of_work, storage_service).for_user(current_user.id, OrderId(order_id))
    return {"success": True, "order": order.dump()}
