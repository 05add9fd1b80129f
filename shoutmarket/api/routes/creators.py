"""Creator self-service routes"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import (
    get_activity_logger, get_client_info, get_storage_service, get_unit_of_work, require_creator
)
from ...application.dtos.account_dtos import PasswordChangeDto, ProfileUpdateDto, UploadUrlRequestDto
from ...application.dtos.catalog_dtos import ShoutoutCreateDto, ShoutoutUpdateDto
from ...application.dtos.order_dtos import OrderStatusUpdateDTO
from ...application.dtos.withdrawal_dtos import WithdrawalRequestDto
from ...application.services.activity_logger import ActivityLogger, ClientInfo
from ...application.use_cases.account_use_cases import (
    ChangePasswordUseCase, GetProfileUseCase, RequestUploadUrlUseCase, UpdateProfileUseCase
)
from ...application.use_cases.catalog_use_cases import ManageShoutoutsUseCase
from ...application.use_cases.dashboard_use_cases import CreatorDashboardUseCase
from ...application.use_cases.order_queries import GetOrderUseCase, ListCreatorOrdersUseCase
from ...application.use_cases.request_withdrawal import ListCreatorWithdrawalsUseCase, RequestWithdrawalUseCase
from ...application.use_cases.update_order_status import UpdateOrderStatusUseCase
from ...domain.entities.account import Account
from ...domain.enums import OrderStatus
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import OrderId, ShoutoutId
from ...infrastructure.external_services.storage_service import StorageService

router = APIRouter()


@router.get("/me")
async def get_profile(
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Get current creator profile, balances included"""
    profile = await GetProfileUseCase(unit_of_work).execute(creator.id)
    return {"success": True, "creator": profile.dump()}


@router.put("/me")
async def update_profile(
    request: ProfileUpdateDto,
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    profile = await UpdateProfileUseCase(unit_of_work).execute(creator.id, request)
    return {"success": True, "message": "Profile updated successfully", "creator": profile.dump()}


@router.put("/me/password")
async def change_password(
    request: PasswordChangeDto,
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    await ChangePasswordUseCase(unit_of_work).execute(creator.id, request)
    return {"success": True, "message": "Password updated successfully"}


@router.get("/me/dashboard")
async def get_dashboard(
    period: int = Query(30, ge=1, le=365),
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    dashboard = await CreatorDashboardUseCase(unit_of_work).execute(creator.id, period)
    return {"success": True, "dashboard": dashboard}


@router.post("/me/upload-url")
async def upload_url(
    request: UploadUrlRequestDto,
    creator: Account = Depends(require_creator),
    storage_service: StorageService = Depends(get_storage_service)
):
    """Presigned PUT for an avatar or a delivery video"""
    ticket = await RequestUploadUrlUseCase(storage_service).execute(
        creator.id, request.purpose, request.content_type
    )
    return {"success": True, "uploadUrl": ticket.upload_url, "fileKey": ticket.file_key}


# Shoutout listings

@router.get("/me/shoutouts")
async def list_shoutouts(
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    shoutouts = await ManageShoutoutsUseCase(unit_of_work).list_own(creator.id)
    return {"success": True, "shoutouts": [s.dump() for s in shoutouts]}


@router.post("/me/shoutouts", status_code=status.HTTP_201_CREATED)
async def create_shoutout(
    request: ShoutoutCreateDto,
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    shoutout = await ManageShoutoutsUseCase(unit_of_work).create(creator.id, request)
    return {"success": True, "message": "Shoutout created successfully", "shoutout": shoutout.dump()}


@router.get("/me/shoutouts/{shoutout_id}")
async def get_shoutout(
    shoutout_id: UUID,
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    shoutout = await ManageShoutoutsUseCase(unit_of_work).get(creator.id, ShoutoutId(shoutout_id))
    return {"success": True, "shoutout": shoutout.dump()}


@router.put("/me/shoutouts/{shoutout_id}")
async def update_shoutout(
    shoutout_id: UUID,
    request: ShoutoutUpdateDto,
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    shoutout = await ManageShoutoutsUseCase(unit_of_work).update(creator.id, ShoutoutId(shoutout_id), request)
    return {"success": True, "message": "Shoutout updated successfully", "shoutout": shoutout.dump()}


@router.delete("/me/shoutouts/{shoutout_id}")
async def delete_shoutout(
    shoutout_id: UUID,
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Deactivate a listing; past orders keep referencing it"""
    await ManageShoutoutsUseCase(unit_of_work).delete(creator.id, ShoutoutId(shoutout_id))
    return {"success": True, "message": "Shoutout deleted successfully"}


# Orders

@router.get("/me/orders")
async def list_orders(
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=50),
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    result = await ListCreatorOrdersUseCase(unit_of_work).execute(creator.id, order_status, page, limit)
    return {"success": True, **result}


@router.get("/me/orders/{order_id}")
async def get_order(
    order_id: UUID,
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    order = await GetOrderUseCase(unit_of_work).for_creator(creator.id, OrderId(order_id))
    return {"success": True, "order": order.dump()}


@router.put("/me/orders/{order_id}")
async def update_order_status(
    order_id: UUID,
    request: OrderStatusUpdateDTO,
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    """Accept, reject or complete an order"""
    use_case = UpdateOrderStatusUseCase(unit_of_work, activity_logger)
    order = await use_case.execute(creator.id, OrderId(order_id), request, client)
    return {"success": True, "message": f"Order {order.status} successfully", "order": order.dump()}


# Withdrawals

@router.get("/me/withdrawals")
async def list_withdrawals(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=50),
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    result = await ListCreatorWithdrawalsUseCase(unit_of_work).execute(creator.id, page, limit)
    return {"success": True, **result}


@router.post("/me/withdrawals", status_code=status.HTTP_201_CREATED)
async def request_withdrawal(
    request: WithdrawalRequestDto,
    creator: Account = Depends(require_creator),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    withdrawal = await RequestWithdrawalUseCase(unit_of_work, activity_logger).execute(creator.id, request, client)
    return {
        "success": True,
        "message": "Withdrawal request submitted successfully",
        "withdrawal": withdrawal.dump(),
    }
