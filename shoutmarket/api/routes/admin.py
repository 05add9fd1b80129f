"""Admin back-office routes"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_activity_logger, get_client_info, get_unit_of_work, require_admin
from ...application.dtos.admin_dtos import AdminCreatorUpdateDto, AdminUserUpdateDto, SiteSettingDto
from ...application.dtos.withdrawal_dtos import WithdrawalDecisionDto
from ...application.services.activity_logger import ActivityLogger, ClientInfo
from ...application.use_cases.admin_use_cases import (
    ListAllOrdersUseCase, ManageAccountsUseCase, SearchActivityLogsUseCase, SiteSettingsUseCase
)
from ...application.use_cases.dashboard_use_cases import AdminDashboardUseCase
from ...application.use_cases.decide_withdrawal import DecideWithdrawalUseCase, ListWithdrawalsUseCase
from ...domain.entities.account import Account
from ...domain.enums import AccountRole, OrderStatus, WithdrawalStatus
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import AccountId, WithdrawalId

router = APIRouter()


@router.get("/dashboard")
async def get_dashboard(
    period: int = Query(30, ge=1, le=365),
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Platform overview for the last ``period`` days"""
    dashboard = await AdminDashboardUseCase(unit_of_work).execute(period)
    return {"success": True, "dashboard": dashboard}


# Accounts

@router.get("/users")
async def list_users(
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=50),
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger)
):
    result = await ManageAccountsUseCase(unit_of_work, activity_logger).list(AccountRole.USER, search, page, limit)
    return {"success": True, **result}


@router.get("/users/{user_id}")
async def get_user(
    user_id: UUID,
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger)
):
    user = await ManageAccountsUseCase(unit_of_work, activity_logger).detail(AccountRole.USER, AccountId(user_id))
    return {"success": True, "user": user}


@router.put("/users/{user_id}")
async def update_user(
    user_id: UUID,
    request: AdminUserUpdateDto,
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    user = await ManageAccountsUseCase(unit_of_work, activity_logger).update(
        admin.id, AccountRole.USER, AccountId(user_id), request, client
    )
    return {"success": True, "message": "User updated successfully", "user": user.dump()}


@router.get("/creators")
async def list_creators(
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=50),
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger)
):
    result = await ManageAccountsUseCase(unit_of_work, activity_logger).list(
        AccountRole.CREATOR, search, page, limit
    )
    return {"success": True, **result}


@router.get("/creators/{creator_id}")
async def get_creator(
    creator_id: UUID,
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger)
):
    creator = await ManageAccountsUseCase(unit_of_work, activity_logger).detail(
        AccountRole.CREATOR, AccountId(creator_id)
    )
    return {"success": True, "creator": creator}


@router.put("/creators/{creator_id}")
async def update_creator(
    creator_id: UUID,
    request: AdminCreatorUpdateDto,
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    """Edit a creator, including commission rate and withdrawal permission"""
    creator = await ManageAccountsUseCase(unit_of_work, activity_logger).update(
        admin.id, AccountRole.CREATOR, AccountId(creator_id), request, client
    )
    return {"success": True, "message": "Creator updated successfully", "creator": creator.dump()}


# Orders and withdrawals

@router.get("/orders")
async def list_orders(
    search: Optional[str] = None,
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    result = await ListAllOrdersUseCase(unit_of_work).execute(search, order_status, page, limit)
    return {"success": True, **result}


@router.get("/withdrawals")
async def list_withdrawals(
    search: Optional[str] = None,
    withdrawal_status: Optional[WithdrawalStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    result = await ListWithdrawalsUseCase(unit_of_work).execute(search, withdrawal_status, page, limit)
    return {"success": True, **result}


@router.put("/withdrawals/{withdrawal_id}")
async def decide_withdrawal(
    withdrawal_id: UUID,
    request: WithdrawalDecisionDto,
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    """Approve or reject a pending withdrawal"""
    withdrawal = await DecideWithdrawalUseCase(unit_of_work, activity_logger).execute(
        admin.id, WithdrawalId(withdrawal_id), request, client
    )
    verb = "approved" if request.action.value == "approve" else "rejected"
    return {"success": True, "message": f"Withdrawal {verb} successfully", "withdrawal": withdrawal.dump()}


# Activity logs and settings

@router.get("/activity-logs")
async def list_activity_logs(
    days: int = Query(30, ge=1, le=365),
    search: Optional[str] = None,
    user_type: Optional[AccountRole] = Query(None, alias="userType"),
    action: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    result = await SearchActivityLogsUseCase(unit_of_work).execute(days, search, user_type, action, page, limit)
    return {"success": True, **result}


@router.get("/settings")
async def list_settings(
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger)
):
    result = await SiteSettingsUseCase(unit_of_work, activity_logger).list()
    return {"success": True, **result}


@router.put("/settings")
async def update_setting(
    request: SiteSettingDto,
    admin: Account = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    setting = await SiteSettingsUseCase(unit_of_work, activity_logger).upsert(admin.id, request, client)
    return {"success": True, "message": "Setting updated successfully", "setting": setting.dump()}
