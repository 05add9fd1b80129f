"""Back-office management of accounts, orders, logs and site settings"""

import json
import logging
from typing import Any, Dict, Optional

from ...core.errors import NotFoundError, ValidationError
from ...domain.entities.account import Account
from ...domain.enums import AccountRole, OrderStatus, SettingType
from ...domain.repositories.site_setting_repository import SiteSetting
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import AccountId
from ..dtos.account_dtos import AccountDto
from ..dtos.admin_dtos import ActivityLogDto, AdminCreatorUpdateDto, AdminUserUpdateDto, SiteSettingDto
from ..dtos.common import pagination
from ..dtos.withdrawal_dtos import WithdrawalDto
from ..services.activity_logger import (
    CREATOR_UPDATED, SETTING_UPDATED, USER_UPDATED, ActivityLogger, ClientInfo
)
from .dashboard_use_cases import RECENT_ORDERS, RECENT_WITHDRAWALS, period_start
from .order_queries import present_orders

logger = logging.getLogger(__name__)


class ManageAccountsUseCase:
    """List, inspect and edit buyer or seller accounts"""

    def __init__(self, unit_of_work: IUnitOfWork, activity_logger: ActivityLogger):
        self.unit_of_work = unit_of_work
        self.activity_logger = activity_logger

    async def list(self, role: AccountRole, search: Optional[str] = None, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        async with self.unit_of_work:
            accounts = await self.unit_of_work.accounts.list_by_role(role, search, page, limit)
        key = "creators" if role == AccountRole.CREATOR else "users"
        return {
            key: [AccountDto.from_entity(a).dump() for a in accounts],
            "pagination": pagination(page, limit, len(accounts)),
        }

    async def detail(self, role: AccountRole, account_id: AccountId) -> Dict[str, Any]:
        async with self.unit_of_work:
            account = await self._load(role, account_id)
            if role == AccountRole.CREATOR:
                orders = await self.unit_of_work.orders.list_for_creator(account_id, limit=RECENT_ORDERS)
                withdrawals = await self.unit_of_work.withdrawals.list_for_creator(
                    account_id, limit=RECENT_WITHDRAWALS
                )
                stats = await self.unit_of_work.stats.creator_stats(account_id, period_start(30))
                totals = await self.unit_of_work.stats.withdrawal_stats(account_id)
            else:
                orders = await self.unit_of_work.orders.list_for_user(account_id, limit=RECENT_ORDERS)
                stats = None
            recent = await present_orders(self.unit_of_work, orders)

        data = AccountDto.from_entity(account).dump()
        data["recentOrders"] = [dto.dump() for dto in recent]
        if stats is not None:
            data["stats"] = {
                "totalOrders": stats.total_orders,
                "completedOrders": stats.completed_orders,
                "pendingOrders": stats.pending_orders,
                "activeShoutouts": stats.active_shoutouts,
                "shoutoutCount": totals.shoutout_count,
                "totalRevenue": float(totals.total_revenue),
                "totalWithdrawals": totals.total_withdrawals,
                "totalWithdrawn": float(totals.total_withdrawn),
            }
            data["recentWithdrawals"] = [WithdrawalDto.from_entity(w).dump() for w in withdrawals]
        return data

    async def update(
        self,
        admin_id: AccountId,
        role: AccountRole,
        account_id: AccountId,
        request: AdminUserUpdateDto,
        client: Optional[ClientInfo] = None
    ) -> AccountDto:
        changes = request.model_dump(exclude_unset=True, by_alias=True)

        async with self.unit_of_work:
            account = await self._load(role, account_id)
            account.update_profile(first_name=request.first_name, last_name=request.last_name)
            if request.is_verified is not None:
                account.is_verified = request.is_verified

            if isinstance(request, AdminCreatorUpdateDto):
                profile = account.require_creator_profile()
                if request.commission_rate is not None:
                    profile.set_commission_rate(request.commission_rate)
                if request.is_sponsored is not None:
                    profile.is_sponsored = request.is_sponsored
                if request.withdrawal_permission is not None:
                    profile.withdrawal_permission = request.withdrawal_permission

            await self.unit_of_work.accounts.update(account)
            await self.unit_of_work.commit()

        action = CREATOR_UPDATED if role == AccountRole.CREATOR else USER_UPDATED
        await self.activity_logger.admin_action(
            admin_id,
            action,
            f"Updated {role.value}: {account.email}",
            metadata={"accountId": str(account.id), "changes": json.loads(json.dumps(changes, default=str))},
            client=client,
        )
        return AccountDto.from_entity(account)

    async def _load(self, role: AccountRole, account_id: AccountId) -> Account:
        account = await self.unit_of_work.accounts.get_by_id(account_id)
        if not account or account.role != role:
            raise NotFoundError("Creator not found" if role == AccountRole.CREATOR else "User not found")
        return account


class ListAllOrdersUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(
        self,
        search: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> Dict[str, Any]:
        async with self.unit_of_work:
            orders = await self.unit_of_work.orders.list_all(search, status, page, limit)
            dtos = await present_orders(self.unit_of_work, orders, include_contact=True)
        return {
            "orders": [dto.dump() for dto in dtos],
            "pagination": pagination(page, limit, len(orders)),
        }


class SearchActivityLogsUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(
        self,
        days: int = 30,
        search: Optional[str] = None,
        user_type: Optional[AccountRole] = None,
        action: Optional[str] = None,
        page: int = 1,
        limit: int = 50
    ) -> Dict[str, Any]:
        async with self.unit_of_work:
            entries = await self.unit_of_work.activity_logs.search(
                period_start(days), search, user_type, action, page, limit
            )
        return {
            "logs": [ActivityLogDto.from_entity(entry).dump() for entry in entries],
            "pagination": pagination(page, limit, len(entries)),
        }


def check_setting_value(value: str, setting_type: SettingType) -> None:
    """Values are stored as text; make sure they parse as their declared type"""
    if setting_type == SettingType.NUMBER:
        try:
            float(value)
        except ValueError:
            raise ValidationError("Setting value must be a number")
    elif setting_type == SettingType.BOOLEAN:
        if value.lower() not in ("true", "false"):
            raise ValidationError("Setting value must be true or false")
    elif setting_type == SettingType.JSON:
        try:
            json.loads(value)
        except ValueError:
            raise ValidationError("Setting value must be valid JSON")


class SiteSettingsUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, activity_logger: ActivityLogger):
        self.unit_of_work = unit_of_work
        self.activity_logger = activity_logger

    async def list(self) -> Dict[str, Any]:
        async with self.unit_of_work:
            settings = await self.unit_of_work.settings.list_all()
        return {"settings": [SiteSettingDto.from_entity(s).dump() for s in settings]}

    async def upsert(
        self,
        admin_id: AccountId,
        request: SiteSettingDto,
        client: Optional[ClientInfo] = None
    ) -> SiteSettingDto:
        check_setting_value(request.value, request.type)

        async with self.unit_of_work:
            setting = await self.unit_of_work.settings.upsert(SiteSetting(
                key=request.key,
                value=request.value,
                type=request.type,
                description=request.description,
            ))
            await self.unit_of_work.commit()

        logger.info("Site setting %s updated", setting.key)
        await self.activity_logger.admin_action(
            admin_id,
            SETTING_UPDATED,
            f"Updated site setting: {setting.key}",
            metadata={"key": setting.key, "value": setting.value, "type": setting.type.value},
            client=client,
        )
        return SiteSettingDto.from_entity(setting)
