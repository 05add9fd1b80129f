"""Creator and admin dashboards"""

from datetime import datetime, timedelta
from typing import Any, Dict

from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import AccountId
from ..dtos.admin_dtos import ActivityLogDto
from ..dtos.withdrawal_dtos import WithdrawalDto
from .order_queries import present_orders

RECENT_ORDERS = 10
RECENT_WITHDRAWALS = 5
RECENT_ACTIVITIES = 20


def period_start(days: int) -> datetime:
    return datetime.utcnow() - timedelta(days=days)


class CreatorDashboardUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, creator_id: AccountId, period_days: int = 30) -> Dict[str, Any]:
        async with self.unit_of_work:
            stats = await self.unit_of_work.stats.creator_stats(creator_id, period_start(period_days))
            orders = await self.unit_of_work.orders.list_for_creator(creator_id, limit=RECENT_ORDERS)
            recent_orders = await present_orders(self.unit_of_work, orders)
            withdrawals = await self.unit_of_work.withdrawals.list_for_creator(creator_id, limit=RECENT_WITHDRAWALS)

        return {
            "stats": {
                "totalOrders": stats.total_orders,
                "completedOrders": stats.completed_orders,
                "pendingOrders": stats.pending_orders,
                "activeShoutouts": stats.active_shoutouts,
                "periodOrders": stats.period_orders,
                "periodEarnings": float(stats.period_earnings),
            },
            "recentOrders": [dto.dump() for dto in recent_orders],
            "recentWithdrawals": [WithdrawalDto.from_entity(w).dump() for w in withdrawals],
        }


class AdminDashboardUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, period_days: int = 30) -> Dict[str, Any]:
        async with self.unit_of_work:
            stats = await self.unit_of_work.stats.platform_stats(period_start(period_days))
            activities = await self.unit_of_work.activity_logs.recent(RECENT_ACTIVITIES)
            orders = await self.unit_of_work.orders.list_all(limit=RECENT_ORDERS)
            recent_orders = await present_orders(self.unit_of_work, orders, include_contact=True)

        return {
            "stats": {
                "totalUsers": stats.total_users,
                "totalCreators": stats.total_creators,
                "totalOrders": stats.total_orders,
                "completedOrders": stats.completed_orders,
                "pendingWithdrawals": stats.pending_withdrawals,
                "periodUsers": stats.period_users,
                "periodCreators": stats.period_creators,
                "periodOrders": stats.period_orders,
                "periodRevenue": float(stats.period_revenue),
            },
            "recentActivities": [ActivityLogDto.from_entity(entry).dump() for entry in activities],
            "recentOrders": [dto.dump() for dto in recent_orders],
        }
