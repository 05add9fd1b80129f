"""Dashboard counters computed with aggregate queries"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...domain.enums import AccountRole, OrderStatus, PaymentStatus, WithdrawalStatus
from ...domain.repositories.stats_repository import (
    CreatorStats, IStatsRepository, PlatformStats, WithdrawalStats
)
from ...domain.value_objects.entity_ids import AccountId
from ...domain.value_objects.money import to_decimal
from ..orm.account_model import AccountModel
from ..orm.order_model import OrderModel
from ..orm.shoutout_model import CreatorShoutoutModel
from ..orm.withdrawal_model import WithdrawalModel


class StatsRepositoryImpl(IStatsRepository):

    def __init__(self, session: Session):
        self.session = session

    def _count(self, model, *criteria) -> int:
        return self.session.query(func.count(model.id)).filter(*criteria).scalar() or 0

    def _sum(self, column, *criteria) -> Decimal:
        total = self.session.query(func.coalesce(func.sum(column), 0)).filter(*criteria).scalar()
        return to_decimal(total or 0)

    async def creator_stats(self, creator_id: AccountId, since: datetime) -> CreatorStats:
        mine = OrderModel.creator_id == creator_id.value
        completed = OrderModel.status == OrderStatus.COMPLETED.value
        return CreatorStats(
            total_orders=self._count(OrderModel, mine),
            completed_orders=self._count(OrderModel, mine, completed),
            pending_orders=self._count(
                OrderModel, mine,
                OrderModel.status == OrderStatus.PENDING.value,
                OrderModel.payment_status == PaymentStatus.PAID.value
            ),
            active_shoutouts=self._count(
                CreatorShoutoutModel,
                CreatorShoutoutModel.creator_id == creator_id.value,
                CreatorShoutoutModel.is_active.is_(True)
            ),
            period_orders=self._count(OrderModel, mine, OrderModel.created_at >= since),
            period_earnings=self._sum(
                OrderModel.creator_earnings, mine, completed, OrderModel.created_at >= since
            ),
        )

    async def platform_stats(self, since: datetime) -> PlatformStats:
        users = AccountModel.role == AccountRole.USER.value
        creators = AccountModel.role == AccountRole.CREATOR.value
        completed = OrderModel.status == OrderStatus.COMPLETED.value
        return PlatformStats(
            total_users=self._count(AccountModel, users),
            total_creators=self._count(AccountModel, creators),
            total_orders=self._count(OrderModel),
            completed_orders=self._count(OrderModel, completed),
            pending_withdrawals=self._count(
                WithdrawalModel, WithdrawalModel.status == WithdrawalStatus.PENDING.value
            ),
            period_users=self._count(AccountModel, users, AccountModel.created_at >= since),
            period_creators=self._count(AccountModel, creators, AccountModel.created_at >= since),
            period_orders=self._count(OrderModel, OrderModel.created_at >= since),
            period_revenue=self._sum(
                OrderModel.commission_amount, completed, OrderModel.created_at >= since
            ),
        )

    async def withdrawal_stats(self, creator_id: AccountId) -> WithdrawalStats:
        mine = WithdrawalModel.creator_id == creator_id.value
        return WithdrawalStats(
            total_withdrawals=self._count(WithdrawalModel, mine),
            total_withdrawn=self._sum(
                WithdrawalModel.amount, mine, WithdrawalModel.status == WithdrawalStatus.COMPLETED.value
            ),
            total_revenue=self._sum(
                OrderModel.price,
                OrderModel.creator_id == creator_id.value,
                OrderModel.payment_status == PaymentStatus.PAID.value
            ),
            shoutout_count=self._count(
                CreatorShoutoutModel, CreatorShoutoutModel.creator_id == creator_id.value
            ),
        )
