"""Dashboard aggregate queries"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ..value_objects.entity_ids import AccountId


@dataclass(frozen=True)
class CreatorStats:
    total_orders: int
    completed_orders: int
    pending_orders: int  # paid and awaiting the creator
    active_shoutouts: int
    period_orders: int
    period_earnings: Decimal


@dataclass(frozen=True)
class PlatformStats:
    total_users: int
    total_creators: int
    total_orders: int
    completed_orders: int
    pending_withdrawals: int
    period_users: int
    period_creators: int
    period_orders: int
    period_revenue: Decimal


@dataclass(frozen=True)
class WithdrawalStats:
    total_withdrawals: int
    total_withdrawn: Decimal  # completed payouts only
    total_revenue: Decimal  # gross price of paid orders
    shoutout_count: int


class IStatsRepository(ABC):

    @abstractmethod
    async def creator_stats(self, creator_id: AccountId, since: datetime) -> CreatorStats:
        pass

    @abstractmethod
    async def platform_stats(self, since: datetime) -> PlatformStats:
        pass

    @abstractmethod
    async def withdrawal_stats(self, creator_id: AccountId) -> WithdrawalStats:
        pass
