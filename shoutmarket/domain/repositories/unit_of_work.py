"""Unit of Work interface for transaction management"""

from abc import ABC, abstractmethod

from .account_repository import IAccountRepository
from .activity_log_repository import IActivityLogRepository
from .ledger_repository import ILedgerRepository
from .order_repository import IOrderRepository
from .shoutout_repository import IShoutoutRepository
from .site_setting_repository import ISiteSettingRepository
from .stats_repository import IStatsRepository
from .withdrawal_repository import IWithdrawalRepository


class IUnitOfWork(ABC):
    """One database transaction spanning every repository it exposes"""

    accounts: IAccountRepository
    shoutouts: IShoutoutRepository
    orders: IOrderRepository
    withdrawals: IWithdrawalRepository
    ledger: ILedgerRepository
    activity_logs: IActivityLogRepository
    settings: ISiteSettingRepository
    stats: IStatsRepository

    @abstractmethod
    async def __aenter__(self):
        """Enter async context"""
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context"""
        pass

    @abstractmethod
    async def commit(self):
        """Commit transaction"""
        pass

    @abstractmethod
    async def rollback(self):
        """Rollback transaction"""
        pass
