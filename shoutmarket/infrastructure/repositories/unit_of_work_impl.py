"""Unit of Work implementation over a single SQLAlchemy session"""

from sqlalchemy.orm import Session

from ...domain.repositories.unit_of_work import IUnitOfWork
from .account_repository_impl import AccountRepositoryImpl
from .activity_log_repository_impl import ActivityLogRepositoryImpl
from .ledger_repository_impl import LedgerRepositoryImpl
from .order_repository_impl import OrderRepositoryImpl
from .shoutout_repository_impl import ShoutoutRepositoryImpl
from .site_setting_repository_impl import SiteSettingRepositoryImpl
from .stats_repository_impl import StatsRepositoryImpl
from .withdrawal_repository_impl import WithdrawalRepositoryImpl


class UnitOfWorkImpl(IUnitOfWork):

    def __init__(self, session: Session):
        self.session = session
        self.accounts = AccountRepositoryImpl(session)
        self.shoutouts = ShoutoutRepositoryImpl(session)
        self.orders = OrderRepositoryImpl(session)
        self.withdrawals = WithdrawalRepositoryImpl(session)
        self.ledger = LedgerRepositoryImpl(session)
        self.activity_logs = ActivityLogRepositoryImpl(session)
        self.settings = SiteSettingRepositoryImpl(session)
        self.stats = StatsRepositoryImpl(session)
        self._committed = False

    async def __aenter__(self):
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            await self.rollback()
        elif not self._committed:
            await self.commit()

    async def commit(self) -> None:
        try:
            self.session.commit()
            self._committed = True
        except Exception:
            self.session.rollback()
            raise

    async def rollback(self) -> None:
        self.session.rollback()
