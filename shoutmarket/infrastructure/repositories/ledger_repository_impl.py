"""Balance ledger implemented as guarded single-statement UPDATEs"""

import logging

from sqlalchemy.orm import Session

from ...domain.repositories.ledger_repository import ILedgerRepository
from ...domain.value_objects.entity_ids import AccountId
from ...domain.value_objects.money import Money
from ..orm.account_model import CreatorProfileModel

logger = logging.getLogger(__name__)

profiles = CreatorProfileModel.__table__


class LedgerRepositoryImpl(ILedgerRepository):

    def __init__(self, session: Session):
        self.session = session

    async def credit_earnings(self, creator_id: AccountId, amount: Money) -> None:
        result = self.session.execute(
            profiles.update()
            .where(profiles.c.account_id == creator_id.value)
            .values(
                available_balance=profiles.c.available_balance + amount.amount,
                total_earnings=profiles.c.total_earnings + amount.amount,
            )
        )
        if result.rowcount != 1:
            raise LookupError(f"Creator profile {creator_id} not found")
        self._expire(creator_id)
        logger.info("Credited %s to creator %s", amount, creator_id)

    async def debit_available(self, creator_id: AccountId, amount: Money) -> bool:
        result = self.session.execute(
            profiles.update()
            .where(
                profiles.c.account_id == creator_id.value,
                profiles.c.withdrawal_permission.is_(True),
                profiles.c.available_balance >= amount.amount,
            )
            .values(available_balance=profiles.c.available_balance - amount.amount)
        )
        self._expire(creator_id)
        debited = result.rowcount == 1
        if debited:
            logger.info("Debited %s from creator %s", amount, creator_id)
        return debited

    async def refund_available(self, creator_id: AccountId, amount: Money) -> None:
        result = self.session.execute(
            profiles.update()
            .where(profiles.c.account_id == creator_id.value)
            .values(available_balance=profiles.c.available_balance + amount.amount)
        )
        if result.rowcount != 1:
            raise LookupError(f"Creator profile {creator_id} not found")
        self._expire(creator_id)
        logger.info("Refunded %s to creator %s", amount, creator_id)

    def _expire(self, creator_id: AccountId) -> None:
        """Drop cached balances so later reads in this session hit the row"""
        key = self.session.identity_key(CreatorProfileModel, creator_id.value)
        cached = self.session.identity_map.get(key)
        if cached is not None:
            self.session.expire(cached)
