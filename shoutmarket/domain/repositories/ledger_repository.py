"""Creator balance ledger interface.

Every operation is a single atomic update evaluated by the database, so two
concurrent requests against one creator cannot lose an update.
"""

from abc import ABC, abstractmethod

from ..value_objects.entity_ids import AccountId
from ..value_objects.money import Money


class ILedgerRepository(ABC):

    @abstractmethod
    async def credit_earnings(self, creator_id: AccountId, amount: Money) -> None:
        """available_balance += amount and total_earnings += amount"""
        pass

    @abstractmethod
    async def debit_available(self, creator_id: AccountId, amount: Money) -> bool:
        """available_balance -= amount, only while the balance covers it and
        withdrawals are permitted. Returns False when nothing was debited."""
        pass

    @abstractmethod
    async def refund_available(self, creator_id: AccountId, amount: Money) -> None:
        """available_balance += amount"""
        pass
