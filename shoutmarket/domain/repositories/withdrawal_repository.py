"""Withdrawal repository interface"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.withdrawal import Withdrawal
from ..enums import WithdrawalStatus
from ..value_objects.entity_ids import AccountId, WithdrawalId


class IWithdrawalRepository(ABC):

    @abstractmethod
    async def get_by_id(self, withdrawal_id: WithdrawalId) -> Optional[Withdrawal]:
        pass

    @abstractmethod
    async def add(self, withdrawal: Withdrawal) -> Withdrawal:
        pass

    @abstractmethod
    async def apply_decision(self, withdrawal: Withdrawal) -> bool:
        """Persist an approve/reject only if the stored row is still pending"""
        pass

    @abstractmethod
    async def list_for_creator(self, creator_id: AccountId, page: int = 1, limit: int = 20) -> List[Withdrawal]:
        pass

    @abstractmethod
    async def list_all(
        self,
        search: Optional[str] = None,
        status: Optional[WithdrawalStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> List[Withdrawal]:
        pass
