"""Account repository interface"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from ..entities.account import Account
from ..enums import AccountRole
from ..value_objects.entity_ids import AccountId


class IAccountRepository(ABC):

    @abstractmethod
    async def get_by_id(self, account_id: AccountId) -> Optional[Account]:
        pass

    @abstractmethod
    async def get_many(self, account_ids: Iterable[AccountId]) -> Dict[AccountId, Account]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str, role: AccountRole) -> Optional[Account]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str, role: AccountRole) -> bool:
        pass

    @abstractmethod
    async def exists_by_display_name(
        self,
        display_name: str,
        role: AccountRole,
        exclude_id: Optional[AccountId] = None
    ) -> bool:
        pass

    @abstractmethod
    async def add(self, account: Account) -> Account:
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Persist identity and profile fields; balances are never written here"""
        pass

    @abstractmethod
    async def count_by_role(self, role: AccountRole) -> int:
        pass

    @abstractmethod
    async def list_by_role(
        self,
        role: AccountRole,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> List[Account]:
        pass
