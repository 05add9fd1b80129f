"""Catalog repository interface"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from ..entities.account import Account
from ..entities.shoutout import Shoutout, ShoutoutType
from ..enums import CreatorSort
from ..value_objects.entity_ids import AccountId, ShoutoutId, ShoutoutTypeId


@dataclass(frozen=True)
class ListingFilter:
    query: Optional[str] = None
    shoutout_type_id: Optional[ShoutoutTypeId] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    max_delivery_time: Optional[int] = None
    sort_by: Optional[CreatorSort] = None
    page: int = 1
    limit: int = 20


Listing = Tuple[Account, Shoutout, ShoutoutType]


class IShoutoutRepository(ABC):

    @abstractmethod
    async def list_types(self) -> List[ShoutoutType]:
        pass

    @abstractmethod
    async def get_type(self, type_id: ShoutoutTypeId) -> Optional[ShoutoutType]:
        pass

    @abstractmethod
    async def get_types(self, type_ids: Iterable[ShoutoutTypeId]) -> Dict[ShoutoutTypeId, ShoutoutType]:
        pass

    @abstractmethod
    async def get_type_by_name(self, name: str) -> Optional[ShoutoutType]:
        pass

    @abstractmethod
    async def add_type(self, shoutout_type: ShoutoutType) -> ShoutoutType:
        pass

    @abstractmethod
    async def get_by_id(self, shoutout_id: ShoutoutId) -> Optional[Shoutout]:
        pass

    @abstractmethod
    async def get_many(self, shoutout_ids: Iterable[ShoutoutId]) -> Dict[ShoutoutId, Shoutout]:
        pass

    @abstractmethod
    async def list_by_creator(self, creator_id: AccountId, active_only: bool = False) -> List[Shoutout]:
        pass

    @abstractmethod
    async def add(self, shoutout: Shoutout) -> Shoutout:
        pass

    @abstractmethod
    async def update(self, shoutout: Shoutout) -> Shoutout:
        pass

    @abstractmethod
    async def search_listings(self, criteria: ListingFilter) -> Tuple[List[Listing], int]:
        """Active listings joined with creator and type, plus the total match count"""
        pass
