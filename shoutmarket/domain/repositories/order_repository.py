"""Order repository interface"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..entities.order import Order
from ..enums import OrderStatus, PaymentStatus
from ..value_objects.entity_ids import AccountId, OrderId


class IOrderRepository(ABC):

    @abstractmethod
    async def get_by_id(self, order_id: OrderId) -> Optional[Order]:
        pass

    @abstractmethod
    async def get_by_order_number(self, order_number: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def add(self, order: Order) -> Order:
        pass

    @abstractmethod
    async def update(self, order: Order) -> Order:
        """Unconditional write of the mutable order fields"""
        pass

    @abstractmethod
    async def apply_transition(self, order: Order, expected: Tuple[OrderStatus, PaymentStatus]) -> bool:
        """Write the order only if the stored (status, payment_status) still
        equals ``expected``. Returns False when another writer got there first."""
        pass

    @abstractmethod
    async def list_for_user(self, user_id: AccountId, page: int = 1, limit: int = 20) -> List[Order]:
        pass

    @abstractmethod
    async def list_for_creator(
        self,
        creator_id: AccountId,
        status: Optional[OrderStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> List[Order]:
        pass

    @abstractmethod
    async def list_all(
        self,
        search: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> List[Order]:
        pass
