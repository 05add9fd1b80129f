"""Entity ID value objects"""

from dataclasses import dataclass
from uuid import UUID, uuid4
from typing import Type, TypeVar


T = TypeVar("T", bound="EntityId")


@dataclass(frozen=True)
class EntityId:
    value: UUID

    def __post_init__(self):
        if not isinstance(self.value, UUID):
            raise ValueError(f"{type(self).__name__} must be a valid UUID")

    @classmethod
    def generate(cls: Type[T]) -> T:
        """Generate a new random UUID"""
        return cls(uuid4())

    @classmethod
    def from_str(cls: Type[T], uuid_str: str) -> T:
        """Create the id from its string form; raises ValueError when malformed"""
        return cls(UUID(str(uuid_str)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class AccountId(EntityId):
    pass


@dataclass(frozen=True)
class ShoutoutTypeId(EntityId):
    pass


@dataclass(frozen=True)
class ShoutoutId(EntityId):
    pass


@dataclass(frozen=True)
class OrderId(EntityId):
    pass


@dataclass(frozen=True)
class WithdrawalId(EntityId):
    pass
