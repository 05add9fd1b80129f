"""Withdrawal domain events"""

from dataclasses import dataclass

from ..value_objects.money import Money
from ..value_objects.entity_ids import AccountId, WithdrawalId


@dataclass(frozen=True)
class WithdrawalRequested:
    withdrawal_id: WithdrawalId
    creator_id: AccountId
    amount: Money


@dataclass(frozen=True)
class WithdrawalApproved:
    withdrawal_id: WithdrawalId
    creator_id: AccountId
    amount: Money


@dataclass(frozen=True)
class WithdrawalRejected:
    withdrawal_id: WithdrawalId
    creator_id: AccountId
    refunded: Money
