"""Withdrawal entity"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from ...core.errors import StateConflictError, ValidationError
from ..enums import WithdrawalStatus
from ..events.withdrawal_events import WithdrawalRequested, WithdrawalApproved, WithdrawalRejected
from ..value_objects.entity_ids import AccountId, WithdrawalId
from ..value_objects.money import Money
from ..value_objects.payout_method import BankPayoutMethod


@dataclass
class Withdrawal:
    id: WithdrawalId
    creator_id: AccountId
    amount: Money
    payout_method: Optional[BankPayoutMethod]
    status: WithdrawalStatus = WithdrawalStatus.PENDING
    admin_notes: Optional[str] = None
    processed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    _events: List = field(default_factory=list, init=False, repr=False)

    @classmethod
    def request(
        cls,
        creator_id: AccountId,
        amount: Money,
        payout_method: BankPayoutMethod,
        minimum: Decimal = Decimal("10.00"),
    ) -> 'Withdrawal':
        """Factory: new pending payout; the caller debits the balance"""
        if amount.amount < minimum:
            raise ValidationError(f"Minimum withdrawal amount is ${minimum}")

        withdrawal = cls(
            id=WithdrawalId.generate(),
            creator_id=creator_id,
            amount=amount,
            payout_method=payout_method,
        )
        withdrawal._events.append(WithdrawalRequested(
            withdrawal_id=withdrawal.id,
            creator_id=creator_id,
            amount=amount
        ))
        return withdrawal

    def approve(self, admin_notes: Optional[str] = None) -> None:
        """Funds left the balance at request time; nothing to move here"""
        self._decide(WithdrawalStatus.COMPLETED, admin_notes)
        self._events.append(WithdrawalApproved(
            withdrawal_id=self.id,
            creator_id=self.creator_id,
            amount=self.amount
        ))

    def reject(self, admin_notes: Optional[str] = None) -> None:
        """The caller refunds ``amount`` to the creator's available balance"""
        self._decide(WithdrawalStatus.REJECTED, admin_notes)
        self._events.append(WithdrawalRejected(
            withdrawal_id=self.id,
            creator_id=self.creator_id,
            refunded=self.amount
        ))

    def _decide(self, status: WithdrawalStatus, admin_notes: Optional[str]) -> None:
        if self.status != WithdrawalStatus.PENDING:
            raise StateConflictError("Withdrawal is not in pending status")

        self.status = status
        self.admin_notes = admin_notes
        self.processed_at = datetime.utcnow()
        self.updated_at = self.processed_at

    def get_events(self) -> List:
        """Get and clear domain events"""
        events = self._events.copy()
        self._events.clear()
        return events
