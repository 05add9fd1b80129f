"""Withdrawal DTOs"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Literal, Optional
from uuid import UUID

from pydantic import Field

from ...domain.entities.account import Account
from ...domain.entities.withdrawal import Withdrawal
from ...domain.enums import WithdrawalAction
from ...domain.value_objects.payout_method import BankPayoutMethod
from .account_dtos import AccountSummaryDto
from .common import CamelModel


class PayoutMethodDto(CamelModel):
    type: Literal["bank"]
    bank_name: str = Field(..., min_length=1)
    account_number: str = Field(..., min_length=1)
    routing_number: Optional[str] = None
    account_holder_name: str = Field(..., min_length=1)

    def to_value_object(self) -> BankPayoutMethod:
        return BankPayoutMethod(
            bank_name=self.bank_name,
            account_number=self.account_number,
            routing_number=self.routing_number,
            account_holder_name=self.account_holder_name,
        )


class WithdrawalRequestDto(CamelModel):
    amount: Decimal = Field(..., ge=10)
    payout_method: PayoutMethodDto


class WithdrawalDecisionDto(CamelModel):
    action: WithdrawalAction
    admin_notes: Optional[str] = None


class WithdrawalDto(CamelModel):
    id: UUID
    creator_id: UUID
    amount: Decimal
    status: str
    payout_method: Optional[Dict[str, Any]] = None
    admin_notes: Optional[str] = None
    processed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    creator: Optional[AccountSummaryDto] = None

    @classmethod
    def from_entity(cls, withdrawal: Withdrawal, creator: Optional[Account] = None) -> 'WithdrawalDto':
        return cls(
            id=withdrawal.id.value,
            creator_id=withdrawal.creator_id.value,
            amount=withdrawal.amount.amount,
            status=withdrawal.status.value,
            payout_method=withdrawal.payout_method.to_dict() if withdrawal.payout_method else None,
            admin_notes=withdrawal.admin_notes,
            processed_at=withdrawal.processed_at,
            created_at=withdrawal.created_at,
            updated_at=withdrawal.updated_at,
            creator=AccountSummaryDto.from_entity(creator, include_email=True) if creator else None,
        )
