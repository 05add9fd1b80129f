"""Admin decisions on withdrawals"""

import logging
from typing import Any, Dict, Optional

from ...core.errors import NotFoundError, StateConflictError
from ...domain.enums import WithdrawalAction, WithdrawalStatus
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import AccountId, WithdrawalId
from ..dtos.common import pagination
from ..dtos.withdrawal_dtos import WithdrawalDecisionDto, WithdrawalDto
from ..services.activity_logger import (
    WITHDRAWAL_APPROVED, WITHDRAWAL_REJECTED, ActivityLogger, ClientInfo
)

logger = logging.getLogger(__name__)


class DecideWithdrawalUseCase:
    """Approve (funds already left the balance) or reject (refund them).

    The status change is a compare-and-swap on ``pending``, and a refund
    commits together with it, so a withdrawal is decided at most once.
    """

    def __init__(self, unit_of_work: IUnitOfWork, activity_logger: ActivityLogger):
        self.unit_of_work = unit_of_work
        self.activity_logger = activity_logger

    async def execute(
        self,
        admin_id: AccountId,
        withdrawal_id: WithdrawalId,
        request: WithdrawalDecisionDto,
        client: Optional[ClientInfo] = None
    ) -> WithdrawalDto:
        async with self.unit_of_work:
            withdrawal = await self.unit_of_work.withdrawals.get_by_id(withdrawal_id)
            if not withdrawal:
                raise NotFoundError("Withdrawal not found")

            if request.action == WithdrawalAction.APPROVE:
                withdrawal.approve(request.admin_notes)
            else:
                withdrawal.reject(request.admin_notes)

            if not await self.unit_of_work.withdrawals.apply_decision(withdrawal):
                raise StateConflictError("Withdrawal is not in pending status")

            if withdrawal.status == WithdrawalStatus.REJECTED:
                await self.unit_of_work.ledger.refund_available(withdrawal.creator_id, withdrawal.amount)

            creator = await self.unit_of_work.accounts.get_by_id(withdrawal.creator_id)
            await self.unit_of_work.commit()

        for event in withdrawal.get_events():
            logger.info("Withdrawal event: %s", event)

        approved = withdrawal.status == WithdrawalStatus.COMPLETED
        creator_email = creator.email if creator else str(withdrawal.creator_id)
        await self.activity_logger.admin_action(
            admin_id,
            WITHDRAWAL_APPROVED if approved else WITHDRAWAL_REJECTED,
            f"{'Approved' if approved else 'Rejected'} withdrawal of ${withdrawal.amount.amount} "
            f"for creator: {creator_email}",
            metadata={
                "withdrawalId": str(withdrawal.id),
                "amount": float(withdrawal.amount.amount),
                "creatorId": str(withdrawal.creator_id),
                "adminNotes": request.admin_notes,
            },
            client=client,
        )
        return WithdrawalDto.from_entity(withdrawal, creator)


class ListWithdrawalsUseCase:
    """Back-office list across all creators"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(
        self,
        search: Optional[str] = None,
        status: Optional[WithdrawalStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> Dict[str, Any]:
        async with self.unit_of_work:
            withdrawals = await self.unit_of_work.withdrawals.list_all(search, status, page, limit)
            creators = await self.unit_of_work.accounts.get_many(w.creator_id for w in withdrawals)
        return {
            "withdrawals": [WithdrawalDto.from_entity(w, creators.get(w.creator_id)).dump() for w in withdrawals],
            "pagination": pagination(page, limit, len(withdrawals)),
        }
