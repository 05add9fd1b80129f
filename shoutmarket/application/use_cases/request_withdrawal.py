"""Creator withdrawal requests"""

import logging
from typing import Any, Dict, Optional

from ...core.config import settings
from ...core.errors import ForbiddenError, InsufficientBalanceError, NotFoundError
from ...domain.entities.withdrawal import Withdrawal
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import AccountId
from ...domain.value_objects.money import Money
from ..dtos.common import pagination
from ..dtos.withdrawal_dtos import WithdrawalDto, WithdrawalRequestDto
from ..services.activity_logger import ActivityLogger, ClientInfo

logger = logging.getLogger(__name__)


class RequestWithdrawalUseCase:
    """Debit the available balance and open a pending withdrawal in one transaction"""

    def __init__(self, unit_of_work: IUnitOfWork, activity_logger: ActivityLogger):
        self.unit_of_work = unit_of_work
        self.activity_logger = activity_logger

    async def execute(
        self,
        creator_id: AccountId,
        request: WithdrawalRequestDto,
        client: Optional[ClientInfo] = None
    ) -> WithdrawalDto:
        amount = Money(request.amount)
        withdrawal = Withdrawal.request(
            creator_id=creator_id,
            amount=amount,
            payout_method=request.payout_method.to_value_object(),
            minimum=settings.MIN_WITHDRAWAL_AMOUNT,
        )

        async with self.unit_of_work:
            creator = await self.unit_of_work.accounts.get_by_id(creator_id)
            if not creator or creator.creator_profile is None:
                raise NotFoundError("Creator not found")
            if not creator.creator_profile.withdrawal_permission:
                raise ForbiddenError("Withdrawal permission is disabled")

            if not await self.unit_of_work.ledger.debit_available(creator_id, amount):
                # The guarded debit covers both conditions; re-read to say which one failed
                creator = await self.unit_of_work.accounts.get_by_id(creator_id)
                if not creator.creator_profile.withdrawal_permission:
                    raise ForbiddenError("Withdrawal permission is disabled")
                raise InsufficientBalanceError("Insufficient balance")

            await self.unit_of_work.withdrawals.add(withdrawal)
            await self.unit_of_work.commit()

        for event in withdrawal.get_events():
            logger.info("Withdrawal event: %s", event)
        await self.activity_logger.withdrawal_requested(creator_id, withdrawal.id, amount, client)
        return WithdrawalDto.from_entity(withdrawal)


class ListCreatorWithdrawalsUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, creator_id: AccountId, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        async with self.unit_of_work:
            withdrawals = await self.unit_of_work.withdrawals.list_for_creator(creator_id, page, limit)
        return {
            "withdrawals": [WithdrawalDto.from_entity(w).dump() for w in withdrawals],
            "pagination": pagination(page, limit, len(withdrawals)),
        }
