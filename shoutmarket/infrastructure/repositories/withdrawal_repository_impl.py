"""Withdrawal repository implementation using SQLAlchemy ORM"""

from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from ...domain.entities.withdrawal import Withdrawal
from ...domain.enums import WithdrawalStatus
from ...domain.repositories.withdrawal_repository import IWithdrawalRepository
from ...domain.value_objects.entity_ids import AccountId, WithdrawalId
from ...domain.value_objects.money import Money
from ...domain.value_objects.payout_method import BankPayoutMethod
from ..orm.account_model import AccountModel
from ..orm.withdrawal_model import WithdrawalModel

withdrawals_table = WithdrawalModel.__table__


class WithdrawalRepositoryImpl(IWithdrawalRepository):

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, withdrawal_id: WithdrawalId) -> Optional[Withdrawal]:
        model = self.session.get(WithdrawalModel, withdrawal_id.value)
        return self._map_to_entity(model) if model else None

    async def add(self, withdrawal: Withdrawal) -> Withdrawal:
        self.session.add(WithdrawalModel(
            id=withdrawal.id.value,
            creator_id=withdrawal.creator_id.value,
            amount=withdrawal.amount.amount,
            status=withdrawal.status.value,
            payout_method=withdrawal.payout_method.to_dict() if withdrawal.payout_method else None,
            admin_notes=withdrawal.admin_notes,
            processed_at=withdrawal.processed_at,
            created_at=withdrawal.created_at,
            updated_at=withdrawal.updated_at,
        ))
        self.session.flush()
        return withdrawal

    async def apply_decision(self, withdrawal: Withdrawal) -> bool:
        self.session.flush()
        result = self.session.execute(
            withdrawals_table.update()
            .where(
                withdrawals_table.c.id == withdrawal.id.value,
                withdrawals_table.c.status == WithdrawalStatus.PENDING.value,
            )
            .values(
                status=withdrawal.status.value,
                admin_notes=withdrawal.admin_notes,
                processed_at=withdrawal.processed_at,
                updated_at=withdrawal.updated_at,
            )
        )
        key = self.session.identity_key(WithdrawalModel, withdrawal.id.value)
        cached = self.session.identity_map.get(key)
        if cached is not None:
            self.session.expire(cached)
        return result.rowcount == 1

    async def list_for_creator(self, creator_id: AccountId, page: int = 1, limit: int = 20) -> List[Withdrawal]:
        models = (
            self.session.query(WithdrawalModel)
            .filter(WithdrawalModel.creator_id == creator_id.value)
            .order_by(desc(WithdrawalModel.created_at))
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [self._map_to_entity(model) for model in models]

    async def list_all(
        self,
        search: Optional[str] = None,
        status: Optional[WithdrawalStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> List[Withdrawal]:
        query = self.session.query(WithdrawalModel).join(AccountModel, WithdrawalModel.creator_id == AccountModel.id)
        if search:
            query = query.filter(AccountModel.display_name.ilike(f"%{search}%"))
        if status is not None:
            query = query.filter(WithdrawalModel.status == status.value)
        models = query.order_by(desc(WithdrawalModel.created_at)).offset((page - 1) * limit).limit(limit).all()
        return [self._map_to_entity(model) for model in models]

    def _map_to_entity(self, model: WithdrawalModel) -> Withdrawal:
        return Withdrawal(
            id=WithdrawalId(model.id),
            creator_id=AccountId(model.creator_id),
            amount=Money(model.amount),
            payout_method=BankPayoutMethod.from_dict(model.payout_method),
            status=WithdrawalStatus(model.status),
            admin_notes=model.admin_notes,
            processed_at=model.processed_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
