"""Account repository implementation using SQLAlchemy ORM"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import desc, func, or_
from sqlalchemy.orm import Session

from ...domain.entities.account import Account, CreatorProfile
from ...domain.enums import AccountRole
from ...domain.repositories.account_repository import IAccountRepository
from ...domain.value_objects.entity_ids import AccountId
from ...domain.value_objects.money import Money
from ...domain.value_objects.payout_method import BankPayoutMethod
from ..orm.account_model import AccountModel, CreatorProfileModel


class AccountRepositoryImpl(IAccountRepository):
    """Repository implementation for the Account aggregate"""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, account_id: AccountId) -> Optional[Account]:
        model = self.session.get(AccountModel, account_id.value)
        return self._map_to_entity(model) if model else None

    async def get_many(self, account_ids: Iterable[AccountId]) -> Dict[AccountId, Account]:
        ids = {account_id.value for account_id in account_ids}
        if not ids:
            return {}
        models = self.session.query(AccountModel).filter(AccountModel.id.in_(ids)).all()
        return {AccountId(model.id): self._map_to_entity(model) for model in models}

    async def get_by_email(self, email: str, role: AccountRole) -> Optional[Account]:
        model = self.session.query(AccountModel).filter(
            func.lower(AccountModel.email) == email.lower(),
            AccountModel.role == role.value
        ).first()
        return self._map_to_entity(model) if model else None

    async def exists_by_email(self, email: str, role: AccountRole) -> bool:
        return self.session.query(
            self.session.query(AccountModel).filter(
                func.lower(AccountModel.email) == email.lower(),
                AccountModel.role == role.value
            ).exists()
        ).scalar()

    async def exists_by_display_name(
        self,
        display_name: str,
        role: AccountRole,
        exclude_id: Optional[AccountId] = None
    ) -> bool:
        query = self.session.query(AccountModel).filter(
            AccountModel.display_name == display_name,
            AccountModel.role == role.value
        )
        if exclude_id is not None:
            query = query.filter(AccountModel.id != exclude_id.value)
        return self.session.query(query.exists()).scalar()

    async def add(self, account: Account) -> Account:
        model = AccountModel(id=account.id.value, role=account.role.value)
        self._update_model_from_entity(model, account)
        model.created_at = account.created_at

        if account.creator_profile is not None:
            model.creator_profile = CreatorProfileModel(
                total_earnings=account.creator_profile.total_earnings.amount,
                available_balance=account.creator_profile.available_balance.amount,
            )
            self._update_profile_from_entity(model.creator_profile, account.creator_profile)

        self.session.add(model)
        self.session.flush()
        return account

    async def update(self, account: Account) -> Account:
        model = self.session.get(AccountModel, account.id.value)
        if model:
            self._update_model_from_entity(model, account)
            if model.creator_profile is not None and account.creator_profile is not None:
                self._update_profile_from_entity(model.creator_profile, account.creator_profile)
            self.session.flush()
        return account

    async def count_by_role(self, role: AccountRole) -> int:
        return self.session.query(AccountModel).filter(AccountModel.role == role.value).count()

    async def list_by_role(
        self,
        role: AccountRole,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> List[Account]:
        query = self.session.query(AccountModel).filter(AccountModel.role == role.value)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                AccountModel.display_name.ilike(pattern),
                AccountModel.email.ilike(pattern)
            ))
        models = query.order_by(desc(AccountModel.created_at)).offset((page - 1) * limit).limit(limit).all()
        return [self._map_to_entity(model) for model in models]

    def _update_model_from_entity(self, model: AccountModel, account: Account) -> None:
        model.email = account.email
        model.hashed_password = account.hashed_password
        model.first_name = account.first_name
        model.last_name = account.last_name
        model.display_name = account.display_name
        model.date_of_birth = account.date_of_birth
        model.country = account.country
        model.avatar = account.avatar
        model.is_verified = account.is_verified
        model.updated_at = account.updated_at

    def _update_profile_from_entity(self, model: CreatorProfileModel, profile: CreatorProfile) -> None:
        # total_earnings / available_balance are deliberately left alone
        model.bio = profile.bio
        model.is_sponsored = profile.is_sponsored
        model.commission_rate = profile.commission_rate
        model.withdrawal_permission = profile.withdrawal_permission
        model.payout_method = profile.payout_method.to_dict() if profile.payout_method else None

    def _map_to_entity(self, model: AccountModel) -> Account:
        profile = None
        if model.creator_profile is not None:
            p = model.creator_profile
            profile = CreatorProfile(
                bio=p.bio,
                is_sponsored=p.is_sponsored,
                commission_rate=p.commission_rate,
                withdrawal_permission=p.withdrawal_permission,
                total_earnings=Money(p.total_earnings or 0),
                available_balance=Money(p.available_balance or 0),
                payout_method=BankPayoutMethod.from_dict(p.payout_method),
            )

        return Account(
            id=AccountId(model.id),
            role=AccountRole(model.role),
            email=model.email,
            hashed_password=model.hashed_password,
            first_name=model.first_name,
            last_name=model.last_name,
            display_name=model.display_name,
            date_of_birth=model.date_of_birth,
            country=model.country,
            avatar=model.avatar,
            is_verified=model.is_verified,
            creator_profile=profile,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
