"""Catalog repository implementation using SQLAlchemy ORM"""

from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import asc, desc, func, or_
from sqlalchemy.orm import Session

from ...domain.entities.shoutout import Shoutout, ShoutoutType
from ...domain.enums import AccountRole, CreatorSort
from ...domain.repositories.shoutout_repository import IShoutoutRepository, Listing, ListingFilter
from ...domain.value_objects.entity_ids import AccountId, ShoutoutId, ShoutoutTypeId
from ...domain.value_objects.money import Money
from ..orm.account_model import AccountModel, CreatorProfileModel
from ..orm.shoutout_model import CreatorShoutoutModel, ShoutoutTypeModel
from .account_repository_impl import AccountRepositoryImpl


class ShoutoutRepositoryImpl(IShoutoutRepository):

    def __init__(self, session: Session):
        self.session = session
        self._accounts = AccountRepositoryImpl(session)

    async def list_types(self) -> List[ShoutoutType]:
        models = self.session.query(ShoutoutTypeModel).order_by(ShoutoutTypeModel.name).all()
        return [self._map_type(model) for model in models]

    async def get_type(self, type_id: ShoutoutTypeId) -> Optional[ShoutoutType]:
        model = self.session.get(ShoutoutTypeModel, type_id.value)
        return self._map_type(model) if model else None

    async def get_types(self, type_ids: Iterable[ShoutoutTypeId]) -> Dict[ShoutoutTypeId, ShoutoutType]:
        ids = {type_id.value for type_id in type_ids}
        if not ids:
            return {}
        models = self.session.query(ShoutoutTypeModel).filter(ShoutoutTypeModel.id.in_(ids)).all()
        return {ShoutoutTypeId(model.id): self._map_type(model) for model in models}

    async def get_type_by_name(self, name: str) -> Optional[ShoutoutType]:
        model = self.session.query(ShoutoutTypeModel).filter(ShoutoutTypeModel.name == name).first()
        return self._map_type(model) if model else None

    async def add_type(self, shoutout_type: ShoutoutType) -> ShoutoutType:
        self.session.add(ShoutoutTypeModel(
            id=shoutout_type.id.value,
            name=shoutout_type.name,
            description=shoutout_type.description,
            created_at=shoutout_type.created_at,
        ))
        self.session.flush()
        return shoutout_type

    async def get_by_id(self, shoutout_id: ShoutoutId) -> Optional[Shoutout]:
        model = self.session.get(CreatorShoutoutModel, shoutout_id.value)
        return self._map_to_entity(model) if model else None

    async def get_many(self, shoutout_ids: Iterable[ShoutoutId]) -> Dict[ShoutoutId, Shoutout]:
        ids = {shoutout_id.value for shoutout_id in shoutout_ids}
        if not ids:
            return {}
        models = self.session.query(CreatorShoutoutModel).filter(CreatorShoutoutModel.id.in_(ids)).all()
        return {ShoutoutId(model.id): self._map_to_entity(model) for model in models}

    async def list_by_creator(self, creator_id: AccountId, active_only: bool = False) -> List[Shoutout]:
        query = self.session.query(CreatorShoutoutModel).filter(
            CreatorShoutoutModel.creator_id == creator_id.value
        )
        if active_only:
            query = query.filter(CreatorShoutoutModel.is_active.is_(True))
        models = query.order_by(asc(CreatorShoutoutModel.price)).all()
        return [self._map_to_entity(model) for model in models]

    async def add(self, shoutout: Shoutout) -> Shoutout:
        model = CreatorShoutoutModel(
            id=shoutout.id.value,
            creator_id=shoutout.creator_id.value,
            created_at=shoutout.created_at,
        )
        self._update_model_from_entity(model, shoutout)
        self.session.add(model)
        self.session.flush()
        return shoutout

    async def update(self, shoutout: Shoutout) -> Shoutout:
        model = self.session.get(CreatorShoutoutModel, shoutout.id.value)
        if model:
            self._update_model_from_entity(model, shoutout)
            self.session.flush()
        return shoutout

    async def search_listings(self, criteria: ListingFilter) -> Tuple[List[Listing], int]:
        query = (
            self.session.query(AccountModel, CreatorShoutoutModel, ShoutoutTypeModel)
            .join(CreatorShoutoutModel, CreatorShoutoutModel.creator_id == AccountModel.id)
            .join(ShoutoutTypeModel, CreatorShoutoutModel.shoutout_type_id == ShoutoutTypeModel.id)
            .join(CreatorProfileModel, CreatorProfileModel.account_id == AccountModel.id)
            .filter(
                AccountModel.role == AccountRole.CREATOR.value,
                CreatorShoutoutModel.is_active.is_(True)
            )
        )

        if criteria.query:
            pattern = f"%{criteria.query}%"
            query = query.filter(or_(
                AccountModel.display_name.ilike(pattern),
                AccountModel.first_name.ilike(pattern),
                AccountModel.last_name.ilike(pattern)
            ))
        if criteria.shoutout_type_id is not None:
            query = query.filter(CreatorShoutoutModel.shoutout_type_id == criteria.shoutout_type_id.value)
        if criteria.min_price is not None:
            query = query.filter(CreatorShoutoutModel.price >= criteria.min_price)
        if criteria.max_price is not None:
            query = query.filter(CreatorShoutoutModel.price <= criteria.max_price)
        if criteria.max_delivery_time is not None:
            query = query.filter(CreatorShoutoutModel.delivery_time <= criteria.max_delivery_time)

        total = query.with_entities(func.count(CreatorShoutoutModel.id)).scalar() or 0

        rows = (
            query.order_by(*self._ordering(criteria.sort_by))
            .offset((criteria.page - 1) * criteria.limit)
            .limit(criteria.limit)
            .all()
        )
        listings = [
            (self._accounts._map_to_entity(account), self._map_to_entity(shoutout), self._map_type(shoutout_type))
            for account, shoutout, shoutout_type in rows
        ]
        return listings, total

    @staticmethod
    def _ordering(sort_by: Optional[CreatorSort]) -> tuple:
        if sort_by == CreatorSort.PRICE_ASC:
            return (asc(CreatorShoutoutModel.price),)
        if sort_by == CreatorSort.PRICE_DESC:
            return (desc(CreatorShoutoutModel.price),)
        if sort_by == CreatorSort.DELIVERY_TIME:
            return (asc(CreatorShoutoutModel.delivery_time),)
        if sort_by == CreatorSort.NEWEST:
            return (desc(AccountModel.created_at),)
        # No ratings are stored, so "rating" falls back to sponsored creators first
        return (desc(CreatorProfileModel.is_sponsored), desc(AccountModel.created_at))

    def _update_model_from_entity(self, model: CreatorShoutoutModel, shoutout: Shoutout) -> None:
        model.shoutout_type_id = shoutout.shoutout_type_id.value
        model.title = shoutout.title
        model.description = shoutout.description
        model.price = shoutout.price.amount
        model.delivery_time = shoutout.delivery_time
        model.is_active = shoutout.is_active
        model.updated_at = shoutout.updated_at

    def _map_type(self, model: ShoutoutTypeModel) -> ShoutoutType:
        return ShoutoutType(
            id=ShoutoutTypeId(model.id),
            name=model.name,
            description=model.description,
            created_at=model.created_at,
        )

    def _map_to_entity(self, model: CreatorShoutoutModel) -> Shoutout:
        return Shoutout(
            id=ShoutoutId(model.id),
            creator_id=AccountId(model.creator_id),
            shoutout_type_id=ShoutoutTypeId(model.shoutout_type_id),
            title=model.title,
            description=model.description,
            price=Money(model.price),
            delivery_time=model.delivery_time,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
