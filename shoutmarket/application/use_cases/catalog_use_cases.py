"""Catalog use cases: shoutout types, creator search and listing management"""

import logging
from collections import OrderedDict
from typing import Any, Dict, List

from ...core.errors import NotFoundError, ValidationError
from ...domain.entities.shoutout import Shoutout, ShoutoutType
from ...domain.enums import AccountRole
from ...domain.repositories.shoutout_repository import ListingFilter
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import AccountId, ShoutoutId, ShoutoutTypeId
from ..dtos.account_dtos import PublicCreatorDto
from ..dtos.catalog_dtos import (
    CreatorSearchDto, ShoutoutCreateDto, ShoutoutDto, ShoutoutTypeDto, ShoutoutUpdateDto
)
from ..dtos.common import pagination

logger = logging.getLogger(__name__)

DEFAULT_SHOUTOUT_TYPES = (
    ("Video Shoutout", "Personalized video message"),
    ("Audio Shoutout", "Personalized audio message"),
    ("Social Media Post", "Shoutout posted on the creator's social media"),
    ("Live Stream Mention", "Mention during a live stream"),
    ("Custom Content", "Custom content tailored to the request"),
    ("Brand Endorsement", "Promotion of a product or brand"),
)


async def seed_shoutout_types(unit_of_work: IUnitOfWork) -> int:
    """Insert any missing default types; returns how many were added"""
    added = 0
    async with unit_of_work:
        for name, description in DEFAULT_SHOUTOUT_TYPES:
            if await unit_of_work.shoutouts.get_type_by_name(name):
                continue
            await unit_of_work.shoutouts.add_type(
                ShoutoutType(id=ShoutoutTypeId.generate(), name=name, description=description)
            )
            added += 1
        await unit_of_work.commit()

    if added:
        logger.info("Seeded %d shoutout types", added)
    return added


class ListShoutoutTypesUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self) -> List[ShoutoutTypeDto]:
        async with self.unit_of_work:
            types = await self.unit_of_work.shoutouts.list_types()
        return [ShoutoutTypeDto.from_entity(shoutout_type) for shoutout_type in types]


class SearchCreatorsUseCase:
    """Listing search grouped by creator, in first-seen order"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, request: CreatorSearchDto) -> Dict[str, Any]:
        criteria = ListingFilter(
            query=request.query,
            shoutout_type_id=ShoutoutTypeId(request.shoutout_type) if request.shoutout_type else None,
            min_price=request.min_price,
            max_price=request.max_price,
            max_delivery_time=request.max_delivery_time,
            sort_by=request.sort_by,
            page=request.page,
            limit=request.limit,
        )
        async with self.unit_of_work:
            listings, total = await self.unit_of_work.shoutouts.search_listings(criteria)

        creators: "OrderedDict[AccountId, Dict[str, Any]]" = OrderedDict()
        for account, shoutout, shoutout_type in listings:
            if account.id not in creators:
                creators[account.id] = {**PublicCreatorDto.from_entity(account).dump(), "shoutouts": []}
            creators[account.id]["shoutouts"].append(ShoutoutDto.from_entity(shoutout, shoutout_type).dump())

        return {
            "creators": list(creators.values()),
            "pagination": pagination(request.page, request.limit, len(listings), total=total),
        }


class GetCreatorProfileUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, creator_id: AccountId) -> Dict[str, Any]:
        async with self.unit_of_work:
            creator = await self.unit_of_work.accounts.get_by_id(creator_id)
            if not creator or creator.role != AccountRole.CREATOR:
                raise NotFoundError("Creator not found")

            shoutouts = await self.unit_of_work.shoutouts.list_by_creator(creator_id, active_only=True)
            types = await self.unit_of_work.shoutouts.get_types(s.shoutout_type_id for s in shoutouts)

        return {
            "creator": PublicCreatorDto.from_entity(creator).dump(),
            "shoutouts": [ShoutoutDto.from_entity(s, types.get(s.shoutout_type_id)).dump() for s in shoutouts],
        }


class ManageShoutoutsUseCase:
    """A creator's own listings; other creators' rows read as missing"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def list_own(self, creator_id: AccountId) -> List[ShoutoutDto]:
        async with self.unit_of_work:
            shoutouts = await self.unit_of_work.shoutouts.list_by_creator(creator_id)
            types = await self.unit_of_work.shoutouts.get_types(s.shoutout_type_id for s in shoutouts)
        return [ShoutoutDto.from_entity(s, types.get(s.shoutout_type_id)) for s in shoutouts]

    async def get(self, creator_id: AccountId, shoutout_id: ShoutoutId) -> ShoutoutDto:
        async with self.unit_of_work:
            shoutout = await self._owned(creator_id, shoutout_id)
            shoutout_type = await self.unit_of_work.shoutouts.get_type(shoutout.shoutout_type_id)
        return ShoutoutDto.from_entity(shoutout, shoutout_type)

    async def create(self, creator_id: AccountId, request: ShoutoutCreateDto) -> ShoutoutDto:
        async with self.unit_of_work:
            shoutout_type = await self._type(ShoutoutTypeId(request.shoutout_type_id))
            shoutout = Shoutout.create(
                creator_id=creator_id,
                shoutout_type_id=shoutout_type.id,
                title=request.title,
                description=request.description,
                price=request.price,
                delivery_time=request.delivery_time,
            )
            await self.unit_of_work.shoutouts.add(shoutout)
            await self.unit_of_work.commit()
        return ShoutoutDto.from_entity(shoutout, shoutout_type)

    async def update(self, creator_id: AccountId, shoutout_id: ShoutoutId, request: ShoutoutUpdateDto) -> ShoutoutDto:
        async with self.unit_of_work:
            shoutout = await self._owned(creator_id, shoutout_id)
            type_id = ShoutoutTypeId(request.shoutout_type_id) if request.shoutout_type_id else None
            if type_id is not None:
                await self._type(type_id)

            shoutout.update(
                shoutout_type_id=type_id,
                title=request.title,
                description=request.description,
                price=request.price,
                delivery_time=request.delivery_time,
                is_active=request.is_active,
            )
            await self.unit_of_work.shoutouts.update(shoutout)
            shoutout_type = await self.unit_of_work.shoutouts.get_type(shoutout.shoutout_type_id)
            await self.unit_of_work.commit()
        return ShoutoutDto.from_entity(shoutout, shoutout_type)

    async def delete(self, creator_id: AccountId, shoutout_id: ShoutoutId) -> None:
        async with self.unit_of_work:
            shoutout = await self._owned(creator_id, shoutout_id)
            shoutout.deactivate()
            await self.unit_of_work.shoutouts.update(shoutout)
            await self.unit_of_work.commit()

    async def _owned(self, creator_id: AccountId, shoutout_id: ShoutoutId) -> Shoutout:
        shoutout = await self.unit_of_work.shoutouts.get_by_id(shoutout_id)
        if not shoutout or shoutout.creator_id != creator_id:
            raise NotFoundError("Shoutout not found")
        return shoutout

    async def _type(self, type_id: ShoutoutTypeId) -> ShoutoutType:
        shoutout_type = await self.unit_of_work.shoutouts.get_type(type_id)
        if not shoutout_type:
            raise ValidationError("Invalid shoutout type")
        return shoutout_type
