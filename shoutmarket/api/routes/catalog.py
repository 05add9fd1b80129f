"""Public catalog: shoutout types and creator discovery"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_unit_of_work
from ...application.dtos.catalog_dtos import CreatorSearchDto
from ...application.use_cases.catalog_use_cases import (
    GetCreatorProfileUseCase, ListShoutoutTypesUseCase, SearchCreatorsUseCase
)
from ...domain.enums import CreatorSort
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import AccountId

router = APIRouter()


@router.get("/shoutout-types")
async def list_shoutout_types(unit_of_work: IUnitOfWork = Depends(get_unit_of_work)):
    types = await ListShoutoutTypesUseCase(unit_of_work).execute()
    return {"success": True, "shoutoutTypes": [t.dump() for t in types]}


@router.get("/creators")
async def search_creators(
    query: Optional[str] = None,
    shoutout_type: Optional[UUID] = Query(None, alias="shoutoutType"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    max_delivery_time: Optional[int] = Query(None, alias="maxDeliveryTime", ge=1),
    sort_by: Optional[CreatorSort] = Query(None, alias="sortBy"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=50),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Search active listings, grouped by creator"""
    request = CreatorSearchDto(
        query=query,
        shoutout_type=shoutout_type,
        min_price=min_price,
        max_price=max_price,
        max_delivery_time=max_delivery_time,
        sort_by=sort_by,
        page=page,
        limit=limit,
    )
    result = await SearchCreatorsUseCase(unit_of_work).execute(request)
    return {"success": True, **result}


@router.get("/creators/{creator_id}")
async def get_creator(creator_id: UUID, unit_of_work: IUnitOfWork = Depends(get_unit_of_work)):
    """Public creator profile with active shoutouts"""
    result = await GetCreatorProfileUseCase(unit_of_work).execute(AccountId(creator_id))
    return {"success": True, **result}
