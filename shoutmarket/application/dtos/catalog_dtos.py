"""Catalog DTOs"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field

from ...domain.entities.shoutout import Shoutout, ShoutoutType
from ...domain.enums import CreatorSort
from .common import CamelModel


class ShoutoutCreateDto(CamelModel):
    shoutout_type_id: UUID
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    price: Decimal = Field(..., ge=1, le=10000)
    delivery_time: int = Field(..., ge=1, le=720)


class ShoutoutUpdateDto(CamelModel):
    shoutout_type_id: Optional[UUID] = None
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    price: Optional[Decimal] = Field(None, ge=1, le=10000)
    delivery_time: Optional[int] = Field(None, ge=1, le=720)
    is_active: Optional[bool] = None


class CreatorSearchDto(CamelModel):
    query: Optional[str] = None
    shoutout_type: Optional[UUID] = None
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)
    max_delivery_time: Optional[int] = Field(None, ge=1)
    sort_by: Optional[CreatorSort] = None
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=50)


class ShoutoutTypeDto(CamelModel):
    id: UUID
    name: str
    description: Optional[str] = None

    @classmethod
    def from_entity(cls, shoutout_type: ShoutoutType) -> 'ShoutoutTypeDto':
        return cls(id=shoutout_type.id.value, name=shoutout_type.name, description=shoutout_type.description)


class ShoutoutDto(CamelModel):
    id: UUID
    creator_id: UUID
    shoutout_type_id: UUID
    title: str
    description: str
    price: Decimal
    delivery_time: int
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    shoutout_type: Optional[ShoutoutTypeDto] = None

    @classmethod
    def from_entity(cls, shoutout: Shoutout, shoutout_type: Optional[ShoutoutType] = None) -> 'ShoutoutDto':
        return cls(
            id=shoutout.id.value,
            creator_id=shoutout.creator_id.value,
            shoutout_type_id=shoutout.shoutout_type_id.value,
            title=shoutout.title,
            description=shoutout.description,
            price=shoutout.price.amount,
            delivery_time=shoutout.delivery_time,
            is_active=shoutout.is_active,
            created_at=shoutout.created_at,
            updated_at=shoutout.updated_at,
            shoutout_type=ShoutoutTypeDto.from_entity(shoutout_type) if shoutout_type else None,
        )
