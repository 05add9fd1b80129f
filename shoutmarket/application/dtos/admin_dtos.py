"""Back-office DTOs"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import Field

from ...domain.entities.activity_log import ActivityLogEntry
from ...domain.enums import SettingType
from ...domain.repositories.site_setting_repository import SiteSetting
from .common import CamelModel


class AdminUserUpdateDto(CamelModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    is_verified: Optional[bool] = None


class AdminCreatorUpdateDto(AdminUserUpdateDto):
    is_sponsored: Optional[bool] = None
    commission_rate: Optional[Decimal] = Field(None, ge=0, le=50)
    withdrawal_permission: Optional[bool] = None


class SiteSettingDto(CamelModel):
    key: str = Field(..., min_length=1)
    value: str
    type: SettingType = SettingType.STRING
    description: Optional[str] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, setting: SiteSetting) -> 'SiteSettingDto':
        return cls(
            key=setting.key,
            value=setting.value,
            type=setting.type,
            description=setting.description,
            updated_at=setting.updated_at,
        )


class ActivityLogDto(CamelModel):
    id: UUID
    user_type: str
    user_id: Optional[UUID] = None
    action: str
    description: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, entry: ActivityLogEntry) -> 'ActivityLogDto':
        return cls(
            id=entry.id,
            user_type=entry.user_type.value,
            user_id=entry.user_id,
            action=entry.action,
            description=entry.description,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            metadata=entry.metadata,
            created_at=entry.created_at,
        )
