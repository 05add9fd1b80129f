"""Account DTOs for API layer"""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from ...domain.entities.account import Account
from ...domain.enums import UploadPurpose
from .common import CamelModel

DISPLAY_NAME_PATTERN = r"^[a-zA-Z0-9_]+$"
MIN_AGE_YEARS = 13


def check_password_strength(value: str) -> str:
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters")
    if not (re.search(r"[a-z]", value) and re.search(r"[A-Z]", value) and re.search(r"\d", value)):
        raise ValueError(
            "Password must contain at least one lowercase letter, one uppercase letter, and one number"
        )
    return value


class RegisterDto(CamelModel):
    """User and creator self-registration"""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    display_name: str = Field(..., min_length=3, max_length=50, pattern=DISPLAY_NAME_PATTERN)
    email: EmailStr
    password: str
    date_of_birth: date
    country: str = Field(..., min_length=1)
    turnstile_token: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: str) -> str:
        return check_password_strength(value)

    @field_validator("date_of_birth")
    @classmethod
    def old_enough(cls, value: date) -> date:
        # Calendar-year difference, matching how signups were always checked
        if date.today().year - value.year < MIN_AGE_YEARS:
            raise ValueError("You must be at least 13 years old")
        return value


class LoginDto(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    turnstile_token: str = Field(..., min_length=1)


class AdminLoginDto(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class BootstrapAdminDto(CamelModel):
    email: EmailStr
    password: str
    first_name: str = "Admin"
    last_name: str = "User"

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: str) -> str:
        return check_password_strength(value)


class ProfileUpdateDto(CamelModel):
    """``bio`` is only accepted for creators"""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    display_name: Optional[str] = Field(None, min_length=3, max_length=50, pattern=DISPLAY_NAME_PATTERN)
    country: Optional[str] = Field(None, min_length=1)
    bio: Optional[str] = Field(None, max_length=1000)


class PasswordChangeDto(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def strong_password(cls, value: str) -> str:
        return check_password_strength(value)


class UploadUrlRequestDto(CamelModel):
    content_type: Optional[str] = None
    purpose: UploadPurpose = UploadPurpose.DELIVERY


class AvatarUpdateDto(CamelModel):
    file_key: str = Field(..., min_length=1)


class AccountSummaryDto(CamelModel):
    """Counterparty view embedded in orders and withdrawals"""
    id: UUID
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None
    is_verified: bool = False

    @classmethod
    def from_entity(cls, account: Account, include_email: bool = False) -> 'AccountSummaryDto':
        return cls(
            id=account.id.value,
            display_name=account.display_name,
            first_name=account.first_name,
            last_name=account.last_name,
            email=account.email if include_email else None,
            avatar=account.avatar,
            is_verified=account.is_verified,
        )


class AccountDto(CamelModel):
    """Full self view; creator-only fields stay null for other roles"""
    id: UUID
    role: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    country: Optional[str] = None
    avatar: Optional[str] = None
    is_verified: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    bio: Optional[str] = None
    is_sponsored: Optional[bool] = None
    commission_rate: Optional[Decimal] = None
    withdrawal_permission: Optional[bool] = None
    total_earnings: Optional[Decimal] = None
    available_balance: Optional[Decimal] = None
    payout_method: Optional[Dict[str, Any]] = None

    @classmethod
    def from_entity(cls, account: Account) -> 'AccountDto':
        dto = cls(
            id=account.id.value,
            role=account.role.value,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            display_name=account.display_name,
            date_of_birth=account.date_of_birth,
            country=account.country,
            avatar=account.avatar,
            is_verified=account.is_verified,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
        profile = account.creator_profile
        if profile is not None:
            dto.bio = profile.bio
            dto.is_sponsored = profile.is_sponsored
            dto.commission_rate = profile.commission_rate
            dto.withdrawal_permission = profile.withdrawal_permission
            dto.total_earnings = profile.total_earnings.amount
            dto.available_balance = profile.available_balance.amount
            dto.payout_method = profile.payout_method.to_dict() if profile.payout_method else None
        return dto


class PublicCreatorDto(CamelModel):
    """What buyers see on a creator's page"""
    id: UUID
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    country: Optional[str] = None
    is_verified: bool = False
    is_sponsored: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, account: Account) -> 'PublicCreatorDto':
        profile = account.require_creator_profile()
        return cls(
            id=account.id.value,
            display_name=account.display_name,
            first_name=account.first_name,
            last_name=account.last_name,
            avatar=account.avatar,
            bio=profile.bio,
            country=account.country,
            is_verified=account.is_verified,
            is_sponsored=profile.is_sponsored,
            created_at=account.created_at,
        )


class AuthResponseDto(CamelModel):
    account: AccountDto
    token: str
