"""Account entity: one identity shape for users, creators and admins.

``role`` is the discriminant. Creators carry a ``CreatorProfile`` holding the
seller-only data (bio, commission rate, ledger balances, payout method); the
other roles never have one.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ...core.errors import ForbiddenError, ValidationError
from ..enums import AccountRole
from ..value_objects.entity_ids import AccountId
from ..value_objects.money import Money, to_decimal
from ..value_objects.payout_method import BankPayoutMethod


MAX_COMMISSION_RATE = Decimal("50.00")


@dataclass
class CreatorProfile:
    bio: Optional[str] = None
    is_sponsored: bool = False
    commission_rate: Decimal = Decimal("15.00")
    withdrawal_permission: bool = True
    # Read-only snapshots; the ledger repository owns every balance write
    total_earnings: Money = field(default_factory=Money.zero)
    available_balance: Money = field(default_factory=Money.zero)
    payout_method: Optional[BankPayoutMethod] = None

    def set_commission_rate(self, rate: Decimal) -> None:
        rate = to_decimal(rate)
        if rate < 0 or rate > MAX_COMMISSION_RATE:
            raise ValidationError(f"Commission rate must be between 0 and {MAX_COMMISSION_RATE}")
        self.commission_rate = rate


@dataclass
class Account:
    id: AccountId
    role: AccountRole
    email: str
    hashed_password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    country: Optional[str] = None
    avatar: Optional[str] = None
    is_verified: bool = False
    creator_profile: Optional[CreatorProfile] = None

    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if (self.role == AccountRole.CREATOR) != (self.creator_profile is not None):
            raise ValueError("Creator accounts, and only creator accounts, carry a creator profile")

    @classmethod
    def register(
        cls,
        role: AccountRole,
        email: str,
        hashed_password: str,
        first_name: str,
        last_name: str,
        display_name: str,
        date_of_birth: Optional[date] = None,
        country: Optional[str] = None,
        commission_rate: Decimal = Decimal("15.00"),
    ) -> 'Account':
        """Factory for self-registered buyers and sellers"""
        if role == AccountRole.ADMIN:
            raise ValueError("Admins are provisioned through bootstrap, not registration")

        profile = CreatorProfile(commission_rate=to_decimal(commission_rate)) if role == AccountRole.CREATOR else None
        return cls(
            id=AccountId.generate(),
            role=role,
            email=email.lower(),
            hashed_password=hashed_password,
            first_name=first_name,
            last_name=last_name,
            display_name=display_name,
            date_of_birth=date_of_birth,
            country=country,
            creator_profile=profile,
        )

    @classmethod
    def create_admin(
        cls,
        email: str,
        hashed_password: str,
        first_name: str = "Admin",
        last_name: str = "User",
    ) -> 'Account':
        return cls(
            id=AccountId.generate(),
            role=AccountRole.ADMIN,
            email=email.lower(),
            hashed_password=hashed_password,
            first_name=first_name,
            last_name=last_name,
            is_verified=True,
        )

    def update_profile(
        self,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        display_name: Optional[str] = None,
        country: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> None:
        """Self-service profile edit; ``None`` leaves a field untouched"""
        if first_name is not None:
            self.first_name = first_name
        if last_name is not None:
            self.last_name = last_name
        if display_name is not None:
            self.display_name = display_name
        if country is not None:
            self.country = country
        if bio is not None:
            self.require_creator_profile().bio = bio
        self.touch()

    def change_password(self, new_hashed_password: str) -> None:
        self.hashed_password = new_hashed_password
        self.touch()

    def set_avatar(self, key: Optional[str]) -> Optional[str]:
        """Replace the avatar key and return the previous one"""
        previous = self.avatar
        self.avatar = key
        self.touch()
        return previous

    def set_payout_method(self, payout_method: BankPayoutMethod) -> None:
        self.require_creator_profile().payout_method = payout_method
        self.touch()

    def require_creator_profile(self) -> CreatorProfile:
        if self.creator_profile is None:
            raise ForbiddenError("Only creators have a seller profile")
        return self.creator_profile

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()

    @property
    def full_name(self) -> str:
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name or self.last_name or self.email

    @property
    def is_creator(self) -> bool:
        return self.role == AccountRole.CREATOR

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN
