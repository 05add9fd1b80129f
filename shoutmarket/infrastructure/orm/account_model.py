"""Account ORM Models"""

from sqlalchemy import (
    Boolean, CheckConstraint, Column, Date, DateTime, ForeignKey, JSON, Numeric, String, Text, UniqueConstraint, Uuid, text
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from uuid import uuid4

from ...db.models import Base


class AccountModel(Base):
    __tablename__ = 'accounts'
    __table_args__ = (
        UniqueConstraint('email', 'role', name='uq_accounts_email_role'),
        UniqueConstraint('display_name', 'role', name='uq_accounts_display_name_role'),
    )

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    role = Column(String(20), nullable=False, index=True)  # user | creator | admin

    email = Column(String(255), nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    display_name = Column(String(50), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    country = Column(String(100), nullable=True)
    avatar = Column(String, nullable=True)  # storage key
    is_verified = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    creator_profile = relationship(
        'CreatorProfileModel',
        back_populates='account',
        uselist=False,
        lazy='joined',
        cascade='all, delete-orphan'
    )


class CreatorProfileModel(Base):
    __tablename__ = 'creator_profiles'
    __table_args__ = (
        CheckConstraint('available_balance >= 0', name='ck_creator_profiles_available_non_negative'),
    )

    account_id = Column(Uuid, ForeignKey('accounts.id', ondelete='CASCADE'), primary_key=True)
    bio = Column(Text, nullable=True)
    is_sponsored = Column(Boolean, default=False, nullable=False)
    commission_rate = Column(Numeric(5, 2), default=15.00, server_default=text('15.00'), nullable=False)
    withdrawal_permission = Column(Boolean, default=True, nullable=False)

    # Ledger columns; written only through atomic UPDATE statements
    total_earnings = Column(Numeric(12, 2), default=0, server_default=text('0'), nullable=False)
    available_balance = Column(Numeric(12, 2), default=0, server_default=text('0'), nullable=False)

    payout_method = Column(JSON, nullable=True)

    account = relationship('AccountModel', back_populates='creator_profile')
