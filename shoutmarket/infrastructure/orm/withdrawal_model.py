"""Withdrawal ORM Model"""

from sqlalchemy import Column, DateTime, ForeignKey, JSON, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from uuid import uuid4

from ...db.models import Base
from ...domain.enums import WithdrawalStatus


class WithdrawalModel(Base):
    __tablename__ = 'withdrawals'

    id = Column(Uuid, primary_key=True, default=uuid4)
    creator_id = Column(Uuid, ForeignKey('accounts.id'), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), default=WithdrawalStatus.PENDING.value, nullable=False, index=True)
    payout_method = Column(JSON, nullable=True)  # snapshot at request time
    admin_notes = Column(Text, nullable=True)
    processed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    creator = relationship('AccountModel')
