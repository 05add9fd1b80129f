"""Order ORM Model"""

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from uuid import uuid4

from ...db.models import Base
from ...domain.enums import OrderStatus, PaymentStatus


class OrderModel(Base):
    __tablename__ = 'orders'

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    user_id = Column(Uuid, ForeignKey('accounts.id'), nullable=False, index=True)
    creator_id = Column(Uuid, ForeignKey('accounts.id'), nullable=False, index=True)
    shoutout_id = Column(Uuid, ForeignKey('creator_shoutouts.id'), nullable=False)

    order_number = Column(String(20), unique=True, nullable=False, index=True)
    instructions = Column(Text, nullable=True)

    # Money, snapshotted at creation
    price = Column(Numeric(10, 2), nullable=False)
    commission_rate = Column(Numeric(5, 2), nullable=False)
    commission_amount = Column(Numeric(10, 2), nullable=False)
    creator_earnings = Column(Numeric(10, 2), nullable=False)

    status = Column(String(20), default=OrderStatus.PENDING.value, nullable=False, index=True)
    payment_status = Column(String(20), default=PaymentStatus.PENDING.value, nullable=False, index=True)
    payment_id = Column(String, nullable=True, index=True)

    delivery_file = Column(String, nullable=True)  # storage key
    creator_message = Column(Text, nullable=True)
    user_response = Column(Text, nullable=True)

    accepted_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship('AccountModel', foreign_keys=[user_id])
    creator = relationship('AccountModel', foreign_keys=[creator_id])
    shoutout = relationship('CreatorShoutoutModel')
