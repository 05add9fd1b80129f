"""Catalog ORM Models"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from uuid import uuid4

from ...db.models import Base


class ShoutoutTypeModel(Base):
    __tablename__ = 'shoutout_types'

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class CreatorShoutoutModel(Base):
    __tablename__ = 'creator_shoutouts'

    id = Column(Uuid, primary_key=True, default=uuid4)
    creator_id = Column(Uuid, ForeignKey('accounts.id'), nullable=False, index=True)
    shoutout_type_id = Column(Uuid, ForeignKey('shoutout_types.id'), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    delivery_time = Column(Integer, nullable=False)  # hours
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    creator = relationship('AccountModel')
    shoutout_type = relationship('ShoutoutTypeModel')
