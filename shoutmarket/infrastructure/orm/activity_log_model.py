"""Activity log and site settings ORM Models"""

from sqlalchemy import Column, DateTime, JSON, String, Text, Uuid
from sqlalchemy.sql import func
from uuid import uuid4

from ...db.models import Base


class ActivityLogModel(Base):
    __tablename__ = 'activity_logs'

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_type = Column(String(20), nullable=False, index=True)
    user_id = Column(Uuid, nullable=True, index=True)  # no FK: entries outlive accounts
    action = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    # "metadata" is reserved on declarative classes
    details = Column('metadata', JSON, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)


class SiteSettingModel(Base):
    __tablename__ = 'site_settings'

    id = Column(Uuid, primary_key=True, default=uuid4)
    key = Column(String(100), unique=True, nullable=False)
    value = Column(Text, nullable=False)
    type = Column(String(20), default='string', nullable=False)
    description = Column(Text, nullable=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
