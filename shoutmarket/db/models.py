"""Declarative base shared by the ORM models"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Model classes live in infrastructure/orm/; importing that package registers
# them on Base.metadata.
