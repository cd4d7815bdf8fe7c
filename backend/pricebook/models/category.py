"""
Category database model.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from pricebook.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """Category grouping zero or more products."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False, unique=True, index=True)
    icon = Column(String, nullable=False, default="shopping-bag")  # backpack / shopping-bag / briefcase
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    # Relationships
    products = relationship("Product", back_populates="category")
