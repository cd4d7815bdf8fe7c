"""
Product database model.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import relationship

from pricebook.database import Base
from pricebook.models.category import _new_id, _utcnow


class Product(Base):
    """Product with a price (or price range) belonging to one category."""

    __tablename__ = "products"
    __table_args__ = (
        Index("idx_product_category_name", "category_id", "name"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False, index=True)
    sku = Column(String, nullable=False, index=True)
    price = Column(Numeric(12, 2), nullable=False)
    price_max = Column(Numeric(12, 2), nullable=True)  # upper bound of a price range
    image_url = Column(Text, nullable=False)  # remote URL or data: URL
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    # Relationships
    category = relationship("Category", back_populates="products")
